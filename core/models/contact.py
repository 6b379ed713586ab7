# =============================================================================
# core/models/contact.py - Contact Schemas
# =============================================================================
# These models define the API contract for contact operations:
# - Contact: A stored contact, as returned by list/get/create
# - ContactUpdateResponse: Body returned by update (path id + submitted fields)
#
# Incoming payloads are NOT modelled here. They go through
# core.validation.decode_contact(), which owns every field rule.
# =============================================================================

from typing import Any, Mapping

from pydantic import BaseModel, Field

from core.validation import ContactInput


class Contact(BaseModel):
    """
    A contact as stored in the contacts table.

    Values are not re-validated on the way out: a row written under one
    set of rules is still returned if the rules are later tightened.

    Example:
        {
            "id": 1,
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@x.com",
            "phoneNumber": "1234567890",
            "age": 30
        }
    """

    id: int = Field(..., description="Storage-assigned identifier")
    firstName: str = Field(..., description="Given name")
    lastName: str = Field(..., description="Family name")
    email: str = Field(..., description="Email address")
    phoneNumber: str = Field(..., description="Phone number (digits, spaces, dashes, optional leading +)")
    age: int = Field(..., description="Age in years")

    model_config = {"from_attributes": True}

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Contact":
        """Build a Contact from a database row (aiosqlite.Row or dict)."""
        return cls(
            id=row["id"],
            firstName=row["firstName"],
            lastName=row["lastName"],
            email=row["email"],
            phoneNumber=row["phoneNumber"],
            age=row["age"],
        )

    @classmethod
    def from_input(cls, contact_id: int, contact: ContactInput) -> "Contact":
        """Attach an id to a decoded payload."""
        return cls(id=contact_id, **contact.model_dump())


class ContactUpdateResponse(Contact):
    """
    Body returned by PUT /contacts/{id}.

    Echoes the path id and the submitted fields; the row is not read
    back, so this does not confirm the id existed.
    """
