# =============================================================================
# app/routers/contacts.py - Contact CRUD Endpoints
# =============================================================================
# Maps the four contact operations (plus a single-contact read) onto HTTP.
# Create and update decode the raw body through core.validation, so a
# rule violation becomes 400 {"error": "..."} with the first failing rule.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Request, Response, status

from app.dependencies import DatabaseDep, SettingsDep
from app.exceptions import ContactNotFoundError, ContactValidationError
from core.models.contact import Contact, ContactUpdateResponse
from core.services.contact_service import ContactService
from core.validation import ContactDecodeError, ContactInput, ContactRules, decode_contact, parse_json_body

router = APIRouter()

ContactId = Annotated[int, Path(description="Contact identifier")]


async def _decode_body(request: Request, rules: ContactRules) -> ContactInput:
    """Read and decode a contact payload, raising ContactValidationError on failure."""
    try:
        return decode_contact(parse_json_body(await request.body()), rules)
    except ContactDecodeError as e:
        raise ContactValidationError(e.message, field=e.field)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Contact])
async def list_contacts(database: DatabaseDep):
    """
    List all contacts.

    Returns every stored contact in natural storage order.
    """
    return await ContactService.list_contacts(database)


@router.get("/{contact_id}", response_model=Contact)
async def get_contact(contact_id: ContactId, database: DatabaseDep):
    """
    Get one contact.

    Returns 404 if no contact has this id.
    """
    contact = await ContactService.get_contact(database, contact_id)
    if contact is None:
        raise ContactNotFoundError(contact_id)
    return contact


@router.post(
    "",
    response_model=Contact,
    status_code=status.HTTP_201_CREATED,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {
                    "example": {
                        "firstName": "Ada",
                        "lastName": "Lovelace",
                        "email": "ada@x.com",
                        "phoneNumber": "1234567890",
                        "age": 30,
                    }
                }
            },
        }
    },
)
async def create_contact(request: Request, database: DatabaseDep, app_settings: SettingsDep):
    """
    Create a contact.

    The body is validated before anything is written. Returns the stored
    contact with its assigned id.
    """
    contact = await _decode_body(request, app_settings.contact_rules)
    return await ContactService.create_contact(database, contact)


@router.put("/{contact_id}", response_model=ContactUpdateResponse)
async def update_contact(
    contact_id: ContactId,
    request: Request,
    database: DatabaseDep,
    app_settings: SettingsDep,
):
    """
    Replace every field of a contact.

    Updating an id that doesn't exist is a no-op and still returns 200
    with the submitted fields.
    """
    contact = await _decode_body(request, app_settings.contact_rules)
    updated = await ContactService.update_contact(database, contact_id, contact)
    return ContactUpdateResponse(**updated.model_dump())


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(contact_id: ContactId, database: DatabaseDep):
    """
    Delete a contact.

    Returns 204 whether or not the contact existed.
    """
    await ContactService.delete_contact(database, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
