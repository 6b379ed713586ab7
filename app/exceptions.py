# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Error bodies carry an "error" key with a human-readable message; field
# rule violations also name the failing "field".
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class ContactsException(Exception):
    """
    Base exception for the Contacts API.

    All custom exceptions inherit from this class.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Contact Exceptions
# =============================================================================

class ContactValidationError(ContactsException):
    """Raised when a create/update payload breaks a field rule."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message=message, status_code=400)
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        # Only the first failing rule is reported
        result: dict[str, Any] = {"error": self.message}
        if self.field:
            result["field"] = self.field
        return result


class ContactNotFoundError(ContactsException):
    """Raised when a contact ID doesn't exist."""

    def __init__(self, contact_id: int):
        super().__init__(
            message=f"Contact not found: {contact_id}",
            status_code=404,
            details={"contact_id": contact_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def contacts_exception_handler(
    request: Request,
    exc: ContactsException
) -> JSONResponse:
    """Convert ContactsException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors (e.g. a non-integer path id).
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "errors": [
                {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
                for error in exc.errors()
            ],
        }
    )
