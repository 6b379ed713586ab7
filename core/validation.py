# =============================================================================
# core/validation.py - Contact Validation Rules
# =============================================================================
# The one place where contact field constraints live. Both the API (create
# and update) and the client form (per keystroke, on blur, on submit) use
# these rules, so a value accepted by one side is accepted by the other.
#
# Usage:
#   from core.validation import decode_contact, ContactDecodeError
#   contact = decode_contact({"firstName": "Ada", ...})
#
# Field order matters: when several fields fail, the first failing rule in
# FIELD_ORDER is the one reported.
# =============================================================================

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError


FIELD_ORDER = ("firstName", "lastName", "email", "phoneNumber", "age")

FIELD_LABELS = {
    "firstName": "First name",
    "lastName": "Last name",
    "email": "Email",
    "phoneNumber": "Phone number",
    "age": "Age",
}

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# ASCII digits, optionally signed, with an all-zero fraction ("30", "30.0")
AGE_TEXT_PATTERN = re.compile(r"^[+-]?[0-9]+(\.0*)?$")

BODY_NOT_OBJECT_MESSAGE = "Request body must be a JSON object"


# =============================================================================
# Rules
# =============================================================================

@dataclass(frozen=True)
class ContactRules:
    """
    Tunable limits for contact fields.

    The age upper bound is inclusive by default (1 <= age <= 130). Setting
    age_max_inclusive=False rejects age_max itself.
    """

    min_name_length: int = 2
    min_phone_length: int = 10
    age_min: int = 1
    age_max: int = 130
    age_max_inclusive: bool = True

    @property
    def phone_pattern(self) -> re.Pattern:
        """Optional leading '+', then at least min_phone_length ASCII digits, spaces or dashes."""
        return re.compile(rf"^\+?[0-9 -]{{{self.min_phone_length},}}$")

    def age_in_range(self, age: int) -> bool:
        if age < self.age_min:
            return False
        if self.age_max_inclusive:
            return age <= self.age_max
        return age < self.age_max

    @property
    def age_range_message(self) -> str:
        if self.age_max_inclusive:
            return f"Age must be between {self.age_min} and {self.age_max}"
        return f"Age must be at least {self.age_min} and less than {self.age_max}"


DEFAULT_RULES = ContactRules()


class ContactDecodeError(Exception):
    """
    Raised when a payload cannot be turned into a valid contact.

    Attributes:
        field: Wire name of the failing field, or None for body-level errors
        message: Human-readable message for the first failing rule
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field


# =============================================================================
# Field Rules
# =============================================================================
# Each clean_* function coerces one raw value and either returns the clean
# value or raises PydanticCustomError carrying the user-facing message.

def _fail(message: str) -> PydanticCustomError:
    return PydanticCustomError("contact_field", message)


def _coerce_text(value: Any, label: str) -> str:
    if value is None:
        raise _fail(f"{label} is required")
    if isinstance(value, (dict, list, tuple, set)):
        raise _fail(f"{label} must be text")
    text = str(value).strip()
    if not text:
        raise _fail(f"{label} is required")
    return text


def clean_name(value: Any, label: str, rules: ContactRules = DEFAULT_RULES) -> str:
    text = _coerce_text(value, label)
    if len(text) < rules.min_name_length:
        raise _fail(f"{label} must be at least {rules.min_name_length} characters")
    return text


def clean_email(value: Any, rules: ContactRules = DEFAULT_RULES) -> str:
    text = _coerce_text(value, FIELD_LABELS["email"])
    if not EMAIL_PATTERN.match(text):
        raise _fail("Email must be a valid email address")
    return text


def clean_phone_number(value: Any, rules: ContactRules = DEFAULT_RULES) -> str:
    text = _coerce_text(value, FIELD_LABELS["phoneNumber"])
    if not rules.phone_pattern.match(text):
        raise _fail(
            f"Phone number must be at least {rules.min_phone_length} characters "
            "and contain only digits, spaces or dashes"
        )
    return text


def clean_age(value: Any, rules: ContactRules = DEFAULT_RULES) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise _fail("Age is required")
    # bool is an int subclass; True is not an age
    if isinstance(value, bool):
        raise _fail("Age must be a whole number")

    if isinstance(value, str):
        text = value.strip()
        if not AGE_TEXT_PATTERN.match(text):
            raise _fail("Age must be a whole number")
        number: int | float = int(text.split(".")[0])
    elif isinstance(value, (int, float)):
        number = value
    else:
        raise _fail("Age must be a whole number")

    if isinstance(number, float):
        if not number.is_integer():
            raise _fail("Age must be a whole number")
        number = int(number)

    if not rules.age_in_range(number):
        raise _fail(rules.age_range_message)
    return number


def _rules_from(info: ValidationInfo) -> ContactRules:
    context = info.context or {}
    return context.get("rules", DEFAULT_RULES)


# =============================================================================
# Decoded Contact
# =============================================================================

class ContactInput(BaseModel):
    """
    A contact payload that passed every rule.

    Build it through decode_contact() so the configured ContactRules are
    applied; unknown keys (including a client-supplied "id") are ignored.
    """

    firstName: str
    lastName: str
    email: str
    phoneNumber: str
    age: int

    model_config = ConfigDict(extra="ignore", frozen=True)

    @field_validator("firstName", "lastName", mode="before")
    @classmethod
    def _check_name(cls, value: Any, info: ValidationInfo) -> str:
        return clean_name(value, FIELD_LABELS[info.field_name], _rules_from(info))

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any, info: ValidationInfo) -> str:
        return clean_email(value, _rules_from(info))

    @field_validator("phoneNumber", mode="before")
    @classmethod
    def _check_phone_number(cls, value: Any, info: ValidationInfo) -> str:
        return clean_phone_number(value, _rules_from(info))

    @field_validator("age", mode="before")
    @classmethod
    def _check_age(cls, value: Any, info: ValidationInfo) -> int:
        return clean_age(value, _rules_from(info))


# =============================================================================
# Public API
# =============================================================================

def _error_messages(exc: ValidationError) -> dict[str, str]:
    """Map each failing field to its message, preserving field order."""
    messages: dict[str, str] = {}
    for error in exc.errors():
        field = str(error["loc"][0]) if error["loc"] else None
        if field is None or field in messages:
            continue
        if error["type"] == "missing":
            messages[field] = f"{FIELD_LABELS.get(field, field)} is required"
        else:
            messages[field] = error["msg"]
    return {name: messages[name] for name in FIELD_ORDER if name in messages}


def parse_json_body(raw: bytes | str) -> Any:
    """Parse a request body, turning malformed JSON into a decode error."""
    try:
        return json.loads(raw or b"null")
    except ValueError:
        raise ContactDecodeError(BODY_NOT_OBJECT_MESSAGE)


def decode_contact(payload: Any, rules: ContactRules = DEFAULT_RULES) -> ContactInput:
    """
    Decode a raw payload into a ContactInput.

    Args:
        payload: Parsed JSON body (expected to be a dict with camelCase keys)
        rules: Limits to apply (defaults to the standard contact rules)

    Returns:
        ContactInput with coerced values

    Raises:
        ContactDecodeError: With the first failing rule's message
    """
    if not isinstance(payload, dict):
        raise ContactDecodeError(BODY_NOT_OBJECT_MESSAGE)

    try:
        return ContactInput.model_validate(payload, context={"rules": rules})
    except ValidationError as e:
        field, message = next(iter(_error_messages(e).items()))
        raise ContactDecodeError(message, field=field)


def validate_contact(payload: dict[str, Any], rules: ContactRules = DEFAULT_RULES) -> dict[str, str]:
    """
    Check every field of a payload.

    Returns:
        Mapping of field name -> message for each failing field; empty when valid
    """
    try:
        ContactInput.model_validate(payload, context={"rules": rules})
    except ValidationError as e:
        return _error_messages(e)
    return {}


def validate_field(name: str, value: Any, rules: ContactRules = DEFAULT_RULES) -> str | None:
    """
    Check a single field in isolation (per keystroke or on blur).

    Returns:
        The error message, or None when the value is acceptable
    """
    try:
        if name in ("firstName", "lastName"):
            clean_name(value, FIELD_LABELS[name], rules)
        elif name == "email":
            clean_email(value, rules)
        elif name == "phoneNumber":
            clean_phone_number(value, rules)
        elif name == "age":
            clean_age(value, rules)
        else:
            raise KeyError(f"Unknown contact field: {name}")
    except PydanticCustomError as e:
        return e.message()
    return None
