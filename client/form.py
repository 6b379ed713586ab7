# =============================================================================
# client/form.py - Contact Form State
# =============================================================================
# The form behind the contact editor:
#
#   CREATING --start_edit(contact)--> EDITING
#   EDITING  --reset() / successful submit--> CREATING
#
# Field checks come from core.validation, the same rules the API applies.
# ValidationTrigger only decides WHEN an error becomes visible:
# - ON_CHANGE: every set_field() re-checks that field
# - ON_BLUR:   a field is checked once it has been blurred (touched)
# - ON_SUBMIT: nothing shows until validate() runs
# =============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from core.models.contact import Contact
from core.validation import (
    DEFAULT_RULES,
    FIELD_ORDER,
    ContactRules,
    validate_contact,
    validate_field,
)


class FormMode(str, Enum):
    """Whether submitting the form creates a new contact or updates one."""
    CREATING = "creating"
    EDITING = "editing"


class ValidationTrigger(str, Enum):
    """When field errors surface."""
    ON_CHANGE = "on_change"
    ON_BLUR = "on_blur"
    ON_SUBMIT = "on_submit"


def empty_fields() -> dict[str, Any]:
    return {
        "firstName": "",
        "lastName": "",
        "email": "",
        "phoneNumber": "",
        "age": 0,
    }


@dataclass
class ContactForm:
    """
    Form values, visible errors and edit mode.

    `errors` only holds messages the user should currently see; call
    validate() before submitting to check every field.
    """
    rules: ContactRules = DEFAULT_RULES
    trigger: ValidationTrigger = ValidationTrigger.ON_CHANGE
    values: dict[str, Any] = field(default_factory=empty_fields)
    errors: dict[str, str] = field(default_factory=dict)
    touched: set[str] = field(default_factory=set)
    editing_id: int | None = None
    form_error: str | None = None

    @property
    def mode(self) -> FormMode:
        return FormMode.EDITING if self.editing_id is not None else FormMode.CREATING

    @property
    def submit_label(self) -> str:
        return "Update Contact" if self.mode is FormMode.EDITING else "Add Contact"

    def set_field(self, name: str, value: Any) -> None:
        """Record a keystroke/change for one field."""
        if name not in FIELD_ORDER:
            raise KeyError(f"Unknown contact field: {name}")
        self.values[name] = value
        self.form_error = None

        if self.trigger is ValidationTrigger.ON_CHANGE or (
            self.trigger is ValidationTrigger.ON_BLUR and name in self.touched
        ):
            self._check(name)

    def blur(self, name: str) -> None:
        """Mark a field as touched (focus left it)."""
        if name not in FIELD_ORDER:
            raise KeyError(f"Unknown contact field: {name}")
        self.touched.add(name)
        if self.trigger is not ValidationTrigger.ON_SUBMIT:
            self._check(name)

    def validate(self) -> bool:
        """Check every field and show all errors. Returns True when valid."""
        self.errors = validate_contact(self.values, self.rules)
        self.touched.update(FIELD_ORDER)
        return not self.errors

    def start_edit(self, contact: Contact) -> None:
        """Enter edit mode with the form pre-populated from a contact."""
        self.values = {name: getattr(contact, name) for name in FIELD_ORDER}
        self.editing_id = contact.id
        self.errors = {}
        self.touched = set()
        self.form_error = None

    def reset(self) -> None:
        """Clear the form and go back to creating."""
        self.values = empty_fields()
        self.editing_id = None
        self.errors = {}
        self.touched = set()
        self.form_error = None

    def apply_server_error(self, message: str, field_name: str | None = None) -> None:
        """Show an error the server returned for this form."""
        if field_name in FIELD_ORDER:
            self.errors[field_name] = message
        else:
            self.form_error = message

    def payload(self) -> dict[str, Any]:
        """The request body for POST/PUT."""
        return {name: self.values[name] for name in FIELD_ORDER}

    def _check(self, name: str) -> None:
        message = validate_field(name, self.values[name], self.rules)
        if message:
            self.errors[name] = message
        else:
            self.errors.pop(name, None)
