# =============================================================================
# client/manager.py - Contact Manager
# =============================================================================
# Ties the contact list, the form and the API client together.
#
# Flow:
# 1. load() on mount fetches the full list
# 2. submit() validates locally, sends POST (creating) or PUT (editing),
#    then resets the form and refetches the full list
# 3. delete(id) sends DELETE, then refetches
#
# The list is never patched locally; after every successful mutation it is
# replaced by a fresh GET. Failures land in last_error (or on the form) and
# nothing raises.
# =============================================================================

from __future__ import annotations

import logging

from client.api import ApiResult, ContactsApiClient
from client.form import ContactForm, FormMode
from core.models.contact import Contact

logger = logging.getLogger(__name__)


class ContactManager:
    """
    Client-side state for the contact editor.

    Attributes:
        contacts: Last fetched list
        form: The create/edit form
        last_error: Message from the most recent failed call, if any
    """

    def __init__(self, api: ContactsApiClient, form: ContactForm | None = None):
        self.api = api
        self.form = form or ContactForm()
        self.contacts: list[Contact] = []
        self.last_error: str | None = None

    async def load(self) -> bool:
        """Fetch the full list. Keeps the previous list on failure."""
        result = await self.api.list_contacts()
        if not result.ok:
            self._record_failure("load contacts", result)
            return False

        self.contacts = result.data
        self.last_error = None
        return True

    async def submit(self) -> bool:
        """
        Validate and send the form.

        Returns:
            True if the contact was saved (form reset, list refetched)
        """
        if not self.form.validate():
            return False

        payload = self.form.payload()
        if self.form.mode is FormMode.EDITING:
            result = await self.api.update_contact(self.form.editing_id, payload)
        else:
            result = await self.api.create_contact(payload)

        if not result.ok:
            if result.is_validation_error:
                self.form.apply_server_error(result.error, result.field)
            self._record_failure("save contact", result)
            return False

        self.form.reset()
        self.last_error = None
        await self.load()
        return True

    async def delete(self, contact_id: int) -> bool:
        """Delete a contact and refetch. Returns True on success."""
        result = await self.api.delete_contact(contact_id)
        if not result.ok:
            self._record_failure("delete contact", result)
            return False

        if self.form.editing_id == contact_id:
            self.form.reset()
        self.last_error = None
        await self.load()
        return True

    def edit(self, contact_id: int) -> bool:
        """Enter edit mode for a listed contact. Returns False if it isn't listed."""
        for contact in self.contacts:
            if contact.id == contact_id:
                self.form.start_edit(contact)
                return True
        self.last_error = f"Contact {contact_id} is not in the list"
        return False

    def cancel_edit(self) -> None:
        self.form.reset()

    def _record_failure(self, action: str, result: ApiResult) -> None:
        self.last_error = result.error
        logger.warning(f"Could not {action}: {result.error}")
