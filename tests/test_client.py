# =============================================================================
# tests/test_client.py - Client Application Tests
# =============================================================================
# Tests for the client package:
# - ContactForm: modes, validation triggers, reset
# - ContactsApiClient: ApiResult mapping (success, 400 with field, transport failure)
# - ContactManager: load/submit/edit/delete against the real app in-process
#
# The API is reached through httpx.ASGITransport (no network) or
# httpx.MockTransport for canned responses.
# =============================================================================

import asyncio

import httpx
import pytest

from app.config import Settings
from app.main import create_app
from client.api import ApiResult, ContactsApiClient
from client.form import ContactForm, FormMode, ValidationTrigger
from client.manager import ContactManager
from core.models.contact import Contact
from core.validation import ContactRules


def run_against_app(app, scenario):
    """Run scenario(manager) with a manager talking to `app` in-process."""
    async def runner():
        api = ContactsApiClient("http://testserver", transport=httpx.ASGITransport(app=app))
        try:
            return await scenario(ContactManager(api))
        finally:
            await api.aclose()
            await app.state.database.close()

    return asyncio.run(runner())


def run_with_handler(handler, scenario):
    """Run scenario(api) with every request answered by `handler`."""
    async def runner():
        async with ContactsApiClient("http://testserver", transport=httpx.MockTransport(handler)) as api:
            return await scenario(api)

    return asyncio.run(runner())


def fill(form: ContactForm, values: dict):
    for name, value in values.items():
        form.set_field(name, value)


# =============================================================================
# ContactForm
# =============================================================================

class TestContactForm:
    """Tests for the form state machine."""

    def test_starts_creating(self):
        form = ContactForm()

        assert form.mode is FormMode.CREATING
        assert form.submit_label == "Add Contact"
        assert form.values["age"] == 0

    def test_start_edit_prepopulates(self, ada):
        form = ContactForm()

        form.start_edit(Contact(id=7, **ada))

        assert form.mode is FormMode.EDITING
        assert form.editing_id == 7
        assert form.submit_label == "Update Contact"
        assert form.payload() == ada

    def test_reset_returns_to_creating(self, ada):
        form = ContactForm()
        form.start_edit(Contact(id=7, **ada))

        form.reset()

        assert form.mode is FormMode.CREATING
        assert form.payload()["firstName"] == ""

    def test_on_change_checks_each_keystroke(self):
        form = ContactForm(trigger=ValidationTrigger.ON_CHANGE)

        form.set_field("firstName", "A")
        assert form.errors["firstName"] == "First name must be at least 2 characters"

        form.set_field("firstName", "Ad")
        assert "firstName" not in form.errors

    def test_on_blur_waits_for_blur(self):
        form = ContactForm(trigger=ValidationTrigger.ON_BLUR)

        form.set_field("email", "nope")
        assert form.errors == {}

        form.blur("email")
        assert form.errors["email"] == "Email must be a valid email address"

        # Once touched, changes are checked immediately
        form.set_field("email", "a@b.co")
        assert "email" not in form.errors

    def test_on_submit_waits_for_validate(self):
        form = ContactForm(trigger=ValidationTrigger.ON_SUBMIT)

        form.set_field("age", 500)
        form.blur("age")
        assert form.errors == {}

        assert not form.validate()
        assert form.errors["age"] == "Age must be between 1 and 130"

    @pytest.mark.parametrize("trigger", list(ValidationTrigger))
    def test_same_rules_for_every_trigger(self, trigger, ada):
        form = ContactForm(trigger=trigger)
        fill(form, {**ada, "phoneNumber": "123"})

        assert not form.validate()
        assert list(form.errors) == ["phoneNumber"]

    def test_custom_rules(self, ada):
        form = ContactForm(rules=ContactRules(age_max_inclusive=False))
        fill(form, {**ada, "age": 130})

        assert not form.validate()

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            ContactForm().set_field("nickname", "Ada")


# =============================================================================
# ContactsApiClient
# =============================================================================

class TestContactsApiClient:
    """Tests for ApiResult mapping."""

    def test_list_success(self, ada):
        def handler(request):
            return httpx.Response(200, json=[{"id": 1, **ada}])

        result = run_with_handler(handler, lambda api: api.list_contacts())

        assert result.ok
        assert result.data == [Contact(id=1, **ada)]

    def test_validation_error(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Email must be a valid email address", "field": "email"})

        result = run_with_handler(handler, lambda api: api.create_contact({}))

        assert not result.ok
        assert result.is_validation_error
        assert result.error == "Email must be a valid email address"
        assert result.field == "email"

    def test_server_error_without_body(self):
        def handler(request):
            return httpx.Response(500, text="")

        result = run_with_handler(handler, lambda api: api.list_contacts())

        assert not result.ok
        assert result.status_code == 500
        assert result.error == "Request failed with status 500"
        assert result.field is None

    def test_non_json_body(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        result = run_with_handler(handler, lambda api: api.list_contacts())

        assert not result.ok
        assert "Invalid response" in result.error

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = run_with_handler(handler, lambda api: api.delete_contact(1))

        assert result == ApiResult(ok=False, status_code=None, error="Could not reach the contacts API: connection refused")

    def test_delete_has_no_data(self):
        requests = []

        def handler(request):
            requests.append((request.method, request.url.path))
            return httpx.Response(204)

        result = run_with_handler(handler, lambda api: api.delete_contact(3))

        assert result.ok
        assert result.data is None
        assert requests == [("DELETE", "/contacts/3")]


# =============================================================================
# ContactManager
# =============================================================================

class TestContactManager:
    """Tests for load/submit/edit/delete against the real app."""

    def test_create_then_refetch(self, app, ada):
        async def scenario(manager):
            await manager.load()
            fill(manager.form, ada)
            saved = await manager.submit()
            return saved, manager

        saved, manager = run_against_app(app, scenario)

        assert saved
        assert len(manager.contacts) == 1
        assert manager.contacts[0].firstName == "Ada"
        assert manager.form.mode is FormMode.CREATING
        assert manager.form.payload()["firstName"] == ""

    def test_invalid_form_sends_nothing(self, ada):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(201, json={"id": 1, **ada})

        async def scenario(api):
            manager = ContactManager(api)
            fill(manager.form, {**ada, "email": "not-an-email"})
            return await manager.submit(), manager

        saved, manager = run_with_handler(handler, scenario)

        assert not saved
        assert requests == []
        assert manager.form.errors == {"email": "Email must be a valid email address"}

    def test_edit_then_update(self, app, ada, grace):
        async def scenario(manager):
            fill(manager.form, ada)
            await manager.submit()
            contact_id = manager.contacts[0].id

            assert manager.edit(contact_id)
            assert manager.form.mode is FormMode.EDITING
            fill(manager.form, grace)
            saved = await manager.submit()
            return saved, contact_id, manager

        saved, contact_id, manager = run_against_app(app, scenario)

        assert saved
        assert manager.form.mode is FormMode.CREATING
        assert manager.contacts == [Contact(id=contact_id, **grace)]

    def test_edit_unknown_contact(self):
        manager = ContactManager(api=None)

        assert not manager.edit(42)
        assert manager.form.mode is FormMode.CREATING
        assert manager.last_error == "Contact 42 is not in the list"

    def test_delete_then_refetch(self, app, ada, grace):
        async def scenario(manager):
            for payload in (ada, grace):
                fill(manager.form, payload)
                await manager.submit()
            first_id = manager.contacts[0].id
            deleted = await manager.delete(first_id)
            return deleted, manager

        deleted, manager = run_against_app(app, scenario)

        assert deleted
        assert [c.firstName for c in manager.contacts] == ["Grace"]

    def test_delete_while_editing_resets_form(self, app, ada):
        async def scenario(manager):
            fill(manager.form, ada)
            await manager.submit()
            contact_id = manager.contacts[0].id
            manager.edit(contact_id)
            await manager.delete(contact_id)
            return manager

        manager = run_against_app(app, scenario)

        assert manager.contacts == []
        assert manager.form.mode is FormMode.CREATING

    def test_server_rejection_lands_on_field(self, ada):
        def handler(request):
            return httpx.Response(400, json={"error": "Age must be between 1 and 130", "field": "age"})

        async def scenario(api):
            manager = ContactManager(api)
            fill(manager.form, ada)
            return await manager.submit(), manager

        saved, manager = run_with_handler(handler, scenario)

        assert not saved
        assert manager.form.errors == {"age": "Age must be between 1 and 130"}
        assert manager.form.form_error is None

    def test_stricter_server_rules_land_on_field(self, db_path, ada):
        """The form accepts 130 by default; a server with an exclusive bound does not."""
        app = create_app(Settings(DATABASE_PATH=db_path, AGE_MAX_INCLUSIVE=False))

        async def scenario(manager):
            fill(manager.form, {**ada, "age": 130})
            return await manager.submit(), manager

        saved, manager = run_against_app(app, scenario)

        assert not saved
        assert manager.form.errors["age"] == "Age must be at least 1 and less than 130"
        assert manager.contacts == []

    def test_server_rejection_lands_on_form(self, ada):
        """A 400 that names no field is shown above the form."""
        def handler(request):
            return httpx.Response(400, json={"error": "Age must be between 1 and 130"})

        async def scenario(api):
            manager = ContactManager(api)
            fill(manager.form, ada)
            return await manager.submit(), manager

        saved, manager = run_with_handler(handler, scenario)

        assert not saved
        assert manager.form.form_error == "Age must be between 1 and 130"
        assert manager.last_error == "Age must be between 1 and 130"
        # The form keeps its values so the user can fix them
        assert manager.form.payload() == ada

    def test_network_failure_keeps_list(self, ada):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async def scenario(api):
            manager = ContactManager(api)
            manager.contacts = [Contact(id=1, **ada)]
            return await manager.load(), manager

        loaded, manager = run_with_handler(handler, scenario)

        assert not loaded
        assert manager.contacts == [Contact(id=1, **ada)]
        assert manager.last_error.startswith("Could not reach the contacts API")
