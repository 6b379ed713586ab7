# =============================================================================
# tests/test_contact_service.py - ContactService Tests
# =============================================================================
# Tests for the SQL operations behind each endpoint, run against a real
# temporary SQLite file.
# =============================================================================

import asyncio

from core.models.contact import Contact
from core.services.contact_service import ContactService
from core.validation import decode_contact
from lib.database import ContactDatabase


def run_with_database(db_path, scenario):
    """Run an async scenario(database) and close the database afterwards."""
    async def runner():
        database = ContactDatabase(db_path)
        try:
            return await scenario(database)
        finally:
            await database.close()

    return asyncio.run(runner())


class TestContactService:
    """Tests for ContactService."""

    def test_empty_list(self, db_path):
        assert run_with_database(db_path, ContactService.list_contacts) == []

    def test_create_assigns_id(self, db_path, ada):
        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            listed = await ContactService.list_contacts(database)
            return created, listed

        created, listed = run_with_database(db_path, scenario)

        assert isinstance(created, Contact)
        assert created.id >= 1
        assert created.model_dump(exclude={"id"}) == ada
        assert listed == [created]

    def test_ids_are_unique(self, db_path, ada, grace):
        async def scenario(database):
            first = await ContactService.create_contact(database, decode_contact(ada))
            second = await ContactService.create_contact(database, decode_contact(grace))
            return first.id, second.id

        first_id, second_id = run_with_database(db_path, scenario)

        assert first_id != second_id

    def test_list_natural_order(self, db_path, ada, grace):
        async def scenario(database):
            await ContactService.create_contact(database, decode_contact(ada))
            await ContactService.create_contact(database, decode_contact(grace))
            return await ContactService.list_contacts(database)

        listed = run_with_database(db_path, scenario)

        assert [c.firstName for c in listed] == ["Ada", "Grace"]

    def test_get_contact(self, db_path, ada):
        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            found = await ContactService.get_contact(database, created.id)
            missing = await ContactService.get_contact(database, created.id + 100)
            return created, found, missing

        created, found, missing = run_with_database(db_path, scenario)

        assert found == created
        assert missing is None

    def test_update_overwrites_all_fields(self, db_path, ada, grace):
        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            updated = await ContactService.update_contact(database, created.id, decode_contact(grace))
            stored = await ContactService.get_contact(database, created.id)
            return created, updated, stored

        created, updated, stored = run_with_database(db_path, scenario)

        assert updated.id == created.id
        assert updated == stored
        assert stored.model_dump(exclude={"id"}) == grace

    def test_update_missing_id_is_noop(self, db_path, ada, grace):
        """Updating an unknown id echoes the payload and changes nothing."""
        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            echoed = await ContactService.update_contact(database, 999, decode_contact(grace))
            listed = await ContactService.list_contacts(database)
            return created, echoed, listed

        created, echoed, listed = run_with_database(db_path, scenario)

        assert echoed.id == 999
        assert echoed.firstName == "Grace"
        assert listed == [created]

    def test_delete(self, db_path, ada):
        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            first = await ContactService.delete_contact(database, created.id)
            second = await ContactService.delete_contact(database, created.id)
            listed = await ContactService.list_contacts(database)
            return first, second, listed

        first, second, listed = run_with_database(db_path, scenario)

        assert first is True
        assert second is False
        assert listed == []

    def test_ids_beyond_64_bits_match_nothing(self, db_path, ada, grace):
        """Ids SQLite cannot store behave like any other unknown id."""
        huge = 2 ** 64

        async def scenario(database):
            created = await ContactService.create_contact(database, decode_contact(ada))
            fetched = await ContactService.get_contact(database, huge)
            echoed = await ContactService.update_contact(database, -huge, decode_contact(grace))
            deleted = await ContactService.delete_contact(database, huge)
            listed = await ContactService.list_contacts(database)
            return created, fetched, echoed, deleted, listed

        created, fetched, echoed, deleted, listed = run_with_database(db_path, scenario)

        assert fetched is None
        assert echoed.id == -huge
        assert deleted is False
        assert listed == [created]
