# =============================================================================
# core/services/contact_service.py - Contact Business Logic
# =============================================================================
# Handles contact CRUD operations against the contacts table.
# Each operation runs exactly one SQL statement. Separates HTTP concerns
# from database logic.
# =============================================================================

import logging

from lib.database import ContactDatabase
from core.models.contact import Contact
from core.validation import ContactInput

logger = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value; no stored id lies outside this range
SQLITE_MIN_ID = -(2 ** 63)
SQLITE_MAX_ID = 2 ** 63 - 1


def _is_storable_id(contact_id: int) -> bool:
    return SQLITE_MIN_ID <= contact_id <= SQLITE_MAX_ID


class ContactService:
    """
    Service for contact operations.

    Provides a clean interface between API routes and the database.
    Payloads are expected to be decoded (and so validated) already.
    """

    @staticmethod
    async def list_contacts(database: ContactDatabase) -> list[Contact]:
        """
        Fetch every contact in natural storage order.

        Raises:
            Exception: Storage errors propagate unchanged
        """
        conn = await database.get_connection()
        async with conn.execute(
            "SELECT id, firstName, lastName, email, phoneNumber, age FROM contacts"
        ) as cursor:
            rows = await cursor.fetchall()

        logger.debug(f"Fetched {len(rows)} contacts")
        return [Contact.from_row(row) for row in rows]

    @staticmethod
    async def get_contact(database: ContactDatabase, contact_id: int) -> Contact | None:
        """
        Fetch one contact.

        Returns:
            The contact, or None if no row has this id
        """
        if not _is_storable_id(contact_id):
            return None

        conn = await database.get_connection()
        async with conn.execute(
            "SELECT id, firstName, lastName, email, phoneNumber, age FROM contacts WHERE id = ?",
            (contact_id,),
        ) as cursor:
            row = await cursor.fetchone()

        return Contact.from_row(row) if row else None

    @staticmethod
    async def create_contact(database: ContactDatabase, contact: ContactInput) -> Contact:
        """
        Insert a contact.

        Args:
            database: Storage accessor
            contact: Decoded payload

        Returns:
            The stored contact including its assigned id
        """
        conn = await database.get_connection()
        cursor = await conn.execute(
            "INSERT INTO contacts (firstName, lastName, email, phoneNumber, age) VALUES (?, ?, ?, ?, ?)",
            (contact.firstName, contact.lastName, contact.email, contact.phoneNumber, contact.age),
        )
        contact_id = cursor.lastrowid
        await cursor.close()
        await conn.commit()

        logger.info(f"Created contact: {contact_id}")
        return Contact.from_input(contact_id, contact)

    @staticmethod
    async def update_contact(database: ContactDatabase, contact_id: int, contact: ContactInput) -> Contact:
        """
        Overwrite every field of a contact.

        Updating an id that doesn't exist changes nothing and is not an
        error. The returned contact is built from the arguments, not read
        back from storage.
        """
        if not _is_storable_id(contact_id):
            logger.debug(f"Update matched no contact: {contact_id}")
            return Contact.from_input(contact_id, contact)

        conn = await database.get_connection()
        cursor = await conn.execute(
            "UPDATE contacts SET firstName = ?, lastName = ?, email = ?, phoneNumber = ?, age = ? WHERE id = ?",
            (contact.firstName, contact.lastName, contact.email, contact.phoneNumber, contact.age, contact_id),
        )
        updated = cursor.rowcount
        await cursor.close()
        await conn.commit()

        if updated:
            logger.info(f"Updated contact: {contact_id}")
        else:
            logger.debug(f"Update matched no contact: {contact_id}")
        return Contact.from_input(contact_id, contact)

    @staticmethod
    async def delete_contact(database: ContactDatabase, contact_id: int) -> bool:
        """
        Remove a contact.

        Returns:
            True if a row was removed, False if the id didn't exist
        """
        if not _is_storable_id(contact_id):
            return False

        conn = await database.get_connection()
        cursor = await conn.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
        deleted = cursor.rowcount > 0
        await cursor.close()
        await conn.commit()

        if deleted:
            logger.info(f"Deleted contact: {contact_id}")
        return deleted
