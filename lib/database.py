# =============================================================================
# lib/database.py - Contacts Storage Accessor
# =============================================================================
# Owns the single SQLite connection used by the API.
#
# The connection is opened lazily on first use and the contacts table is
# created if missing. An asyncio.Lock guards the first open so concurrent
# first callers share one connection and the schema bootstrap runs once.
#
# Usage:
#   database = ContactDatabase("./contacts.db")
#   conn = await database.get_connection()
#   async with conn.execute("SELECT * FROM contacts") as cursor: ...
#   await database.close()
# =============================================================================

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

CONTACTS_SCHEMA = """
    CREATE TABLE IF NOT EXISTS contacts (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        firstName TEXT NOT NULL,
        lastName TEXT NOT NULL,
        email TEXT NOT NULL,
        phoneNumber TEXT NOT NULL,
        age INTEGER NOT NULL
    )
"""


class DatabaseError(Exception):
    """
    Error opening or bootstrapping the contacts database.
    """

    def __init__(
        self,
        message: str,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = self.message
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class ContactDatabase:
    """
    Process-wide handle to the contacts table.

    One instance is created per application and injected into request
    handlers. There is no pooling: SQLite's own locking is the only
    concurrency control.
    """

    def __init__(self, path: str | Path):
        self.path = str(path)
        self._connection: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    async def get_connection(self) -> aiosqlite.Connection:
        """
        Get or open the connection, creating the contacts table if absent.

        Repeated calls return the same connection.

        Raises:
            DatabaseError: If the file cannot be opened or the schema created
        """
        if self._connection is not None:
            return self._connection

        async with self._lock:
            if self._connection is None:
                self._connection = await self._open()
        return self._connection

    async def _open(self) -> aiosqlite.Connection:
        if self.path != MEMORY_DATABASE:
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        try:
            conn = await aiosqlite.connect(self.path)
        except Exception as e:
            raise DatabaseError(
                message=f"Failed to open contacts database: {e}",
                suggestion="Check DATABASE_PATH points to a writable location",
                details={"path": self.path},
            )

        try:
            conn.row_factory = aiosqlite.Row
            await conn.execute(CONTACTS_SCHEMA)
            await conn.commit()
        except Exception as e:
            await conn.close()
            raise DatabaseError(
                message=f"Failed to create contacts table: {e}",
                details={"path": self.path},
            )

        logger.info(f"Opened contacts database at {self.path}")
        return conn

    async def close(self) -> None:
        """Close the connection if open. A later get_connection() reopens it."""
        async with self._lock:
            if self._connection is not None:
                await self._connection.close()
                self._connection = None
                logger.info(f"Closed contacts database at {self.path}")
