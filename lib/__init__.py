# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - database.py: Storage accessor owning the SQLite connection
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.database import ContactDatabase, DatabaseError

__all__ = [
    "ContactDatabase",
    "DatabaseError",
]
