# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - contact.py: Contact response schemas
#
# These models define the "contract" between API and clients.
# Request payload rules live in core/validation.py.
# =============================================================================

from .contact import (
    Contact,
    ContactUpdateResponse,
)

__all__ = [
    "Contact",
    "ContactUpdateResponse",
]
