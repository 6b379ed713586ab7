# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .contact_service import ContactService

__all__ = [
    "ContactService",
]
