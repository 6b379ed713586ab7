# =============================================================================
# client/ - Contact Manager Client
# =============================================================================
# This package contains the client side of the contact manager:
# - api.py: Async HTTP client returning ApiResult values
# - form.py: Form values, errors and create/edit mode
# - manager.py: List + form + API glue (load, submit, delete, edit)
#
# The client only depends on the API's HTTP contract and on
# core.validation for the shared field rules.
# =============================================================================

from client.api import ApiResult, ContactsApiClient
from client.form import ContactForm, FormMode, ValidationTrigger
from client.manager import ContactManager

__all__ = [
    "ApiResult",
    "ContactsApiClient",
    "ContactForm",
    "FormMode",
    "ValidationTrigger",
    "ContactManager",
]
