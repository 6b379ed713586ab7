# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Contacts API:
# - test_validation.py: Unit tests for the shared contact rules
# - test_database.py: Tests for the storage accessor
# - test_contact_service.py: SQL operations against a temporary file
# - test_contacts_api.py: End-to-end HTTP tests
# - test_client.py: Form state, API client and manager
#
# Run tests with: pytest
# =============================================================================
