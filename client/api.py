# =============================================================================
# client/api.py - Contacts API Client
# =============================================================================
# Async HTTP client for the Contacts API.
#
# Every call returns an ApiResult instead of raising: transport failures,
# non-JSON bodies and 4xx/5xx responses all come back as failed results
# with a message the form can show.
#
# Usage:
#   async with ContactsApiClient("http://localhost:8000") as api:
#       result = await api.list_contacts()
#       if result.ok:
#           print(result.data)
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from core.models.contact import Contact

logger = logging.getLogger(__name__)

CONTACTS_PATH = "/contacts"


@dataclass
class ApiResult:
    """
    Outcome of one API call.

    Attributes:
        ok: True for a 2xx response with a usable body
        status_code: HTTP status, or None when no response arrived
        data: Decoded body on success
        error: Message on failure (server "error" key, or transport error)
        field: Field the server rejected, when a 400 names one
    """
    ok: bool
    status_code: int | None = None
    data: Any = None
    error: str | None = None
    field: str | None = None

    @classmethod
    def success(cls, status_code: int, data: Any = None) -> "ApiResult":
        return cls(ok=True, status_code=status_code, data=data)

    @classmethod
    def failure(cls, error: str, status_code: int | None = None, field: str | None = None) -> "ApiResult":
        return cls(ok=False, status_code=status_code, error=error, field=field)

    @property
    def is_validation_error(self) -> bool:
        """True when the server rejected the payload (400)."""
        return self.status_code == 400


class ContactsApiClient:
    """
    Thin wrapper over httpx.AsyncClient for the five contact endpoints.

    Pass `transport` to route requests somewhere other than the network
    (httpx.ASGITransport for an in-process app, httpx.MockTransport in tests).
    """

    def __init__(
        self,
        base_url: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ContactsApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def list_contacts(self) -> ApiResult:
        """GET /contacts -> data is a list[Contact]."""
        result = await self._request("GET", CONTACTS_PATH)
        if result.ok:
            try:
                result.data = [Contact.model_validate(item) for item in result.data]
            except (TypeError, ValueError) as e:
                return ApiResult.failure(f"Unexpected contact list: {e}", result.status_code)
        return result

    async def get_contact(self, contact_id: int) -> ApiResult:
        """GET /contacts/{id} -> data is a Contact."""
        return await self._contact_request("GET", f"{CONTACTS_PATH}/{contact_id}")

    async def create_contact(self, fields: dict[str, Any]) -> ApiResult:
        """POST /contacts -> data is the stored Contact."""
        return await self._contact_request("POST", CONTACTS_PATH, json=fields)

    async def update_contact(self, contact_id: int, fields: dict[str, Any]) -> ApiResult:
        """PUT /contacts/{id} -> data is the echoed Contact."""
        return await self._contact_request("PUT", f"{CONTACTS_PATH}/{contact_id}", json=fields)

    async def delete_contact(self, contact_id: int) -> ApiResult:
        """DELETE /contacts/{id} -> data is None."""
        return await self._request("DELETE", f"{CONTACTS_PATH}/{contact_id}")

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    async def _contact_request(self, method: str, path: str, **kwargs: Any) -> ApiResult:
        result = await self._request(method, path, **kwargs)
        if result.ok:
            try:
                result.data = Contact.model_validate(result.data)
            except (TypeError, ValueError) as e:
                return ApiResult.failure(f"Unexpected contact: {e}", result.status_code)
        return result

    async def _request(self, method: str, path: str, **kwargs: Any) -> ApiResult:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            return ApiResult.failure(f"Could not reach the contacts API: {e}")

        if response.status_code == 204 or not response.content:
            body = None
        else:
            try:
                body = response.json()
            except ValueError:
                return ApiResult.failure(
                    f"Invalid response from the contacts API (status {response.status_code})",
                    response.status_code,
                )

        if response.is_success:
            return ApiResult.success(response.status_code, body)

        message = body.get("error") if isinstance(body, dict) else None
        field = body.get("field") if isinstance(body, dict) else None
        logger.debug(f"{method} {path} returned {response.status_code}: {message}")
        return ApiResult.failure(
            message or f"Request failed with status {response.status_code}",
            response.status_code,
            field=field if isinstance(field, str) else None,
        )
