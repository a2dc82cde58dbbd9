"""
Entity Web API client.

Thin async wrapper over the store's OData endpoints: list, retrieve,
create, update, delete and metadata reads. Paths are addressed by entity
set name; translating logical names is the adapter's job.

Dependencies: httpx, recordaccess.configs, recordaccess.core.exceptions
System role: HTTP boundary to the remote record store
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

import httpx

from recordaccess.configs.webapi import WebApiSettings
from recordaccess.core.exceptions import BackendUnavailable, RemoteOperationFailed
from recordaccess.models.record import strip_braces

logger = logging.getLogger(__name__)

_ENTITY_ID_PATTERN = re.compile(r"\(([^()]+)\)\s*$")

ODATA_HEADERS = {
    "Accept": "application/json",
    "OData-MaxVersion": "4.0",
    "OData-Version": "4.0",
}


def _error_message(response: httpx.Response) -> str:
    """Pull the store's error message out of an OData error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return response.text or response.reason_phrase


class WebApiClient:
    """
    Async client for the remote entity store.

    Non-2xx responses raise RemoteOperationFailed with the store's message
    and status code. Transport errors (httpx.HTTPError) propagate as-is.
    """

    def __init__(
        self,
        service_root: str,
        access_token: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Web API client.

        Args:
            service_root: e.g. https://contoso.crm.dynamics.com/api/data/v9.2/
            access_token: Optional bearer token
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        headers = dict(ODATA_HEADERS)
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._http = httpx.AsyncClient(
            base_url=service_root,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: WebApiSettings) -> "WebApiClient":
        """
        Build a client from WEBAPI_* settings.

        Raises:
            BackendUnavailable: If no base URL is configured
        """
        if not settings.service_root:
            raise BackendUnavailable("WEBAPI_BASE_URL is not configured")
        return cls(
            service_root=settings.service_root,
            access_token=settings.access_token,
            timeout=settings.timeout_seconds,
        )

    async def _request(
        self,
        method: str,
        url: str,
        params: Mapping[str, str] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        # httpx encodes parameter values; filters may contain & + # literally
        response = await self._http.request(
            method, url, params=dict(params) if params else None, json=json, headers=headers
        )
        if response.is_success:
            return response
        message = _error_message(response)
        logger.warning(f"{__name__}:_request - {method} {url} failed with {response.status_code}: {message}")
        raise RemoteOperationFailed(message, status_code=response.status_code)

    async def get_json(self, path: str, params: Mapping[str, str] | None = None) -> dict[str, Any]:
        """GET a path with OData query parameters and return the decoded JSON body."""
        response = await self._request("GET", path, params=params)
        return response.json()

    async def retrieve_multiple(
        self, entity_set: str, params: Mapping[str, str] | None = None
    ) -> list[dict[str, Any]]:
        """
        List records of an entity set.

        Returns:
            list[dict]: The 'value' array, without the OData envelope
        """
        body = await self.get_json(entity_set, params)
        return list(body.get("value", []))

    async def retrieve(
        self, entity_set: str, record_id: str, params: Mapping[str, str] | None = None
    ) -> dict[str, Any] | None:
        """Retrieve one record; None when the store answers 404."""
        try:
            return await self.get_json(f"{entity_set}({strip_braces(record_id)})", params)
        except RemoteOperationFailed as e:
            if e.status_code == 404:
                return None
            raise

    async def create(self, entity_set: str, payload: dict[str, Any]) -> dict[str, Any]:
        """
        Create a record.

        Returns:
            dict: The returned representation when the store sends one,
                otherwise {"id": <new id>} parsed from OData-EntityId
        """
        response = await self._request("POST", entity_set, json=payload)
        if response.content:
            return response.json()
        entity_id = response.headers.get("OData-EntityId", "")
        match = _ENTITY_ID_PATTERN.search(entity_id)
        return {"id": match.group(1) if match else None}

    async def update(self, entity_set: str, record_id: str, payload: dict[str, Any]) -> None:
        # If-Match: * keeps PATCH from upserting a record that does not exist
        await self._request(
            "PATCH",
            f"{entity_set}({strip_braces(record_id)})",
            json=payload,
            headers={"If-Match": "*"},
        )

    async def delete(self, entity_set: str, record_id: str) -> None:
        await self._request("DELETE", f"{entity_set}({strip_braces(record_id)})")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "WebApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
