"""Thin Bitmovin REST client.

Every Bitmovin response is wrapped in an envelope::

    {"requestId": "...", "status": "SUCCESS" | "ERROR", "data": {"result": ..., "message": ...}}

``BitmovinClient`` unwraps ``data.result`` and turns ERROR envelopes and
non-2xx responses into ``RemoteServiceError``. Transport failures are left as
the ``httpx.TransportError`` the transport raised.

API Reference: https://bitmovin.com/docs/encoding/api-reference
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...errors import RemoteServiceError

logger = logging.getLogger(__name__)

# Name the Bitmovin provider is registered under.
NAME = "bitmovin"

DEFAULT_ENDPOINT = "https://api.bitmovin.com/v1/"


class BitmovinClient:
    """Synchronous client bound to one API key."""

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ):
        if not endpoint.endswith("/"):
            endpoint += "/"
        self._http = httpx.Client(
            base_url=endpoint,
            headers={
                "X-Api-Key": api_key,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> BitmovinClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Send a request and return the unwrapped ``data.result``.

        Args:
            operation: Name used in error messages (e.g. "create_audio_config")
            method: HTTP method
            path: Path relative to the endpoint, without a leading slash
            json: Request body
            params: Query parameters

        Raises:
            RemoteServiceError: On an ERROR envelope or a non-2xx status
        """
        response = self._http.request(method, path.lstrip("/"), json=json, params=params)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            if response.is_success:
                raise RemoteServiceError(operation, "response is not a JSON object", response.status_code)
            raise RemoteServiceError(operation, f"HTTP {response.status_code}: {response.text}", response.status_code)

        data = body.get("data") or {}
        if body.get("status") == "ERROR" or not response.is_success:
            message = data.get("message") or data.get("developerMessage") or f"HTTP {response.status_code}"
            raise RemoteServiceError(operation, message, response.status_code)

        return data.get("result") or {}

    def get(self, operation: str, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.request(operation, "GET", path, params=params)

    def post(self, operation: str, path: str, payload: dict[str, Any] | None = None) -> dict[str, Any]:
        return self.request(operation, "POST", path, json=payload)

    def create(self, operation: str, path: str, payload: dict[str, Any]) -> str:
        """POST a new resource and return its id."""
        result = self.post(operation, path, payload)
        resource_id = result.get("id")
        if not resource_id:
            raise RemoteServiceError(operation, "Bitmovin did not return a resource id")
        return resource_id

    def delete(self, operation: str, path: str) -> dict[str, Any]:
        return self.request(operation, "DELETE", path)

    def list_all(self, operation: str, path: str) -> list[dict[str, Any]]:
        """
        Fetch every item of a paginated listing.

        The listing API has no "fetch all" mode, so this costs two round-trips:
        a count probe with ``limit=1`` followed by one request sized to the
        reported ``totalCount``. The two calls are not atomic; items created or
        deleted in between may be missed or reported.
        """
        probe = self.get(operation, path, params={"offset": 0, "limit": 1})
        total_count = int(probe.get("totalCount") or 0)
        if total_count == 0:
            return []

        result = self.get(operation, path, params={"offset": 0, "limit": total_count})
        items = result.get("items") or []
        logger.debug(f"Listed {len(items)} of {total_count} items from {path}")
        return items
