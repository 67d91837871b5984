"""
===============================================================================
CRC CARD — client/api_client.py (HTTP client for the Bug Tracker API)
===============================================================================

Responsibilities:
  - Wrap the REST endpoints under a base URL (default http://localhost:5000/api).
  - Raise ApiError for any non-2xx response, carrying the server's "error"
    text (and validation "details") or "HTTP error! status: N".
  - Log every request/response at debug level.

Collaborators:
  - httpx.Client (injectable: tests pass FastAPI's TestClient)
  - client.state.BugBoard (consumer)
===============================================================================
"""

from __future__ import annotations

from typing import Any

import httpx

from ..crosscutting.logger import logger

DEFAULT_BASE_URL = "http://localhost:5000/api"
DEFAULT_TIMEOUT_SECONDS = 10.0


class ApiError(Exception):
    """Non-2xx response or transport failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or []


def _error_message(response: httpx.Response) -> tuple[str, list[str]]:
    fallback = f"HTTP error! status: {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return fallback, []
    if not isinstance(body, dict):
        return fallback, []
    details = body.get("details")
    return (
        body.get("error") or fallback,
        [str(d) for d in details] if isinstance(details, list) else [],
    )


class BugTrackerClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        client: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> "BugTrackerClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _request(
        self,
        method: str,
        endpoint: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}{endpoint}"
        logger.debug("api request", extra={"http_method": method, "url": url})

        try:
            response = self._client.request(method, url, json=json, params=params)
        except httpx.HTTPError as exc:
            logger.error("api transport error", extra={"url": url, "error": str(exc)})
            raise ApiError(str(exc)) from exc

        logger.debug(
            "api response", extra={"url": url, "status_code": response.status_code}
        )

        if not response.is_success:
            message, details = _error_message(response)
            logger.error(
                "api error", extra={"status_code": response.status_code, "error": message}
            )
            raise ApiError(message, response.status_code, details)

        return response.json()

    @staticmethod
    def _require(value: Any, message: str) -> None:
        if not value:
            raise ValueError(message)

    def get_bugs(self, **params: Any) -> dict[str, Any]:
        """List page: {"bugs": [...], "pagination": {...}}."""
        query = {k: v for k, v in params.items() if v not in (None, "")}
        return self._request("GET", "/bugs", params=query or None)

    def get_bug(self, bug_id: str) -> dict[str, Any]:
        self._require(bug_id, "Bug ID is required")
        return self._request("GET", f"/bugs/{bug_id}")

    def create_bug(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/bugs", json=data)

    def update_bug(self, bug_id: str, data: dict[str, Any]) -> dict[str, Any]:
        self._require(bug_id, "Bug ID is required")
        return self._request("PUT", f"/bugs/{bug_id}", json=data)

    def delete_bug(self, bug_id: str) -> dict[str, Any]:
        self._require(bug_id, "Bug ID is required")
        return self._request("DELETE", f"/bugs/{bug_id}")

    def update_bug_status(self, bug_id: str, status: str) -> dict[str, Any]:
        self._require(bug_id, "Bug ID is required")
        self._require(status, "Status is required")
        return self._request("PUT", f"/bugs/{bug_id}", json={"status": status})
