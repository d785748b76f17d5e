"""HTTP client for the indicator platform REST API."""

from __future__ import annotations

from typing import Any, Sequence

import requests

from IndicatorFilter.utils.log import log

DEFAULT_TIMEOUT = 30.0

HEADERS = {
    "User-Agent": "indicator-filter/0.1",
    "Accept": "application/json",
}


class ApiError(RuntimeError):
    """Raised when a request fails or the API answers with an error status.

    Attributes:
        status_code: HTTP status, or None for transport failures.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class IndicatorApiClient:
    """Low-level client for the indicators, boolean filter, and tables endpoints.

    Requests are sent once; failures are never retried here.
    """

    def __init__(self, base_url: str, token: str = "", timeout: float = DEFAULT_TIMEOUT) -> None:
        """Initialize the client with a reusable HTTP session.

        Args:
            base_url: API root, e.g. ``https://example.org/api``.
            token: Bearer token; omitted from requests when empty.
            timeout: Request timeout in seconds.
        """
        if not base_url.strip():
            raise ValueError("base_url cannot be empty")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers.update(HEADERS)
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> IndicatorApiClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def get_indicators(self) -> Any:
        """Fetch indicators with their metadata set (``GET /indicators/``)."""
        return self._request("GET", "/indicators/")

    def boolean_filter(self, payload: dict[str, Any]) -> Any:
        """Run a boolean filter expression (``POST /boolean-filter/``)."""
        return self._request("POST", "/boolean-filter/", json=payload)

    def add_indicators_to_table(self, table_id: str, indicators: Sequence[int]) -> Any:
        """Add indicator ids to a table (``POST /tables/<id>/indicators``)."""
        return self._request("POST", f"/tables/{table_id}/indicators", json=list(indicators))

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        log.debug("API %s %s", method, url)
        try:
            response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as error:
            raise ApiError(f"{method} {path} failed: {error}") from error

        if not response.ok:
            raise ApiError(
                f"{method} {path} returned HTTP {response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as error:
            raise ApiError(f"{method} {path} returned invalid JSON", status_code=response.status_code) from error


def _error_detail(response: requests.Response) -> str:
    """Extract a short error message from an error response."""
    try:
        payload = response.json()
    except ValueError:
        return (response.text or response.reason or "").strip()[:200]
    if isinstance(payload, dict):
        for key in ("detail", "error", "message"):
            if payload.get(key):
                return str(payload[key])[:200]
    return str(payload)[:200]
