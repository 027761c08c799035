"""HTTP client for the bookstore REST API.

Thin synchronous wrapper over httpx: one method per verb, optional bearer
token and JSON body. Non-2xx responses are returned, never raised; callers
assert on the status themselves.
"""

import json as jsonlib
import time
from dataclasses import dataclass, field
from typing import Any

import httpx

from .auth import auth_headers
from .errors import ClientError, map_transport_error
from .shared.logging import get_logger

logger = get_logger(__name__)

ABSENCE_MARKER = "null"

_UNPARSED = object()


@dataclass
class ApiResponse:
    """One HTTP exchange: the request line plus status and raw body."""

    method: str
    path: str
    status_code: int
    text: str
    headers: dict[str, str] = field(default_factory=dict)
    elapsed: float = 0.0
    _json: Any = field(default=_UNPARSED, repr=False, compare=False)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_absent(self) -> bool:
        """True when the body is the API's literal ``null`` absence marker."""
        return self.text.strip() == ABSENCE_MARKER

    def json(self) -> Any:
        """Parse the body as JSON (cached).

        Raises:
            ValueError: If the body is not valid JSON
        """
        if self._json is _UNPARSED:
            self._json = jsonlib.loads(self.text)
        return self._json

    def describe(self) -> str:
        return f"{self.method} {self.path} -> {self.status_code}"


class BookstoreClient:
    """HTTP client for the bookstore REST API.

    Must be used as a context manager; the connection is released on exit
    whether the scenario passed or failed.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        insecure: bool = False,
        http_client: httpx.Client | None = None,
    ):
        """Initialize client.

        Args:
            base_url: API URL (e.g., http://localhost:3000)
            timeout: Request timeout in seconds
            insecure: Skip SSL certificate verification (like curl -k)
            http_client: Pre-built httpx client to adopt instead of creating
                one; it is closed together with this wrapper
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.insecure = insecure
        self._adopted = http_client
        self._client: httpx.Client | None = None

    def __enter__(self) -> "BookstoreClient":
        """Open the underlying connection."""
        if self._adopted is not None:
            self._client = self._adopted
            self._adopted = None
        else:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                verify=not self.insecure,
            )
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Release the underlying connection."""
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    def _ensure_client(self) -> httpx.Client:
        """Ensure client is initialized."""
        if self._client is None:
            raise ClientError("Client not initialized. Use 'with' context.")
        return self._client

    def request(
        self,
        method: str,
        path: str,
        json: Any = None,
        token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        """Send one request and return the response whatever its status.

        Args:
            method: HTTP method
            path: API path (e.g., /category)
            json: JSON-serializable body for POST/PUT
            token: Bearer token for the Authorization header
            headers: Extra request headers

        Returns:
            ApiResponse with status code and raw body

        Raises:
            TransportError: On connection errors or timeouts
        """
        client = self._ensure_client()
        request_headers = {**auth_headers(token), **(headers or {})}
        started = time.monotonic()
        try:
            response = client.request(
                method,
                path,
                json=json,
                headers=request_headers or None,
            )
        except httpx.TransportError as e:
            error = map_transport_error(e, method, f"{self.base_url}{path}")
            logger.warning("http_transport_error", method=method, path=path, error=error.message)
            raise error from e

        elapsed = time.monotonic() - started
        logger.debug(
            "http_exchange",
            method=method,
            path=path,
            status=response.status_code,
            elapsed_ms=round(elapsed * 1000, 1),
        )
        return ApiResponse(
            method=method,
            path=path,
            status_code=response.status_code,
            text=response.text,
            headers=dict(response.headers),
            elapsed=elapsed,
        )

    # -------------------------------------------------------------------------
    # Verbs
    # -------------------------------------------------------------------------

    def get(
        self, path: str, token: str | None = None, headers: dict[str, str] | None = None
    ) -> ApiResponse:
        return self.request("GET", path, token=token, headers=headers)

    def post(
        self,
        path: str,
        json: Any = None,
        token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        return self.request("POST", path, json=json, token=token, headers=headers)

    def put(
        self,
        path: str,
        json: Any = None,
        token: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> ApiResponse:
        return self.request("PUT", path, json=json, token=token, headers=headers)

    def delete(
        self, path: str, token: str | None = None, headers: dict[str, str] | None = None
    ) -> ApiResponse:
        return self.request("DELETE", path, token=token, headers=headers)
