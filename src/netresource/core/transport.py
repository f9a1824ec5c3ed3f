from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from netresource.core.version import NETRESOURCE_VERSION

if TYPE_CHECKING:
    import httpx
    import requests

USER_AGENT = f"netresource/{NETRESOURCE_VERSION}"


class Response:
    """HTTP response metadata passed to status predicates and parsers.

    Normalizes responses from different HTTP clients, so parsers don't depend on the client in use.
    """

    status_code: int
    """HTTP status code (e.g., 200, 404, 500)."""
    headers: dict[str, list[str]]
    """Response headers with lowercase keys and list values."""
    content: bytes
    """Raw response body as bytes."""
    url: str
    """Final URL of the response."""
    method: str
    """HTTP method of the request that produced this response."""
    elapsed: float
    """Response time in seconds."""
    message: str
    """HTTP status message (e.g., "OK", "Not Found")."""
    http_version: str
    """HTTP protocol version."""
    encoding: str | None
    """Character encoding for text content, if detected."""
    raw: Any
    """The client's own response object."""

    __slots__ = (
        "status_code",
        "headers",
        "content",
        "url",
        "method",
        "elapsed",
        "message",
        "http_version",
        "encoding",
        "raw",
    )

    def __init__(
        self,
        status_code: int,
        headers: Mapping[str, list[str]],
        content: bytes,
        url: str,
        method: str = "GET",
        elapsed: float = 0.0,
        message: str = "",
        http_version: str = "1.1",
        encoding: str | None = None,
        raw: Any = None,
    ):
        self.status_code = status_code
        self.headers = {key.lower(): list(value) for key, value in headers.items()}
        self.content = content
        self.url = url
        self.method = method
        self.elapsed = elapsed
        self.message = message
        self.http_version = http_version
        self.encoding = encoding
        self.raw = raw

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {self.method} {self.url}>"

    @classmethod
    def from_requests(cls, response: requests.Response) -> Response:
        raw = response.raw
        if raw is not None and hasattr(raw, "headers") and hasattr(raw.headers, "getlist"):
            headers = {name: raw.headers.getlist(name) for name in raw.headers.keys()}
        else:
            headers = {name: [value] for name, value in response.headers.items()}
        # Similar to http.client:319 (HTTP version detection in stdlib's `http` package)
        version = getattr(raw, "version", 11)
        http_version = "1.0" if version == 10 else "1.1"
        return cls(
            status_code=response.status_code,
            headers=headers,
            content=response.content,
            url=response.url,
            method=response.request.method if response.request is not None else "GET",
            elapsed=response.elapsed.total_seconds(),
            message=response.reason or "",
            encoding=response.encoding,
            http_version=http_version,
            raw=response,
        )

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> Response:
        headers: dict[str, list[str]] = {}
        for name, value in response.headers.multi_items():
            headers.setdefault(name, []).append(value)
        try:
            elapsed = response.elapsed.total_seconds()
        except RuntimeError:
            # Not available until the response is closed
            elapsed = 0.0
        return cls(
            status_code=response.status_code,
            headers=headers,
            content=response.content,
            url=str(response.request.url),
            method=response.request.method,
            elapsed=elapsed,
            message=response.reason_phrase,
            encoding=response.encoding,
            http_version=response.http_version,
            raw=response,
        )

    def get_header(self, name: str) -> str | None:
        """First value of the given header, if present."""
        values = self.headers.get(name.lower())
        if values:
            return values[0]
        return None
