"""Errors produced while building resources and classifying responses."""

from __future__ import annotations

import enum
import re
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from netresource.core.transport import Response


class NetresourceError(Exception):
    """Base exception class for all netresource errors."""


@enum.unique
class NetworkingErrorKind(str, enum.Enum):
    NO_DATA = "no_data"
    HTTP = "http"
    UNAUTHORIZED = "unauthorized"
    GENERIC = "generic"
    RESPONSE = "response"
    PARSE = "parse"


class NetworkingError(NetresourceError):
    """Failure delivered through a completion result.

    Instances are never raised by the execution adapters, they travel inside `Err`.
    """

    kind: NetworkingErrorKind

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other) and self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self), self._key()))

    def _key(self) -> tuple:
        return ()


class NoData(NetworkingError):
    """Response body was absent or empty where a payload was required."""

    kind = NetworkingErrorKind.NO_DATA

    def __str__(self) -> str:
        return "Response body is empty"


class HttpError(NetworkingError):
    """Status code was rejected by the resource's status predicate."""

    kind = NetworkingErrorKind.HTTP

    __slots__ = ("status_code", "response")

    def __init__(self, status_code: int, response: Response | None = None) -> None:
        self.status_code = status_code
        self.response = response

    def _key(self) -> tuple:
        return (self.status_code,)

    def __str__(self) -> str:
        message = f"Unexpected status code: {self.status_code}"
        if self.response is not None and self.response.message:
            message += f" {self.response.message}"
        return message

    def __repr__(self) -> str:
        return f"HttpError(status_code={self.status_code})"


class Unauthorized(NetworkingError):
    """Reserved for callers that special-case 401 responses."""

    kind = NetworkingErrorKind.UNAUTHORIZED
    status_code = 401

    def __str__(self) -> str:
        return "Unauthorized"


class GenericError(NetworkingError):
    """Transport-level failure reported by the underlying HTTP client."""

    kind = NetworkingErrorKind.GENERIC

    __slots__ = ("error",)

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error

    def _key(self) -> tuple:
        return (type(self.error), str(self.error))

    def __str__(self) -> str:
        if self.error is None:
            return "Request failed"
        return get_request_error_message(self.error)

    def __repr__(self) -> str:
        return f"GenericError({self.error!r})"


class ResponseError(NetworkingError):
    """Response metadata is missing or malformed."""

    kind = NetworkingErrorKind.RESPONSE

    def __str__(self) -> str:
        return "Response is not a valid HTTP response"


class ParseError(NetworkingError):
    """Response body could not be converted into the expected result."""

    kind = NetworkingErrorKind.PARSE

    __slots__ = ("error",)

    def __init__(self, error: BaseException) -> None:
        self.error = error

    def _key(self) -> tuple:
        return (type(self.error), str(self.error))

    def __str__(self) -> str:
        return f"Failed to parse response: {format_exception(self.error)}"

    def __repr__(self) -> str:
        return f"ParseError({self.error!r})"


class ConstructionError(NetresourceError):
    """A resource could not be built from the given arguments."""


class InvalidUrl(ConstructionError):
    """The base URL can not be split into components."""

    def __init__(self, url: str, reason: str | None = None) -> None:
        self.url = url
        self.reason = reason

    def __str__(self) -> str:
        message = f"Invalid URL: `{self.url}`"
        if self.reason:
            message += f". {self.reason}"
        return message


class SerializationError(ConstructionError):
    """Can't serialize request payload."""


class IncorrectUsage(NetresourceError):
    """Indicates incorrect usage of the public API."""


def get_request_error_message(exc: BaseException) -> str:
    """Extract user-facing message from a transport exception."""
    import httpx
    from requests.exceptions import ChunkedEncodingError, ConnectionError, ReadTimeout, SSLError, Timeout

    if isinstance(exc, ReadTimeout):
        match = re.search(r"read timeout=([\d.]+)", str(exc))
        if match is not None:
            return f"Read timed out after {match.group(1)} seconds"
        return "Read timed out"
    if isinstance(exc, Timeout) or isinstance(exc, httpx.TimeoutException):
        return "Request timed out"
    if isinstance(exc, SSLError):
        return "SSL verification problem"
    if isinstance(exc, (ConnectionError, httpx.ConnectError)):
        return "Connection failed"
    if isinstance(exc, ChunkedEncodingError):
        return "Connection broken. The server declared chunked encoding but sent an invalid chunk"
    return format_exception(exc)


def format_exception(error: BaseException, *, with_traceback: bool = False) -> str:
    """Format exception with optional traceback."""
    if not with_traceback:
        lines = traceback.format_exception_only(type(error), error)
        return "".join(lines).strip()

    lines = traceback.format_exception(type(error), error, error.__traceback__)
    return "".join(lines).strip()
