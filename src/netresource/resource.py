"""Declarative description of a single API call."""

from __future__ import annotations

import enum
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from netresource.core import DEFAULT_TIMEOUT
from netresource.core.errors import ConstructionError, InvalidUrl, NetworkingError, NoData, ParseError, SerializationError
from netresource.core.media_types import ContentType
from netresource.core.result import Err, Ok, Result

if TYPE_CHECKING:
    from netresource.core.transport import Response

T = TypeVar("T")

Parser = Callable[["bytes | None", "Response | None"], "Result[T, NetworkingError]"]
StatusPredicate = Callable[[int], bool]


class HttpMethod(str, enum.Enum):
    """HTTP methods supported by resources."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


def expected_status_2xx(code: int) -> bool:
    """Return `True` if `code` is in the 200..<300 range."""
    return 200 <= code < 300


@dataclass(frozen=True)
class Request:
    """Immutable request handed over to an HTTP client."""

    url: str | None = None
    method: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes | None = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        # Own a copy, so the caller's mapping can't change the request afterwards
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def get_header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


def merge_query(url: str, query: Mapping[str, str] | None) -> str:
    """Append `query` items to the query string of `url`.

    Items already present in `url` are kept as is and go first. New items follow in the mapping's order,
    percent-encoded (a space becomes ``%20``).
    """
    parts = _split_url(url)
    if not query:
        return url
    encoded = urlencode([(key, str(value)) for key, value in query.items()], quote_via=quote)
    merged = f"{parts.query}&{encoded}" if parts.query else encoded
    return urlunsplit((parts.scheme, parts.netloc, parts.path, merged, parts.fragment))


def _split_url(url: str) -> Any:
    if not isinstance(url, str):
        raise InvalidUrl(repr(url), "URL should be a string")
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError as exc:
        raise InvalidUrl(url, str(exc)) from None
    if not parts.scheme or not parts.netloc:
        raise InvalidUrl(url, "An absolute URL with a scheme and a host is required")
    return parts


def _normalize_method(method: HttpMethod | str) -> str:
    try:
        return HttpMethod(str(method).upper()).value
    except ValueError:
        allowed = ", ".join(member.value for member in HttpMethod)
        raise ConstructionError(f"Unsupported HTTP method: {method!r}. Allowed values: {allowed}") from None


def _build_headers(
    accept: ContentType | str | None,
    content_type: ContentType | str | None,
    headers: Mapping[str, str] | None,
) -> dict[str, str]:
    # Header names are case-insensitive, the last write wins and keeps its spelling
    result: dict[str, tuple[str, str]] = {}

    def set_value(name: str, value: str) -> None:
        result[name.lower()] = (name, value)

    if accept is not None:
        set_value("Accept", str(accept))
    if content_type is not None:
        set_value("Content-Type", str(content_type))
    for name, value in (headers or {}).items():
        _validate_header(name, value)
        set_value(name, value)
    return dict(result.values())


def _validate_header(name: Any, value: Any) -> None:
    if not isinstance(name, str) or not isinstance(value, str):
        raise ConstructionError(f"Header names and values should be strings, got {name!r}: {value!r}")
    if not name:
        raise ConstructionError("Header name should not be empty")
    # HTTP/1.1 header fields are sent as ISO-8859-1
    try:
        name.encode("latin-1")
        value.encode("latin-1")
    except UnicodeEncodeError:
        raise ConstructionError(
            f"Header `{name}` can't be sent: only ISO-8859-1 characters are allowed, got {value!r}"
        ) from None
    if any(char in "\r\n" for char in name + value):
        raise ConstructionError(f"Header `{name!r}` contains a line break")


def _encode_json(body: Any) -> bytes:
    from netresource.core import json

    try:
        return json.dumps(body)
    except json.EncodeError as exc:
        raise SerializationError(f"Failed to serialize request body as JSON: {exc}") from exc


def _discard(content: bytes | None, response: Response | None) -> Result[None, NetworkingError]:
    return Ok(None)


def json_parser(into: Any = None) -> Parser[Any]:
    """Build a parser that decodes a JSON body into `into`.

    `into` is any type `pydantic` can validate against (``list[Person]``, ``dict[str, int]``, dataclasses, models,
    unions). A plain function is applied to the decoded value instead. ``None`` keeps the decoded value as is.

    Raises:
        ConstructionError: If `pydantic` can't build a validator for `into`.

    """
    from netresource.core import json

    convert = _make_converter(into)

    def parse(content: bytes | None, response: Response | None) -> Result[Any, NetworkingError]:
        if not content:
            return Err(NoData())
        try:
            return Ok(convert(json.loads(content)))
        except Exception as exc:
            return Err(ParseError(exc))

    return parse


def _make_converter(into: Any) -> Callable[[Any], Any]:
    if into is None or into is Any:
        return lambda value: value
    if callable(into) and not isinstance(into, type) and typing.get_origin(into) is None:
        return into

    from pydantic import PydanticUserError, TypeAdapter

    try:
        return TypeAdapter(into).validate_python
    except PydanticUserError as exc:
        raise ConstructionError(f"Unsupported response type: {into!r}. {exc.message}") from exc


@dataclass(frozen=True)
class Resource(Generic[T]):
    """An API call returning `T` values.

    Pairs the request with a status predicate and a parser. Resources are immutable and can be executed
    any number of times, from any thread.
    """

    request: Request
    """The request for this call."""
    parse: Parser[T]
    """Converts a response body and metadata into a `T`."""
    expected_status: StatusPredicate = expected_status_2xx
    """Decides whether a status code counts as success."""

    @classmethod
    def build(
        cls,
        method: HttpMethod | str,
        url: str,
        *,
        parse: Parser[T],
        accept: ContentType | str | None = None,
        content_type: ContentType | str | None = None,
        body: bytes | None = None,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_status_2xx,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Resource[T]:
        """Create a new resource.

        Args:
            method: The HTTP method.
            url: The endpoint's URL.
            parse: Converts a response into a `T`.
            accept: The content type for the `Accept` header.
            content_type: The content type for the `Content-Type` header.
            body: The body of the request.
            headers: Additional headers. They override `Accept` and `Content-Type` when they use the same name.
            expected_status: If this returns `False` for a given status code, the call fails with `HttpError`.
            timeout: The timeout for this request, in seconds.
            query: Query parameters to append to the URL.

        Raises:
            InvalidUrl: If `url` can not be split into components.
            ConstructionError: If the method is not supported or a header can't be sent.

        """
        request = Request(
            url=merge_query(url, query),
            method=_normalize_method(method),
            headers=_build_headers(accept, content_type, headers),
            timeout=timeout,
            body=body,
        )
        return cls(request=request, parse=parse, expected_status=expected_status)

    @classmethod
    def no_content(
        cls,
        method: HttpMethod | str,
        url: str,
        *,
        accept: ContentType | str | None = None,
        content_type: ContentType | str | None = None,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_status_2xx,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Resource[None]:
        """Create a resource that ignores the response body."""
        return cls.build(
            method,
            url,
            parse=_discard,
            accept=accept,
            content_type=content_type,
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    @classmethod
    def json_body(
        cls,
        method: HttpMethod | str,
        url: str,
        body: Any,
        *,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_status_2xx,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Resource[None]:
        """Create a resource that sends `body` as JSON and ignores the response body.

        Raises:
            SerializationError: If `body` is not JSON-serializable.

        """
        return cls.build(
            method,
            url,
            parse=_discard,
            accept=ContentType.JSON,
            content_type=ContentType.JSON,
            body=_encode_json(body),
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    @classmethod
    def json(
        cls,
        method: HttpMethod | str,
        url: str,
        *,
        into: Any = None,
        accept: ContentType | str | None = ContentType.JSON,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        expected_status: StatusPredicate = expected_status_2xx,
        timeout: float = DEFAULT_TIMEOUT,
        query: Mapping[str, str] | None = None,
    ) -> Resource[Any]:
        """Create a resource that decodes a JSON response.

        An empty body fails with `NoData`, a body that can't be decoded into `into` fails with `ParseError`.
        When `body` is not `None`, it is sent as JSON. `None` means the request has no body.

        Raises:
            SerializationError: If `body` is not JSON-serializable.

        """
        if body is None:
            content_type = None
            payload = None
        else:
            content_type = ContentType.JSON
            payload = _encode_json(body)
        return cls.build(
            method,
            url,
            parse=json_parser(into),
            accept=accept,
            content_type=content_type,
            body=payload,
            headers=headers,
            expected_status=expected_status,
            timeout=timeout,
            query=query,
        )

    def __str__(self) -> str:
        body = ""
        if self.request.body is not None:
            try:
                body = self.request.body.decode("utf-8")
            except UnicodeDecodeError:
                body = ""
        method = self.request.method or "GET"
        url = self.request.url or "<no url>"
        return f"{method} {url} {body}"

    def as_curl_command(self, *, verify: bool = True) -> str:
        """Render a curl command that sends the same request."""
        from netresource.core import curl

        return curl.generate(
            method=self.request.method or "GET",
            url=self.request.url or "",
            body=self.request.body,
            headers=self.request.headers,
            verify=verify,
        )
