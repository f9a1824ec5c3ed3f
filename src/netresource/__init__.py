from __future__ import annotations

from netresource.config import ConfigError, NetresourceConfig
from netresource.core.errors import (
    ConstructionError,
    GenericError,
    HttpError,
    IncorrectUsage,
    InvalidUrl,
    NetresourceError,
    NetworkingError,
    NetworkingErrorKind,
    NoData,
    ParseError,
    ResponseError,
    SerializationError,
    Unauthorized,
)
from netresource.core.media_types import ContentType
from netresource.core.result import Err, Ok, Result
from netresource.core.transport import Response
from netresource.core.version import NETRESOURCE_VERSION
from netresource.resource import HttpMethod, Request, Resource, expected_status_2xx, json_parser
from netresource.transport import classify
from netresource.transport.httpx import HTTPX_TRANSPORT, HttpxTransport
from netresource.transport.requests import REQUESTS_TRANSPORT, RequestsTransport, execute, load

__version__ = NETRESOURCE_VERSION

__all__ = [
    "__version__",
    # Resources
    "Resource",
    "Request",
    "HttpMethod",
    "ContentType",
    "expected_status_2xx",
    "json_parser",
    # Results
    "Ok",
    "Err",
    "Result",
    "Response",
    # Execution
    "load",
    "execute",
    "classify",
    "RequestsTransport",
    "HttpxTransport",
    "REQUESTS_TRANSPORT",
    "HTTPX_TRANSPORT",
    # Configuration
    "NetresourceConfig",
    "ConfigError",
    # Errors
    "NetresourceError",
    "NetworkingError",
    "NetworkingErrorKind",
    "NoData",
    "HttpError",
    "Unauthorized",
    "GenericError",
    "ResponseError",
    "ParseError",
    "ConstructionError",
    "InvalidUrl",
    "SerializationError",
    "IncorrectUsage",
]
