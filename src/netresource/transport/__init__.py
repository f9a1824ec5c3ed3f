from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import CancelledError
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from netresource.core.errors import GenericError, HttpError, NetworkingError, ParseError, ResponseError
from netresource.core.result import Err, Result

if TYPE_CHECKING:
    from netresource.config import NetresourceConfig
    from netresource.core.transport import Response
    from netresource.resource import Resource

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S", contravariant=True)

OnComplete = Callable[["Result[Any, NetworkingError]"], None]


def get(client: Any = None) -> BaseTransport:
    """Get the transport that executes resources with the given client."""
    import httpx

    from netresource.transport.httpx import HTTPX_TRANSPORT
    from netresource.transport.requests import REQUESTS_TRANSPORT

    if isinstance(client, httpx.AsyncClient):
        return HTTPX_TRANSPORT
    return REQUESTS_TRANSPORT


def classify(
    resource: Resource[T],
    *,
    content: bytes | None,
    response: Response | None,
    error: BaseException | None,
) -> Result[T, NetworkingError]:
    """Turn the raw outcome of an HTTP request into the resource's result.

    A transport error takes precedence over everything else, then a missing or malformed response,
    then a rejected status code. Only responses that pass all checks reach the parser.
    """
    if error is not None:
        logger.debug("Transport failure for %s: %r", resource, error)
        return Err(GenericError(error))
    if response is None or not isinstance(response.status_code, int) or isinstance(response.status_code, bool):
        logger.debug("No valid response for %s", resource)
        return Err(ResponseError())
    if not resource.expected_status(response.status_code):
        logger.debug("Unexpected status code %d for %s", response.status_code, resource)
        return Err(HttpError(response.status_code, response))
    try:
        return resource.parse(content, response)
    except Exception as exc:
        logger.debug("Parser failed for %s", resource, exc_info=True)
        return Err(ParseError(exc))


def deliver(on_complete: OnComplete) -> Callable[[Any], None]:
    """Build a done-callback that passes a finished task's result to `on_complete`.

    Works for both `concurrent.futures.Future` and `asyncio.Task`. Cancelled and faulted tasks are reported
    as `GenericError`, so `on_complete` is called exactly once per task.
    """

    def callback(task: Any) -> None:
        try:
            result = task.result()
        except (CancelledError, asyncio.CancelledError) as exc:
            result = Err(GenericError(exc))
        except Exception as exc:
            logger.debug("Execution task failed", exc_info=True)
            result = Err(GenericError(exc))
        on_complete(result)

    return callback


class BaseTransport(Generic[S]):
    """Executes resources with a specific HTTP client."""

    def __init__(self, config: NetresourceConfig | None = None) -> None:
        from netresource.config import NetresourceConfig

        self.config = config or NetresourceConfig()

    def execute(self, resource: Resource[T], on_complete: OnComplete, *, session: S | None = None) -> Any:
        """Start the request and return a cancellable task.

        `on_complete` is called once with the result, possibly on another thread.
        """
        raise NotImplementedError
