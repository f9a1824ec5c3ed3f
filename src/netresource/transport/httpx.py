from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from netresource.core.errors import IncorrectUsage, NetworkingError
from netresource.core.result import Result
from netresource.core.transport import Response
from netresource.transport import BaseTransport, OnComplete, classify, deliver
from netresource.transport.prepare import prepare_headers

if TYPE_CHECKING:
    import httpx

    from netresource.config import NetresourceConfig
    from netresource.resource import Request, Resource

logger = logging.getLogger(__name__)

T = TypeVar("T")


def encode_headers(request: Request, config: NetresourceConfig) -> list[tuple[bytes, bytes]]:
    """Headers as raw bytes, since `httpx` only accepts ASCII in `str` values."""
    return [
        (name.encode("latin-1"), value.encode("latin-1")) for name, value in prepare_headers(request, config).items()
    ]


class HttpxTransport(BaseTransport["httpx.AsyncClient"]):
    """Executes resources with `httpx`, on the running event loop."""

    def __init__(self, config: NetresourceConfig | None = None) -> None:
        super().__init__(config)
        # The event loop only keeps weak references to tasks
        self._tasks: set[asyncio.Task] = set()

    def _make_client(self) -> httpx.AsyncClient:
        import httpx

        kwargs: dict[str, Any] = {"verify": self.config.tls_verify, "follow_redirects": True}
        if self.config.max_redirects is not None:
            kwargs["max_redirects"] = self.config.max_redirects
        if self.config.proxy is not None:
            kwargs["proxy"] = self.config.proxy
        return httpx.AsyncClient(**kwargs)

    async def load(
        self, resource: Resource[T], *, session: httpx.AsyncClient | None = None
    ) -> Result[T, NetworkingError]:
        """Send the request and wait for the result.

        Transport errors never propagate, they are returned as `GenericError`.
        """
        import httpx

        request = resource.request
        if request.url is None:
            return classify(resource, content=None, response=None, error=IncorrectUsage("Request has no URL"))

        if session is None:
            client = self._make_client()
            close_client = True
        else:
            client = session
            close_client = False

        logger.debug("Sending %s", resource)
        try:
            try:
                raw = await client.request(
                    request.method or "GET",
                    request.url,
                    headers=encode_headers(request, self.config),
                    content=request.body,
                    timeout=request.timeout,
                )
            except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
                return classify(resource, content=None, response=None, error=exc)
            response = Response.from_httpx(raw)
            return classify(resource, content=response.content, response=response, error=None)
        finally:
            if close_client:
                await client.aclose()

    def execute(
        self,
        resource: Resource[T],
        on_complete: OnComplete,
        *,
        session: httpx.AsyncClient | None = None,
    ) -> asyncio.Task[Result[T, NetworkingError]]:
        """Schedule the request on the running event loop.

        Returns the scheduled task immediately. `on_complete` receives the result exactly once, from the event
        loop. Cancelling the task delivers `GenericError` wrapping `asyncio.CancelledError`. The transport keeps
        the task alive until it finishes, so the returned handle may be dropped.

        Raises:
            IncorrectUsage: If there is no running event loop.

        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise IncorrectUsage("`HttpxTransport.execute` requires a running event loop") from None
        task = loop.create_task(self.load(resource, session=session))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        task.add_done_callback(deliver(on_complete))
        return task


HTTPX_TRANSPORT = HttpxTransport()
