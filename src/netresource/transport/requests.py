from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, TypeVar

from netresource.core.errors import IncorrectUsage, NetworkingError
from netresource.core.result import Result
from netresource.core.transport import Response
from netresource.transport import BaseTransport, OnComplete, classify, deliver
from netresource.transport.prepare import prepare_kwargs

if TYPE_CHECKING:
    import requests

    from netresource.config import NetresourceConfig
    from netresource.resource import Resource

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestsTransport(BaseTransport["requests.Session"]):
    """Executes resources with `requests`, on a pool of worker threads."""

    def __init__(self, config: NetresourceConfig | None = None) -> None:
        super().__init__(config)
        # Threads are started lazily by the executor itself
        self._executor = ThreadPoolExecutor(max_workers=self.config.workers, thread_name_prefix="netresource")

    def load(self, resource: Resource[T], *, session: requests.Session | None = None) -> Result[T, NetworkingError]:
        """Send the request and wait for the result.

        Transport errors never propagate, they are returned as `GenericError`. The configured `max_redirects` only
        applies to sessions created by the transport, a session passed by the caller keeps its own limit.
        """
        import requests

        if resource.request.url is None:
            return classify(resource, content=None, response=None, error=IncorrectUsage("Request has no URL"))

        data = prepare_kwargs(resource.request, self.config)

        if session is None:
            session = requests.Session()
            if self.config.max_redirects is not None:
                session.max_redirects = self.config.max_redirects
            close_session = True
        else:
            close_session = False

        logger.debug("Sending %s", resource)
        try:
            try:
                raw = session.request(**data)
            except (requests.RequestException, UnicodeError) as exc:
                # Configured headers may hold characters `http.client` can't encode
                return classify(resource, content=None, response=None, error=exc)
            response = Response.from_requests(raw)
            return classify(resource, content=response.content, response=response, error=None)
        finally:
            if close_session:
                session.close()

    def execute(
        self,
        resource: Resource[T],
        on_complete: OnComplete,
        *,
        session: requests.Session | None = None,
    ) -> Future[Result[T, NetworkingError]]:
        """Send the request on a worker thread.

        Returns immediately. `on_complete` receives the result exactly once, on a worker thread, or on the
        cancelling thread if the returned future is cancelled before the request starts. Cancelling a running
        or finished future has no effect.

        A `requests.Session` is not guaranteed to be thread-safe, share one between concurrent calls at your own risk.
        """
        future = self._executor.submit(self.load, resource, session=session)
        future.add_done_callback(deliver(on_complete))
        return future

    def shutdown(self, *, wait: bool = True) -> None:
        """Stop the worker threads."""
        self._executor.shutdown(wait=wait)


REQUESTS_TRANSPORT = RequestsTransport()


def load(resource: Resource[T], *, session: requests.Session | None = None) -> Result[T, NetworkingError]:
    """Send the request with the default `requests` transport and wait for the result."""
    return REQUESTS_TRANSPORT.load(resource, session=session)


def execute(
    resource: Resource[T], on_complete: OnComplete, *, session: requests.Session | None = None
) -> Future[Result[T, NetworkingError]]:
    """Send the request with the default `requests` transport on a worker thread."""
    return REQUESTS_TRANSPORT.execute(resource, on_complete, session=session)
