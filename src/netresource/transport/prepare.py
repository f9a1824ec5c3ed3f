from __future__ import annotations

from typing import TYPE_CHECKING, Any

from netresource.core.transport import USER_AGENT

if TYPE_CHECKING:
    from requests.structures import CaseInsensitiveDict

    from netresource.config import NetresourceConfig
    from netresource.resource import Request


def prepare_headers(request: Request, config: NetresourceConfig) -> CaseInsensitiveDict:
    """Combine configured default headers with the request's own headers.

    Request headers take priority over configured ones.
    """
    from requests.structures import CaseInsensitiveDict

    headers = CaseInsensitiveDict({"User-Agent": config.user_agent or USER_AGENT})
    headers.update(config.headers)
    headers.update(request.headers)
    return headers


def prepare_kwargs(request: Request, config: NetresourceConfig) -> dict[str, Any]:
    """Arguments for `requests.Session.request`."""
    kwargs: dict[str, Any] = {
        "method": request.method or "GET",
        "url": request.url,
        "headers": dict(prepare_headers(request, config)),
        "data": request.body,
        "timeout": request.timeout,
        "verify": config.tls_verify,
    }
    if config.proxy is not None:
        kwargs["proxies"] = {"all": config.proxy}
    return kwargs
