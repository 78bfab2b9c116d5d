"""HTTPS enforcement behind a TLS-terminating proxy."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse, Response

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request

logger = logging.getLogger(__name__)


class HTTPSRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect requests that did not reach the proxy over HTTPS.

    The proxy reports the original scheme in ``X-Forwarded-Proto``; anything
    other than ``https`` (including a missing header) is redirected to the
    same host and path on ``https://``.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        forwarded_proto = request.headers.get("x-forwarded-proto")
        if forwarded_proto == "https":
            return await call_next(request)

        host = request.headers.get("host", "")
        target = build_https_url(host, request.url.path, request.url.query)
        logger.debug("Redirecting %s request to %s", forwarded_proto or "http", target)
        return RedirectResponse(url=target, status_code=302)


def build_https_url(host: str, path: str, query: str = "") -> str:
    """Build the HTTPS URL for ``host`` + ``path`` (+ ``query``)."""
    url = f"https://{host}{path}"
    if query:
        url = f"{url}?{query}"
    return url
