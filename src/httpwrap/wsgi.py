"""
WSGI adapter.

Runs a request handler inside its own request context so ``Request.main()``
and ``Response.send()`` without arguments resolve to the request being
served.

Example:
    >>> def handler(request):
    ...     if "user" not in request.cookies:
    ...         Response.redirect("/login", "Refresh", 302)
    ...     return Response({"Content-Type": "text/plain"}, "Hello")
    >>> app = WSGIApplication(handler)
"""

import logging
from typing import Any, Callable, Dict, Iterable, Optional

from httpwrap.config import AppConfig, get_config
from httpwrap.exceptions import RequestTerminated
from httpwrap.http import Request, Response, WSGITransport, request_context

logger = logging.getLogger(__name__)

Handler = Callable[[Request], Optional[Response]]


class WSGIApplication:
    """WSGI callable wrapping a ``handler(request) -> Response`` function."""

    def __init__(self, handler: Handler, config: Optional[AppConfig] = None):
        self.handler = handler
        self.config = config or get_config()

    def __call__(self, environ: Dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        http_config = self.config.http
        transport = WSGITransport(start_response, http_config.http_version, http_config.charset)

        with request_context(environ, transport):
            request = None
            try:
                request = Request.main()
                response = self.handler(request)
                if response is None and not transport.headers_sent:
                    response = Response()
                if response is not None and not response.sent:
                    response.send()
            except RequestTerminated:
                logger.debug("Request terminated early", extra={'structured_data': {'uri': request.uri}})
            except Exception:
                logger.exception("Unhandled error while handling request", extra={'structured_data': {
                    'method': environ.get("REQUEST_METHOD"),
                    'uri': request.uri if request is not None else environ.get("PATH_INFO")}})
                if transport.headers_sent:
                    raise
                Response({"Content-Type": "text/plain; charset=utf-8"}, "Internal Server Error", 500).send()

        return transport.chunks
