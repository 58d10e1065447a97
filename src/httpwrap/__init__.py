"""
httpwrap - request and response wrappers for one HTTP request/response cycle

``Request`` normalizes what the host environment already parsed (URI,
query/form parameters, cookies, uploaded files and server variables) and
derives the request headers and method. ``Response`` collects headers, a
body and a status and writes them to a transport exactly once.

Example:
    >>> from httpwrap import Request, Response, WSGIApplication
    >>>
    >>> def hello(request):
    ...     return Response({"Content-Type": "text/plain"}, f"Hello {request.uri}")
    >>>
    >>> app = WSGIApplication(hello)
"""

__version__ = "0.1.0"
__author__ = "httpwrap Team"

from httpwrap.config import AppConfig, HttpConfig, LoggingConfig, get_config, set_config
from httpwrap.exceptions import (
    HeadersAlreadySent, HttpWrapError, InvalidBody, InvalidHeaderValue, NoActiveTransport,
    RequestTerminated, UnknownStatus, UnsafeHeader,
)
from httpwrap.http import (
    BufferTransport, Request, Response, StreamTransport, Transport, WSGITransport,
    request_context,
)
from httpwrap.wsgi import WSGIApplication

__all__ = [
    # Core
    "Request", "Response", "WSGIApplication",

    # Transports and context
    "Transport", "BufferTransport", "StreamTransport", "WSGITransport", "request_context",

    # Configuration
    "AppConfig", "HttpConfig", "LoggingConfig", "get_config", "set_config",

    # Exceptions
    "HttpWrapError", "InvalidHeaderValue", "UnsafeHeader", "InvalidBody", "UnknownStatus",
    "HeadersAlreadySent", "NoActiveTransport", "RequestTerminated",

    # Version info
    "__version__", "__author__",
]
