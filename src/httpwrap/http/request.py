"""
Inbound request wrapper.

A ``Request`` bundles the data the host environment already parsed (URI,
query and form parameters, cookies, uploaded files and the server/CGI
variables) and derives the request headers and method from the server
variables.

The main request is the one currently being handled. It is created lazily
by ``Request.main()`` from the live environment and cached for the rest of
the request context, so two requests handled concurrently never share it.

Example:
    >>> request = Request("/users", server={"REQUEST_METHOD": "POST",
    ...                                     "HTTP_USER_AGENT": "curl/8.0"})
    >>> request.method
    'POST'
    >>> request.headers
    {'User-Agent': 'curl/8.0'}
"""

import logging
import os
import sys
from http.cookies import CookieError, SimpleCookie
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qs

from httpwrap.config import get_config
from httpwrap.http import context
from httpwrap.http.headers import headers_from_server

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Request:
    """Normalized view over the raw per-request input maps."""

    def __init__(self,
                 uri: str = "/",
                 get: Optional[Mapping[str, Any]] = None,
                 post: Optional[Mapping[str, Any]] = None,
                 cookies: Optional[Mapping[str, Any]] = None,
                 files: Optional[Mapping[str, Any]] = None,
                 server: Optional[Mapping[str, Any]] = None):
        self.uri = uri
        self.get = dict(get or {})
        self.post = dict(post or {})
        self.cookies = dict(cookies or {})
        self.files = dict(files or {})
        self.server = dict(server or {})

        self.headers = headers_from_server(self.server)

        method = self.server.get("REQUEST_METHOD")
        if method is None:
            logger.debug("REQUEST_METHOD missing, assuming GET")
            method = "GET"
        self.method = method

    @classmethod
    def main(cls) -> 'Request':
        """
        Return the main request of the current request context.

        Built on first access from the environ bound by ``request_context``,
        or from ``os.environ`` when running as a CGI script. In the CGI case
        a form body is read from standard input.
        """
        request = context.main_request.get()
        if request is None:
            environ = context.current_environ()
            stream = None
            if environ is None:
                environ = os.environ
                stream = getattr(sys.stdin, "buffer", None)
            request = cls.from_environ(environ, stream)
            context.main_request.set(request)
            logger.debug("Created main request", extra={'structured_data': {
                'method': request.method, 'uri': request.uri}})
        return request

    @classmethod
    def from_environ(cls, environ: Mapping[str, Any], stream=None) -> 'Request':
        """
        Build a request from a WSGI or CGI environ.

        The form body is read from ``stream``, falling back to
        ``environ["wsgi.input"]``.
        """
        return cls(
            uri=_request_uri(environ),
            get=_flatten(parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)),
            post=_read_form(environ, stream),
            cookies=_parse_cookies(environ.get("HTTP_COOKIE", "")),
            files={},
            server=environ,
        )

    def header(self, name: str, default: Any = None) -> Any:
        """Case-insensitive header lookup."""
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return default

    def __repr__(self) -> str:
        return f"<Request {self.method} {self.uri}>"


def _request_uri(environ: Mapping[str, Any]) -> str:
    uri = environ.get("REQUEST_URI")
    if uri:
        return uri

    path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    query = environ.get("QUERY_STRING", "")
    uri = path or "/"
    if query:
        uri += "?" + query
    return uri


def _flatten(params: Dict[str, list]) -> Dict[str, Any]:
    return {key: values[0] if len(values) == 1 else values for key, values in params.items()}


def _parse_cookies(raw: str) -> Dict[str, str]:
    if not raw:
        return {}
    cookie = SimpleCookie()
    try:
        cookie.load(raw)
    except CookieError:
        logger.warning("Ignoring malformed Cookie header", extra={'structured_data': {'cookie': raw}})
        return {}
    return {name: morsel.value for name, morsel in cookie.items()}


def _read_form(environ: Mapping[str, Any], stream=None) -> Dict[str, Any]:
    content_type = environ.get("CONTENT_TYPE", "")
    if stream is None:
        stream = environ.get("wsgi.input")
    if stream is None or not content_type.startswith(FORM_CONTENT_TYPE):
        return {}

    try:
        length = int(environ.get("CONTENT_LENGTH") or 0)
    except ValueError:
        length = 0
    if length <= 0:
        return {}

    body = stream.read(length).decode(get_config().http.charset, errors="replace")
    return _flatten(parse_qs(body, keep_blank_values=True))
