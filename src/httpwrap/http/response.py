"""
Outbound response builder.

A ``Response`` collects headers, a body and a status and writes them to a
transport with ``send``. Headers go out once; the body follows.

Example:
    >>> from httpwrap.http.transport import BufferTransport
    >>> response = Response()
    >>> response.header("Content-Type", "text/html")
    >>> response.status("Created")
    201
    >>> response.body("<h1>Hello World</h1>")
    '<h1>Hello World</h1>'
    >>> response.send(BufferTransport())

``Response.redirect`` sends a redirect right away and raises
``RequestTerminated`` so nothing else runs for the current request.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Union

from httpwrap.config import get_config
from httpwrap.exceptions import (
    HeadersAlreadySent, InvalidBody, InvalidHeaderValue, RequestTerminated, UnknownStatus, UnsafeHeader,
)
from httpwrap.http import context
from httpwrap.http.headers import check_header_text, join_header_value
from httpwrap.http.status import STATUS_CODES, lookup_status, reason_phrase
from httpwrap.http.transport import Transport

logger = logging.getLogger(__name__)

REDIRECT_METHODS = ("Location", "Refresh")

_UNSET = object()


class Response:
    """Mutable response builder."""

    STATUS_CODES = STATUS_CODES

    def __init__(self,
                 headers: Optional[Mapping[str, Any]] = None,
                 body: str = "",
                 status: Union[int, str, None] = None):
        self._headers: Dict[str, str] = {}
        self._body = ""
        self.body(body)
        self._status: int = get_config().http.default_status
        self._sent = False

        for name, value in (headers or {}).items():
            self.header(name, value)
        if status is not None:
            self.status(status)

    @classmethod
    def redirect(cls,
                 path: str,
                 method: str = "Location",
                 code: int = 301,
                 transport: Optional[Transport] = None) -> None:
        """
        Send a redirect response and terminate the current request.

        ``method`` is ``"Location"`` for a ``Location`` header or
        ``"Refresh"`` for ``Refresh: 0;url=<path>``. Always raises
        ``RequestTerminated`` after the response went out.
        """
        if method not in REDIRECT_METHODS:
            raise ValueError(f"Redirect method must be one of {REDIRECT_METHODS}, got {method!r}")

        response = cls()
        if method == "Location":
            response.header("Location", path)
        else:
            response.header("Refresh", f"0;url={path}")
        response.status(code)
        response.send(transport)

        logger.info("Redirect", extra={'structured_data': {'path': path, 'method': method, 'status': code}})
        raise RequestTerminated(response)

    def header(self, name: str, value: Any) -> None:
        """
        Set a header, replacing any previous value.

        A list or tuple of strings is joined with ``", "``. Names or values
        containing CR, LF or NUL raise ``UnsafeHeader`` even when ``strict``
        is off.
        """
        if self._sent:
            raise HeadersAlreadySent(f"Cannot set header {name!r}, headers already sent")
        check_header_text(name, name)
        try:
            self._headers[name] = join_header_value(name, value)
        except UnsafeHeader:
            raise
        except InvalidHeaderValue:
            if get_config().http.strict:
                raise
            logger.warning("Ignoring invalid header value", extra={'structured_data': {
                'header': name, 'type': type(value).__name__}})

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._headers.get(name, default)

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    def body(self, value: Any = _UNSET) -> str:
        """Replace the body. Without an argument, return it."""
        if value is not _UNSET:
            if not isinstance(value, str):
                raise InvalidBody(value)
            self._body = value
        return self._body

    def status(self, value: Any = _UNSET) -> int:
        """
        Set the status. Without an argument, return it.

        Integers are stored as given. Strings must match a code (``"404"``)
        or a reason phrase (``"Not Found"``) of the status table; the
        matching code is stored. Anything else keeps the previous status and
        raises ``UnknownStatus`` (or only logs it when ``strict`` is off).
        """
        if value is _UNSET:
            return self._status

        if isinstance(value, int) and not isinstance(value, bool):
            self._status = value
            return self._status

        code = lookup_status(value) if isinstance(value, str) else None
        if code is None:
            if get_config().http.strict:
                raise UnknownStatus(value)
            logger.warning("Ignoring unknown status", extra={'structured_data': {'status': value}})
        else:
            self._status = code
        return self._status

    @property
    def sent(self) -> bool:
        return self._sent

    def send(self, transport: Optional[Transport] = None) -> None:
        """
        Write the response to ``transport``, or to the transport of the
        current request context.

        Headers are only written when the transport has not sent any yet.
        The body is always written. State is kept, so sending again writes
        the body a second time.
        """
        if transport is None:
            transport = context.current_transport()

        if not transport.headers_sent:
            # Fails before anything is written when the stored status is not in the table
            reason = reason_phrase(self._status)
            transport.send_headers(self._status, reason, list(self._headers.items()))
        else:
            logger.debug("Headers already sent, writing body only")

        self._sent = True
        transport.write(self._body)

    def __repr__(self) -> str:
        return f"<Response {self._status} {STATUS_CODES.get(self._status, 'Unknown')}>"
