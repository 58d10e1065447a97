"""
Response transports.

A transport is where a ``Response`` is written to. It remembers whether the
headers went out already so a response can never flush them twice.
"""

from typing import Callable, List, Optional, Tuple
import logging

from httpwrap.exceptions import HeadersAlreadySent

logger = logging.getLogger(__name__)

HeaderList = List[Tuple[str, str]]


class Transport:
    """Base transport. Subclasses implement ``_emit_headers`` and ``_emit_body``."""

    def __init__(self, http_version: str = "HTTP/1.1", charset: str = "utf-8"):
        self.http_version = http_version
        self.charset = charset
        self.headers_sent = False

    def send_headers(self, code: int, reason: str, headers: HeaderList) -> None:
        if self.headers_sent:
            raise HeadersAlreadySent()
        self._emit_headers(code, reason, headers)
        self.headers_sent = True
        logger.debug("Sent headers", extra={'structured_data': {'status': code, 'headers': len(headers)}})

    def write(self, body: str) -> None:
        self._emit_body(body.encode(self.charset))

    def _emit_headers(self, code: int, reason: str, headers: HeaderList) -> None:
        raise NotImplementedError

    def _emit_body(self, data: bytes) -> None:
        raise NotImplementedError


class BufferTransport(Transport):
    """Keeps everything in memory."""

    def __init__(self, http_version: str = "HTTP/1.1", charset: str = "utf-8"):
        super().__init__(http_version, charset)
        self.status_code: Optional[int] = None
        self.status_line: Optional[str] = None
        self.headers: HeaderList = []
        self.chunks: List[bytes] = []

    def _emit_headers(self, code: int, reason: str, headers: HeaderList) -> None:
        self.status_code = code
        self.status_line = f"{self.http_version} {code} {reason}"
        self.headers = list(headers)

    def _emit_body(self, data: bytes) -> None:
        self.chunks.append(data)

    @property
    def header_lines(self) -> List[str]:
        return [f"{name}: {value}" for name, value in self.headers]

    @property
    def body(self) -> str:
        return b"".join(self.chunks).decode(self.charset)

    @property
    def output(self) -> str:
        """Everything written so far, as it would appear on the wire."""
        head = ""
        if self.headers_sent:
            head = "\r\n".join([self.status_line] + self.header_lines) + "\r\n\r\n"
        return head + self.body


class StreamTransport(Transport):
    """
    Writes wire bytes to a binary stream.

    With ``cgi=True`` the status is sent as a ``Status:`` header, which is
    what CGI servers expect on standard output.
    """

    def __init__(self, stream, http_version: str = "HTTP/1.1", charset: str = "utf-8", cgi: bool = False):
        super().__init__(http_version, charset)
        self.stream = stream
        self.cgi = cgi

    def _emit_headers(self, code: int, reason: str, headers: HeaderList) -> None:
        if self.cgi:
            lines = [f"Status: {code} {reason}"]
        else:
            lines = [f"{self.http_version} {code} {reason}"]
        lines.extend(f"{name}: {value}" for name, value in headers)
        self.stream.write(("\r\n".join(lines) + "\r\n\r\n").encode("iso-8859-1"))

    def _emit_body(self, data: bytes) -> None:
        self.stream.write(data)
        if hasattr(self.stream, "flush"):
            self.stream.flush()


class WSGITransport(Transport):
    """Hands headers to ``start_response`` and collects body chunks for the WSGI iterable."""

    def __init__(self, start_response: Callable, http_version: str = "HTTP/1.1", charset: str = "utf-8"):
        super().__init__(http_version, charset)
        self.start_response = start_response
        self.chunks: List[bytes] = []

    def _emit_headers(self, code: int, reason: str, headers: HeaderList) -> None:
        self.start_response(f"{code} {reason}", list(headers))

    def _emit_body(self, data: bytes) -> None:
        self.chunks.append(data)
