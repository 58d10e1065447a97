"""
httpwrap HTTP components: request/response wrappers, transports and the
request context.
"""

from httpwrap.http.context import current_transport, request_context
from httpwrap.http.request import Request
from httpwrap.http.response import Response
from httpwrap.http.status import STATUS_CODES, lookup_status, reason_phrase
from httpwrap.http.transport import BufferTransport, StreamTransport, Transport, WSGITransport

__all__ = [
    "Request", "Response",
    "STATUS_CODES", "lookup_status", "reason_phrase",
    "Transport", "BufferTransport", "StreamTransport", "WSGITransport",
    "request_context", "current_transport",
]
