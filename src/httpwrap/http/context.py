"""
Request-scoped state.

The main request, the live environ and the transport are stored in
``contextvars`` so every thread or task handling a request sees its own
values.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping, Optional

from httpwrap.exceptions import NoActiveTransport
from httpwrap.http.transport import Transport

_environ: ContextVar[Optional[Mapping[str, Any]]] = ContextVar('httpwrap_environ', default=None)
_transport: ContextVar[Optional[Transport]] = ContextVar('httpwrap_transport', default=None)
main_request: ContextVar[Optional[Any]] = ContextVar('httpwrap_main_request', default=None)


@contextmanager
def request_context(environ: Optional[Mapping[str, Any]] = None,
                    transport: Optional[Transport] = None) -> Iterator[None]:
    """Bind an environ and a transport for the duration of one request."""
    tokens = (
        _environ.set(environ),
        _transport.set(transport),
        main_request.set(None),
    )
    try:
        yield
    finally:
        main_request.reset(tokens[2])
        _transport.reset(tokens[1])
        _environ.reset(tokens[0])


def current_environ() -> Optional[Mapping[str, Any]]:
    return _environ.get()


def current_transport() -> Transport:
    transport = _transport.get()
    if transport is None:
        raise NoActiveTransport()
    return transport
