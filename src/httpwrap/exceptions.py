"""
Exceptions for the httpwrap package.

Every error raised by the request/response wrappers derives from
``HttpWrapError`` so callers can catch misuse in one place. Errors that
correspond to a built-in category also inherit from it (``TypeError`` for
bad header values, ``ValueError`` for unknown status identifiers).
"""

from typing import Any, Dict, Optional
import json


class HttpWrapError(Exception):
    """
    Base exception class for httpwrap.

    Carries a human readable message and a stable machine readable code.
    """

    def __init__(self, message: str, error_code: str = "httpwrap_error",
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary"""
        result = {"error": {"code": self.error_code, "message": self.message}}
        if self.details:
            result["error"]["details"] = self.details
        return result

    def to_json(self) -> str:
        """Convert exception to JSON string"""
        return json.dumps(self.to_dict(), default=str)

    def __str__(self) -> str:
        return f"{self.error_code}: {self.message}"


class InvalidHeaderValue(HttpWrapError, TypeError):
    """Header value is neither a string nor a sequence of strings"""

    def __init__(self, name: str, value: Any):
        super().__init__(
            f"Invalid value for header {name!r}: {type(value).__name__}",
            error_code="invalid_header_value",
            details={"header": name, "type": type(value).__name__},
        )
        self.name = name
        self.value = value


class UnsafeHeader(InvalidHeaderValue):
    """Header name or value contains CR, LF or NUL and would break the header block"""

    def __init__(self, name: str, value: Any):
        HttpWrapError.__init__(
            self,
            f"Header {name!r} contains a line break or NUL character",
            error_code="unsafe_header",
            details={"header": name},
        )
        self.name = name
        self.value = value


class InvalidBody(HttpWrapError, TypeError):
    """Response body is not a string"""

    def __init__(self, body: Any):
        super().__init__(
            f"Response body must be str, got {type(body).__name__}",
            error_code="invalid_body",
            details={"type": type(body).__name__},
        )
        self.body = body


class UnknownStatus(HttpWrapError, ValueError):
    """Status identifier does not match any entry of the status table"""

    def __init__(self, status: Any):
        super().__init__(
            f"Unknown status {status!r}",
            error_code="unknown_status",
            details={"status": status},
        )
        self.status = status


class HeadersAlreadySent(HttpWrapError):
    """Headers were already flushed to the transport"""

    def __init__(self, message: str = "Headers already sent"):
        super().__init__(message, error_code="headers_already_sent")


class NoActiveTransport(HttpWrapError):
    """No transport is bound to the current request context"""

    def __init__(self, message: str = "No transport bound to the current request context"):
        super().__init__(message, error_code="no_active_transport")


class RequestTerminated(HttpWrapError):
    """
    Signal that the current request was finished early.

    Raised after a response was already sent (see ``Response.redirect``).
    Request handlers should let it propagate; the host adapter catches it
    and ends the request without writing anything else.
    """

    def __init__(self, response: Any = None, message: str = "Request terminated"):
        super().__init__(message, error_code="request_terminated")
        self.response = response
