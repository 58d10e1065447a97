"""
HTTP status table and lookups.

``STATUS_CODES`` is used both to resolve status strings (``"404"`` or
``"Not Found"``) and to build the status line when a response is sent.
"""

from typing import Dict, Optional

from httpwrap.exceptions import UnknownStatus

STATUS_CODES: Dict[int, str] = {
    # Informational
    100: "Continue",
    101: "Switching Protocols",
    102: "Processing",

    # Success
    200: "OK",
    201: "Created",
    202: "Accepted",
    203: "Non-Authoritative Information",
    204: "No Content",
    205: "Reset Content",
    206: "Partial Content",
    207: "Multi-status",
    208: "Already Reported",

    # Redirection
    300: "Multiple Choices",
    301: "Moved Permanently",
    302: "Found",
    303: "See Other",
    304: "Not Modified",
    305: "Use Proxy",
    306: "Switch Proxy",  # deprecated
    307: "Temporary Redirect",

    # Client error
    400: "Bad Request",
    401: "Unauthorized",
    402: "Payment Required",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    406: "Not Acceptable",
    407: "Proxy Authentication Required",
    408: "Request Time-out",
    409: "Conflict",
    410: "Gone",
    411: "Length Required",
    412: "Precondition Failed",
    413: "Request Entity Too Large",
    414: "Request-URI Too Large",
    415: "Unsupported Media Type",
    416: "Requested range not satisfiable",
    417: "Expectation Failed",
    418: "I'm a teapot",
    422: "Unprocessable Entity",
    423: "Locked",
    424: "Failed Dependency",
    425: "Unordered Collection",
    426: "Upgrade Required",
    428: "Precondition Required",
    429: "Too Many Requests",
    431: "Request Header Fields Too Large",

    # Server error
    500: "Internal Server Error",
    501: "Not Implemented",
    502: "Bad Gateway",
    503: "Service Unavailable",
    504: "Gateway Time-out",
    505: "HTTP Version not supported",
    506: "Variant Also Negotiates",
    507: "Insufficient Storage",
    508: "Loop Detected",
    511: "Network Authentication Required",
}


def lookup_status(value: str) -> Optional[int]:
    """
    Find the code matching ``value``.

    ``value`` matches when it equals either the code written as a string or
    its reason phrase (exact, case-sensitive). Returns ``None`` when nothing
    matches.
    """
    for code, phrase in STATUS_CODES.items():
        if value == str(code) or value == phrase:
            return code
    return None


def reason_phrase(code: int) -> str:
    """Reason phrase for a known code."""
    try:
        return STATUS_CODES[code]
    except KeyError:
        raise UnknownStatus(code) from None


def status_line(code: int, http_version: str = "HTTP/1.1") -> str:
    return f"{http_version} {code} {reason_phrase(code)}"
