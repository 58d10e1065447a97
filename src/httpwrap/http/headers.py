"""Header name normalization and header value helpers."""

from typing import Any, Dict, Mapping

from httpwrap.exceptions import InvalidHeaderValue, UnsafeHeader

HTTP_PREFIX = "Http-"
CONTENT_MARKER = "Content-"

# Characters that would end a header line early
FORBIDDEN_HEADER_CHARS = ("\r", "\n", "\0")


def normalize_server_key(key: str) -> str:
    """
    Turn a server variable name into header form.

    ``HTTP_CONTENT_TYPE`` becomes ``Http-Content-Type``: the key is
    lowercased, underscores become hyphens and the first letter of every
    hyphen separated segment is upper-cased.
    """
    segments = key.lower().replace("_", "-").split("-")
    return "-".join(segment[:1].upper() + segment[1:] for segment in segments)


def headers_from_server(server: Mapping[str, Any]) -> Dict[str, Any]:
    """Derive request headers from the server variables."""
    headers: Dict[str, Any] = {}
    for key, value in server.items():
        name = normalize_server_key(str(key))
        if name.startswith(HTTP_PREFIX):
            headers[name[len(HTTP_PREFIX):]] = value
        elif CONTENT_MARKER in name:
            # CONTENT_TYPE and CONTENT_LENGTH come without the HTTP_ prefix
            headers[name] = value
    return headers


def check_header_text(name: str, text: str) -> str:
    """Reject text containing CR, LF or NUL."""
    if any(char in text for char in FORBIDDEN_HEADER_CHARS):
        raise UnsafeHeader(name, text)
    return text


def join_header_value(name: str, value: Any) -> str:
    """Collapse a header value to the string stored on a response."""
    if isinstance(value, str):
        return check_header_text(name, value)
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return check_header_text(name, ", ".join(value))
    raise InvalidHeaderValue(name, value)
