"""
Unit tests for Response
"""
import logging

import pytest

from httpwrap import Response, StreamTransport
from httpwrap.exceptions import (
    HeadersAlreadySent, InvalidBody, InvalidHeaderValue, NoActiveTransport, RequestTerminated, UnknownStatus,
    UnsafeHeader,
)


class TestResponseState:
    """Test header, body and status handling"""

    def test_defaults(self):
        response = Response()
        assert response.headers == {}
        assert response.body() == ""
        assert response.status() == 200
        assert response.sent is False

    def test_default_status_from_config(self, config):
        config.http.default_status = 204
        assert Response().status() == 204

    def test_initial_values(self):
        response = Response({"Content-Type": "text/html", "Vary": ["Accept", "Cookie"]}, "<p>hi</p>", "Created")
        assert response.headers == {"Content-Type": "text/html", "Vary": "Accept, Cookie"}
        assert response.body() == "<p>hi</p>"
        assert response.status() == 201

    def test_header_overwrites(self):
        response = Response()
        response.header("X-Test", "one")
        response.header("X-Test", "two")
        assert response.get_header("X-Test") == "two"

    def test_header_list_is_joined(self):
        response = Response()
        response.header("Accept", ["text/html", "application/json"])
        assert response.get_header("Accept") == "text/html, application/json"

    def test_invalid_header_raises_and_keeps_value(self):
        response = Response()
        response.header("X-Count", "1")
        with pytest.raises(InvalidHeaderValue):
            response.header("X-Count", 2)
        assert response.get_header("X-Count") == "1"

    def test_invalid_header_ignored_when_lenient(self, lenient_config, caplog):
        response = Response()
        with caplog.at_level(logging.WARNING, logger="httpwrap"):
            response.header("X-Count", 2)
        assert response.get_header("X-Count") is None
        assert "Ignoring invalid header value" in caplog.text

    def test_line_break_in_value_rejected(self):
        response = Response()
        response.header("X-Next", "/home")
        with pytest.raises(UnsafeHeader):
            response.header("X-Next", "/home\r\nSet-Cookie: admin=1")
        assert response.headers == {"X-Next": "/home"}

    @pytest.mark.parametrize("name", ["X-Test\r\nSet-Cookie", "X-Test\n", "X\0Test"])
    def test_line_break_in_name_rejected(self, name):
        response = Response()
        with pytest.raises(UnsafeHeader):
            response.header(name, "1")
        assert response.headers == {}

    def test_line_break_rejected_when_lenient(self, lenient_config):
        """Lenient mode never lets a header line be split"""
        with pytest.raises(UnsafeHeader):
            Response({"Location": "/a\r\nX-Injected: 1"})

    def test_headers_property_is_a_copy(self):
        response = Response({"X-Test": "1"})
        response.headers["X-Test"] = "changed"
        assert response.get_header("X-Test") == "1"

    def test_body_overwrites(self):
        response = Response(body="first")
        response.body("second")
        assert response.body() == "second"

    @pytest.mark.parametrize("value", [None, 123, b"bytes", ["a"]])
    def test_non_string_body_rejected(self, value):
        with pytest.raises(InvalidBody) as exc_info:
            Response(body=value)
        assert isinstance(exc_info.value, TypeError)
        assert exc_info.value.error_code == "invalid_body"

    def test_invalid_body_keeps_previous(self):
        response = Response(body="first")
        with pytest.raises(InvalidBody):
            response.body(123)
        assert response.body() == "first"

    def test_integer_status_is_not_validated(self):
        response = Response()
        response.status(299)
        assert response.status() == 299

    def test_status_code_string_and_phrase_match(self):
        by_code = Response()
        by_code.status("404")
        by_phrase = Response()
        by_phrase.status("Not Found")
        assert by_code.status() == by_phrase.status() == 404

    def test_unknown_status_string_keeps_previous(self):
        response = Response()
        response.status(200)
        with pytest.raises(UnknownStatus):
            response.status("Not a real code")
        assert response.status() == 200

    def test_unknown_status_ignored_when_lenient(self, lenient_config):
        response = Response()
        response.status(200)
        response.status("Not a real code")
        assert response.status() == 200

    def test_non_string_status_rejected(self):
        response = Response()
        with pytest.raises(UnknownStatus):
            response.status(4.04)
        assert response.status() == 200

    def test_repr(self):
        assert repr(Response(status=404)) == "<Response 404 Not Found>"
        assert repr(Response(status=299)) == "<Response 299 Unknown>"


class TestResponseSend:
    """Test Response.send"""

    def test_send(self, transport):
        response = Response({"Content-Type": "text/html"}, "<h1>Hello World</h1>", 200)
        response.send(transport)
        assert transport.status_line == "HTTP/1.1 200 OK"
        assert transport.header_lines == ["Content-Type: text/html"]
        assert transport.body == "<h1>Hello World</h1>"
        assert response.sent is True

    def test_send_output(self, transport):
        Response({"Location": "/home"}, "", "Found").send(transport)
        assert transport.output == "HTTP/1.1 302 Found\r\nLocation: /home\r\n\r\n"

    def test_send_uses_context_transport(self, bound_transport):
        Response(body="ok").send()
        assert bound_transport.status_code == 200
        assert bound_transport.body == "ok"

    def test_send_without_transport(self):
        with pytest.raises(NoActiveTransport):
            Response().send()

    def test_send_unknown_status_fails_before_writing(self, transport):
        response = Response(body="never")
        response.status(299)
        with pytest.raises(UnknownStatus):
            response.send(transport)
        assert transport.headers_sent is False
        assert transport.chunks == []
        assert response.sent is False

    def test_invalid_body_never_reaches_transport(self, transport):
        with pytest.raises(InvalidBody):
            Response(body=None).send(transport)
        assert transport.headers_sent is False
        assert transport.chunks == []

    def test_send_after_rejected_body(self, transport):
        """A rejected body leaves a response that still sends cleanly"""
        response = Response(body="ok")
        with pytest.raises(InvalidBody):
            response.body(None)
        response.send(transport)
        assert transport.body == "ok"

    def test_send_twice_writes_body_only(self, transport):
        response = Response({"X-Test": "1"}, "body")
        response.send(transport)
        response.send(transport)
        assert transport.header_lines == ["X-Test: 1"]
        assert transport.body == "bodybody"

    def test_send_after_transport_flushed(self, transport):
        """Headers are skipped when the transport already sent some"""
        Response({"X-First": "1"}, "a").send(transport)
        Response({"X-Second": "2"}, "b", 500).send(transport)
        assert transport.status_code == 200
        assert transport.header_lines == ["X-First: 1"]
        assert transport.body == "ab"

    def test_state_kept_after_send(self, transport):
        response = Response({"X-Test": "1"}, "body", 201)
        response.send(transport)
        assert response.headers == {"X-Test": "1"}
        assert response.body() == "body"
        assert response.status() == 201

    def test_header_after_send_rejected(self, transport):
        response = Response()
        response.send(transport)
        with pytest.raises(HeadersAlreadySent):
            response.header("X-Late", "1")
        assert response.get_header("X-Late") is None


class TestRedirect:
    """Test Response.redirect"""

    def test_refresh_redirect(self, transport):
        reached = False
        with pytest.raises(RequestTerminated) as exc_info:
            Response.redirect("/login", "Refresh", 302, transport=transport)
            reached = True

        assert reached is False
        assert transport.status_code == 302
        assert transport.header_lines == ["Refresh: 0;url=/login"]
        assert transport.body == ""
        assert exc_info.value.response.status() == 302

    def test_location_redirect_defaults(self, bound_transport):
        with pytest.raises(RequestTerminated):
            Response.redirect("/home")
        assert bound_transport.status_line == "HTTP/1.1 301 Moved Permanently"
        assert bound_transport.header_lines == ["Location: /home"]

    def test_unknown_redirect_method(self, transport):
        with pytest.raises(ValueError):
            Response.redirect("/home", "Teleport", transport=transport)
        assert transport.headers_sent is False

    def test_redirect_with_unknown_code(self, transport):
        with pytest.raises(UnknownStatus):
            Response.redirect("/home", code=399, transport=transport)
        assert transport.headers_sent is False

    def test_redirect_path_with_line_break(self, stream):
        """A path carrying CRLF cannot add headers to the CGI output"""
        transport = StreamTransport(stream, cgi=True)
        with pytest.raises(UnsafeHeader):
            Response.redirect("/home\r\nSet-Cookie: admin=1", transport=transport)
        assert transport.headers_sent is False
        assert stream.getvalue() == b""

    def test_refresh_path_with_line_break(self, transport):
        with pytest.raises(UnsafeHeader):
            Response.redirect("/home\nX-Injected: 1", "Refresh", 302, transport=transport)
        assert transport.headers_sent is False
        assert transport.chunks == []
