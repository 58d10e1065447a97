"""
httpwrap Test Configuration and Fixtures
"""
import io

import pytest
from faker import Faker

from httpwrap import AppConfig, BufferTransport, HttpConfig, StreamTransport, request_context, set_config


@pytest.fixture
def faker():
    """Faker instance for generating test data."""
    return Faker()


@pytest.fixture(autouse=True)
def config():
    """Fresh strict configuration for every test."""
    config = AppConfig(http=HttpConfig(http_version="HTTP/1.1", charset="utf-8", default_status=200, strict=True))
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def lenient_config(config):
    """Configuration that ignores invalid input instead of raising."""
    config.http.strict = False
    return config


@pytest.fixture
def environ():
    """Factory for WSGI environ dictionaries."""
    def make(method="GET", path="/", query="", body=b"", **extra):
        env = {
            "REQUEST_METHOD": method,
            "SCRIPT_NAME": "",
            "PATH_INFO": path,
            "QUERY_STRING": query,
            "SERVER_NAME": "testserver",
            "SERVER_PORT": "80",
            "SERVER_PROTOCOL": "HTTP/1.1",
            "wsgi.input": io.BytesIO(body),
            "wsgi.url_scheme": "http",
        }
        if body:
            env["CONTENT_LENGTH"] = str(len(body))
        env.update(extra)
        return env

    return make


@pytest.fixture
def transport():
    """In-memory transport."""
    return BufferTransport()


@pytest.fixture
def stream():
    """Binary stream standing in for CGI standard output."""
    return io.BytesIO()


@pytest.fixture
def stream_transport(stream):
    """Transport writing wire bytes to ``stream``."""
    return StreamTransport(stream)


@pytest.fixture
def bound_transport(transport):
    """``transport`` bound to a request context for the duration of the test."""
    with request_context({"REQUEST_METHOD": "GET"}, transport):
        yield transport


# Custom markers
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
