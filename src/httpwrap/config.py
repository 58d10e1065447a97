"""
httpwrap Configuration

Dataclass based settings read from the environment, following the same
``HTTPWRAP_*`` variable convention for every field.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('1', 'true', 'yes')


@dataclass
class HttpConfig:
    """Request/response behaviour"""
    http_version: str = field(default_factory=lambda: os.getenv('HTTPWRAP_HTTP_VERSION', 'HTTP/1.1'))
    charset: str = field(default_factory=lambda: os.getenv('HTTPWRAP_CHARSET', 'utf-8'))
    default_status: int = field(default_factory=lambda: int(os.getenv('HTTPWRAP_DEFAULT_STATUS', '200')))
    # Raise on invalid header values and unknown status strings instead of ignoring them
    strict: bool = field(default_factory=lambda: _env_bool('HTTPWRAP_STRICT', 'True'))


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = field(default_factory=lambda: os.getenv('HTTPWRAP_LOG_LEVEL', 'INFO'))
    json_format: bool = field(default_factory=lambda: _env_bool('HTTPWRAP_LOG_JSON', 'False'))


@dataclass
class AppConfig:
    """Main configuration"""
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Build a configuration from the current environment variables."""
        return cls(http=HttpConfig(), logging=LoggingConfig())


_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Return the active configuration, loading it from the environment on first use."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def set_config(config: Optional[AppConfig]) -> None:
    """Replace the active configuration. ``None`` reloads from the environment on next use."""
    global _config
    _config = config
