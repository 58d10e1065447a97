"""
Logging setup for httpwrap.

Modules log through ``logging.getLogger(__name__)``; this module only
provides the formatters and a helper that wires a console handler onto the
package logger.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from httpwrap.config import LoggingConfig

PACKAGE_LOGGER = 'httpwrap'


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        structured_data = getattr(record, 'structured_data', {})

        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        for key, value in structured_data.items():
            if key not in log_entry:
                log_entry[key] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class StructuredFormatter(logging.Formatter):
    """Human-readable structured formatter"""

    def __init__(self, fmt=None, datefmt=None):
        if fmt is None:
            fmt = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        super().__init__(fmt, datefmt)

    def format(self, record: logging.LogRecord) -> str:
        structured_data = getattr(record, 'structured_data', {})
        message = super().format(record)

        extra_parts = [f"{key}={value}" for key, value in structured_data.items()]
        if extra_parts:
            message += f" {{{', '.join(extra_parts)}}}"

        return message


def configure_logging(config: Optional[LoggingConfig] = None, stream=None) -> logging.Logger:
    """Install a single console handler on the package logger."""
    config = config or LoggingConfig()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter() if config.json_format else StructuredFormatter())
    logger.addHandler(handler)
    return logger
