"""
Structured logging for the Supaco backend.

JSON lines in production (Gunicorn or PRODUCTION=true), a compact colored
format while developing. All application loggers live under the 'supaco'
namespace so one call to setup_logging() configures them.
"""

import os
import sys
import json
import logging
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'line': record.lineno,
        }

        context = getattr(record, 'context', None)
        if context:
            entry.update(context)

        if record.exc_info:
            entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Readable single-line format with level colors."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, '')
        reset = self.RESET if color else ''
        timestamp = datetime.now().strftime('%H:%M:%S')
        location = f'{record.module}:{record.lineno}'

        line = f'{color}[{timestamp}] {record.levelname:8}{reset} {location:28} {record.getMessage()}'

        context = getattr(record, 'context', None)
        if context:
            line += ' | ' + ' '.join(f'{k}={v}' for k, v in context.items())

        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)

        return line


def _use_json() -> bool:
    return (
        os.environ.get('PRODUCTION', '').lower() == 'true'
        or 'gunicorn' in os.environ.get('SERVER_SOFTWARE', '')
    )


def setup_logging(
    level: str = 'INFO',
    json_format: bool = None,
    logger_name: str = 'supaco',
) -> logging.Logger:
    """Configure and return the application root logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Force JSON output. Auto-detected when None.
        logger_name: Root logger name for the application.
    """
    if json_format is None:
        json_format = _use_json()

    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logger.level)
    handler.setFormatter(JSONFormatter() if json_format else DevelopmentFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = 'supaco') -> logging.Logger:
    """Get a logger, e.g. get_logger('supaco.assistant.chat')."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context):
    """Log a message with structured key/value fields attached."""
    logger.log(level, message, extra={'context': context})
