"""
Logging setup for MarkNote.

Console output is JSON unless ``debug`` is on, in which case it is
colored for humans. Everything from ``marknote.*`` also goes to a
rotating ``marknote.log``, and errors additionally to ``error.log``.
"""
import itertools
import json
import logging
import logging.config
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config import get_settings

# LogRecord attributes that are not user supplied ``extra`` fields
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}

# third party loggers: (level, handlers)
_LIBRARY_LOGGERS = {
    'uvicorn': ('INFO', ['console']),
    'uvicorn.access': ('WARNING', ['console']),
    'sqlalchemy': ('WARNING', ['file']),
    'alembic': ('INFO', ['console', 'file']),
    'httpx': ('WARNING', ['console']),
}

_ROTATE_BYTES = 10_000_000
_ROTATE_BACKUPS = 5


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields are nested under "extra"."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'location': f"{record.module}:{record.funcName}:{record.lineno}",
        }

        if record.exc_info and record.exc_info[0]:
            entry['exception'] = {
                'type': record.exc_info[0].__name__,
                'traceback': self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS}
        if extra:
            entry['extra'] = extra

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Level colored console output for local development."""

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1;35m',
    }
    DIM = '\033[90m'
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        # other handlers share the record
        record = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        record.levelname = f"{color}{record.levelname:<8}{self.RESET}"
        record.name = f"{self.DIM}{record.name}{self.RESET}"
        return super().format(record)


def get_log_level(level_str: Optional[str] = None) -> int:
    """Numeric level for a name, falling back to INFO for unknown names."""
    name = (level_str or get_settings().log_level).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _rotating_handler(path: Path, formatter: str, level: str) -> dict:
    return {
        'class': 'logging.handlers.RotatingFileHandler',
        'filename': str(path),
        'maxBytes': _ROTATE_BYTES,
        'backupCount': _ROTATE_BACKUPS,
        'encoding': 'utf-8',
        'formatter': formatter,
        'level': level,
    }


def build_logging_config(log_dir: Path) -> dict:
    """dictConfig for console plus rotating files in ``log_dir``."""
    settings = get_settings()

    loggers = {
        '': {'handlers': ['console', 'file'], 'level': 'INFO'},
        'marknote': {
            'handlers': ['console', 'file', 'error_file'],
            'level': 'DEBUG',
            'propagate': False,
        },
    }
    for name, (level, handlers) in _LIBRARY_LOGGERS.items():
        loggers[name] = {'handlers': handlers, 'level': level, 'propagate': False}

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s %(levelname)s %(name)s  %(message)s',
                'datefmt': '%H:%M:%S',
            },
            'file': {
                'format': settings.log_format,
                'datefmt': '%Y-%m-%d %H:%M:%S',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'colored' if settings.debug else 'json',
                'stream': sys.stdout,
                'level': get_log_level(),
            },
            'file': _rotating_handler(log_dir / 'marknote.log', 'file', 'DEBUG'),
            'error_file': _rotating_handler(log_dir / 'error.log', 'json', 'ERROR'),
        },
        'loggers': loggers,
    }


def setup_logging() -> None:
    """Configure handlers and formatters for the whole process."""
    settings = get_settings()

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(log_dir))

    get_logger('logging').info("Logging configured", extra={
        'log_level': settings.log_level,
        'log_dir': str(log_dir),
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the ``marknote`` namespace."""
    return logging.getLogger(f"marknote.{name}")


class LoggingMiddleware:
    """ASGI middleware logging one line per request and one per response."""

    _ids = itertools.count(1)

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = next(self._ids)
        started = time.perf_counter()
        client = scope.get('client')
        request_info = {
            'request_id': request_id,
            'method': scope['method'],
            'path': scope['path'],
        }

        self.logger.info("HTTP Request", extra={
            **request_info,
            'query_string': scope.get('query_string', b'').decode('latin-1'),
            'client_ip': client[0] if client else 'unknown',
        })

        def elapsed_ms() -> float:
            return round((time.perf_counter() - started) * 1000, 2)

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                status_code = message.get('status', 0)
                level = logging.WARNING if status_code >= 500 else logging.INFO
                self.logger.log(level, "HTTP Response", extra={
                    **request_info,
                    'status_code': status_code,
                    'duration_ms': elapsed_ms(),
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                **request_info,
                'duration_ms': elapsed_ms(),
                'exception_type': type(exc).__name__,
                'exception_message': str(exc),
            })
            raise
