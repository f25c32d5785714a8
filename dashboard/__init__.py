"""Dashboard server package initialization and logging configuration."""

from __future__ import annotations

import logging
import os
from logging.config import dictConfig

from ._version import __version__


FORMATTER = {
    'format': '%(asctime)s (v%(__version__)s) - %(levelname)-8s - (%(name)s): %(message)s',
    'datefmt': '%Y-%b-%d %H:%M:%S',
}

# Loggers that keep their own level and do not propagate to root
_UVICORN_LOGGERS = ('uvicorn', 'uvicorn.error')
_ACCESS_LOGGER = 'uvicorn.access'
_QUIET_LOGGERS = ('httpx', 'httpcore')


class _VersionFilter(logging.Filter):
    """Stamp each record with the running package version."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, '__version__'):
            record.__version__ = __version__
        return True


def _console_logger(level: str) -> dict:
    return {'handlers': ['console'], 'level': level, 'propagate': False}


def build_logging_config(level: str, access_level: str) -> dict:
    """Return the ``dictConfig`` mapping for the server.

    Everything goes to one console handler. Uvicorn keeps its own loggers so
    access logs can be tuned separately; HTTP client chatter is capped at
    WARNING.
    """
    loggers = {name: _console_logger(level) for name in _UVICORN_LOGGERS}
    loggers[_ACCESS_LOGGER] = _console_logger(access_level)
    loggers.update({name: _console_logger('WARNING') for name in _QUIET_LOGGERS})

    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'standard': dict(FORMATTER)},
        'filters': {'inject_version': {'()': _VersionFilter}},
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
                'filters': ['inject_version'],
            },
        },
        'root': {'handlers': ['console'], 'level': level},
        'loggers': loggers,
    }


def configure_logging(log_level: str | None = None) -> None:
    """Apply the server logging configuration.

    Args:
        log_level: Override log level.  Falls back to the ``DASH_LOG_LEVEL``
            environment variable, then ``"INFO"``.
    """

    level = (log_level or os.getenv('DASH_LOG_LEVEL', 'INFO')).upper()
    access_level = os.getenv('DASH_UVICORN_ACCESS_LOG_LEVEL', level).upper()
    dictConfig(build_logging_config(level, access_level))


configure_logging()

__all__ = ('FORMATTER', '__version__', 'build_logging_config', 'configure_logging')
