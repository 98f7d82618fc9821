"""
Root logger setup.

Every module logs through `logging.getLogger(__name__)`; this module only
decides level and format once per process.
"""

from __future__ import annotations

import logging
import sys

from . import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s env=%(app_env)s %(message)s"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class _AppEnvFilter(logging.Filter):
    def __init__(self, app_env: str) -> None:
        super().__init__()
        self.app_env = app_env

    def filter(self, record: logging.LogRecord) -> bool:
        record.app_env = self.app_env
        return True


def level_from_name(name: str) -> int:
    # Unknown names fall back to ERROR, same as an unset LOG_LEVEL.
    return _LEVELS.get((name or "").strip().lower(), logging.ERROR)


def configure_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_AppEnvFilter(settings.app_env()))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level_from_name(settings.log_level()))
