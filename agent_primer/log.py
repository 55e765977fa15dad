"""Logging setup shared by the CLI and library modules."""

from __future__ import annotations

import logging
import sys

LOGGER_NAME = "agent-primer"


class ConsoleHandler(logging.StreamHandler):
    """Message-only handler writing to stdout."""

    def __init__(self):
        super().__init__(sys.stdout)
        self.setFormatter(logging.Formatter("%(message)s"))


def resolve_level(level: str) -> int:
    """Numeric level for a name like ``"debug"``; INFO for anything unknown."""
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a ConsoleHandler to the package logger.

    Safe to call more than once; the handler is only added the first time.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(resolve_level(level))

    if not any(isinstance(h, ConsoleHandler) for h in logger.handlers):
        logger.addHandler(ConsoleHandler())

    return logger


def get_logger(area: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAME}.{area}")
