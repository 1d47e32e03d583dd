# ffshell/common/logging.py
from __future__ import annotations

import logging
import shlex
from typing import Iterable

DEFAULT_LOGGER_NAME = "ffshell"


def get_logger(name: str = DEFAULT_LOGGER_NAME, level: int | str | None = None) -> logging.Logger:
    """
    Return a package logger.
    If no handlers are set anywhere, we add a basicConfig once so CLI runs
    and ad-hoc scripts still print something.
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers and not logger.handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if level is not None:
        logger.setLevel(level)
    return logger


def set_level(level: int | str) -> None:
    """Apply a level to the package root logger (children inherit it)."""
    if isinstance(level, str):
        level = level.strip().upper()
    logging.getLogger(DEFAULT_LOGGER_NAME).setLevel(level)


def format_command(parts: Iterable[str]) -> str:
    """Shell-quoted rendering of a command line, for logs and error messages."""
    return " ".join(shlex.quote(str(p)) for p in parts)
