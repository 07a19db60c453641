from __future__ import annotations

"""
Logging Handler Factories.

Every handler created here is tagged so that re-configuration removes only
our own handlers and leaves those installed by the host (e.g. pytest's
capture handler) in place.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_archinspector_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_own_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def create_console_handler(level: int, fmt: str) -> logging.Handler:
    """stderr handler, leaving stdout free for command output."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return tag_handler(handler)


def create_file_handler(
        log_file: str,
        level: int,
        fmt: str,
        datefmt: str,
        max_bytes: int,
        backup_count: int,
) -> Optional[logging.Handler]:
    """
    Rotating UTF-8 file handler.

    Returns None (after a warning on stderr) when the file cannot be opened,
    so a bad log path never prevents the application from starting.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return tag_handler(handler)
