from __future__ import annotations

"""
Logging Configuration Model.

Immutable settings consumed by configure_logging, plus the mapping from
level names to numeric logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the logging subsystem.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit to stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Rotation threshold of the log file.
        backup_count: Rotated segments kept on disk.
        console_fmt: Format of stderr lines.
        file_fmt: Format of file lines.
        datefmt: Timestamp format of file lines.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(threadName)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_int(self) -> int:
        return _LEVEL_MAP.get(str(self.level or "").strip().upper(), logging.INFO)
