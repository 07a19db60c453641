from __future__ import annotations

"""
Logging Core Orchestrator.

Configures the root logger once per process. Records go through a
QueueHandler to a QueueListener thread that owns the real handlers, so
archive decoding workers and network calls never block on log I/O.
"""

import atexit
import logging
import os
import queue
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from archinspector.infra.fs import get_user_data_dir
from archinspector.infra.logging.config import LoggingConfig
from archinspector.infra.logging.handlers import (
    create_console_handler,
    create_file_handler,
    is_own_handler,
    tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_archinspector_configured"
_QUEUE_LISTENER_ATTR: str = "_archinspector_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "archinspector.log") -> str:
    """Log file location inside the per-user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger idempotently.

    A second call is a no-op unless force is True, in which case our
    previous handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = cfg.level_int
    root.setLevel(level)
    shutdown_logging(root)

    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(create_console_handler(level, cfg.console_fmt))
    if cfg.log_file:
        fh = create_file_handler(
            cfg.log_file, level, cfg.file_fmt, cfg.datefmt, cfg.max_bytes, cfg.backup_count
        )
        if fh is not None:
            handlers.append(fh)

    if not handlers:
        return root

    log_queue: "queue.Queue[logging.LogRecord]" = queue.Queue(-1)
    listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    listener.start()

    root.addHandler(tag_handler(QueueHandler(log_queue)))
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    # Flush pending records on interpreter exit
    atexit.register(_stop_listener, listener)
    return root


def shutdown_logging(root: Optional[logging.Logger] = None) -> None:
    """Detach our handlers, stop the listener and clear the configured flag."""
    root = root or logging.getLogger()

    for handler in list(root.handlers):
        if is_own_handler(handler):
            root.removeHandler(handler)
            handler.close()

    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener is not None:
        _stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)

    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _stop_listener(listener: QueueListener) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
