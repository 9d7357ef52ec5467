from __future__ import annotations

"""
Logging Bootstrap.

Wires the root logger for one CLI run: a stderr console handler and, with
'--log-file', a size-rotated file handler. Both sit behind a single
QueueHandler so file writes happen on the listener thread while the
conversion runs.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from orgoutline.infra.fs import get_user_data_dir

CONSOLE_FORMAT = "%(levelname)s | %(message)s"
FILE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_MAX_BYTES = 1024 * 1024
FILE_BACKUPS = 3

# Markers set on the root logger and on every handler we install
HANDLER_TAG_ATTR = "_orgoutline_handler"
LISTENER_ATTR = "_orgoutline_queue_listener"
CONFIGURED_ATTR = "_orgoutline_configured"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def get_default_log_path() -> str:
    """Log file used when '--log-file' is given without a path."""
    return os.path.join(get_user_data_dir(), "logs", "orgoutline.log")


def configure_logging(
        level: str = "WARNING",
        log_file: Optional[str] = None,
        *,
        force: bool = False,
) -> logging.Logger:
    """
    Configure the root logger for a CLI run.

    Only the first call takes effect unless force is set. Reconfiguring
    removes the handlers installed here and leaves foreign handlers (test
    runners, embedding applications) alone.

    Args:
        level: Level name such as 'DEBUG' or 'WARNING'. Unknown names map to WARNING.
        log_file: Optional path of a rotating log file.
        force: Rebuild the handlers even when already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, CONFIGURED_ATTR, False) and not force:
        return root

    level_int = logging.getLevelName(str(level).strip().upper())
    if not isinstance(level_int, int):
        level_int = logging.WARNING
    root.setLevel(level_int)
    _teardown(root)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    targets: List[logging.Handler] = [console]

    if log_file:
        try:
            targets.append(_open_log_file(log_file))
        except OSError as e:
            sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")

    for handler in targets:
        handler.setLevel(level_int)

    log_queue: queue.Queue = queue.Queue(-1)
    queue_handler = QueueHandler(log_queue)
    setattr(queue_handler, HANDLER_TAG_ATTR, True)

    listener = QueueListener(log_queue, *targets, respect_handler_level=True)
    listener.start()
    atexit.register(_stop_listener, listener)

    root.addHandler(queue_handler)
    setattr(root, LISTENER_ATTR, listener)
    setattr(root, CONFIGURED_ATTR, True)
    return root


def shutdown_logging() -> None:
    """Drain the queue, close our handlers and allow a fresh configure."""
    root = logging.getLogger()
    _teardown(root)
    if hasattr(root, CONFIGURED_ATTR):
        delattr(root, CONFIGURED_ATTR)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _open_log_file(path: str) -> RotatingFileHandler:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    handler = RotatingFileHandler(
        path, maxBytes=FILE_MAX_BYTES, backupCount=FILE_BACKUPS, encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    return handler


def _teardown(root: logging.Logger) -> None:
    _stop_listener(getattr(root, LISTENER_ATTR, None))
    setattr(root, LISTENER_ATTR, None)
    for h in list(root.handlers):
        if getattr(h, HANDLER_TAG_ATTR, False):
            root.removeHandler(h)
            h.close()


def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop the listener and close its handlers; safe to call twice."""
    if listener is None or getattr(listener, "_thread", None) is None:
        return
    listener.stop()
    for h in listener.handlers:
        h.close()
