from __future__ import annotations

"""
Logging Core Orchestrator.

Maintains the idempotent lifecycle of the logging subsystem. Records flow
through a QueueHandler to a QueueListener so file writes never block the
request thread of the HTTP server or the watcher's observer thread.
"""

import atexit
import logging
import os
import queue
import sys
from dataclasses import dataclass
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from brdatakit.infra.fs import get_user_data_dir
from brdatakit.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_brdatakit_configured"
_QUEUE_LISTENER_ATTR: str = "_brdatakit_queue_listener"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Logging options exposed on the command line.

    Attributes:
        level: Minimum severity name (DEBUG, INFO, ...).
        console: Emit records on stderr.
        log_file: Optional rotating log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = "brdatakit.log") -> str:
    """Resolve the default log file inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once, using non-blocking I/O.

    Repeated calls are no-ops unless 'force' is set, in which case our
    previous handlers and listener are torn down first.

    Args:
        cfg: Structural configuration for the logging system.
        force: Re-initialize even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    try:
        already_configured = bool(getattr(root, _CONFIGURED_FLAG_ATTR, False))
        if already_configured and not force:
            return root

        level_int = _parse_level(cfg.level)
        root.setLevel(level_int)

        _remove_our_handlers(root)
        _stop_existing_listener(root)

        handlers_list: List[logging.Handler] = []

        if cfg.console:
            handlers_list.append(_create_console_handler(level_int))

        if cfg.log_file:
            fh = _create_rotating_file_handler(cfg.log_file, level_int)
            if fh:
                handlers_list.append(fh)

        if not handlers_list:
            return root

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)

        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        root.addHandler(queue_handler)

        setattr(root, _QUEUE_LISTENER_ATTR, listener)
        setattr(root, _CONFIGURED_FLAG_ATTR, True)

        # Flush pending records on interpreter shutdown
        atexit.register(_safe_stop_listener, listener)

        return root

    except Exception:
        fallback = logging.getLogger()
        fallback.setLevel(logging.INFO)
        _remove_our_handlers(fallback)

        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(sh)
        fallback.addHandler(sh)

        fallback.warning("Logging infrastructure failed. Switched to plain console output.", exc_info=True)
        return fallback


def shutdown_logging() -> None:
    """Stop the listener and detach our handlers, flushing queued records."""
    root = logging.getLogger()
    _stop_existing_listener(root)
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    value = logging.getLevelName(str(level or "INFO").strip().upper())
    return value if isinstance(value, int) else logging.INFO


def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_existing_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating double-stop calls.

    The atexit hook may run after a test or a forced re-configuration has
    already stopped the listener; its internal thread is None by then.
    """
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
