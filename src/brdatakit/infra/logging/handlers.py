from __future__ import annotations

"""
Logging Handlers.

Handler factories with the fixed formats and rotation limits of brdatakit,
plus the tag that tells our handlers apart from ones added by Flask,
Werkzeug or pytest.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_brdatakit_handler"

_CONSOLE_FMT = "%(levelname)s | %(message)s"
_FILE_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FMT = "%Y-%m-%d %H:%M:%S"

_LOG_MAX_BYTES = 512 * 1024
_LOG_BACKUP_COUNT = 2


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int) -> logging.Handler:
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(logging.Formatter(_CONSOLE_FMT))
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(log_file: str, level_int: int) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its directory.

    Returns None (after a warning on stderr) if the file cannot be opened,
    so a bad --log-file path never stops the command itself.
    """
    try:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=_LOG_MAX_BYTES,
            backupCount=_LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(logging.Formatter(_FILE_FMT, datefmt=_DATE_FMT))
    _tag_handler(fh)
    return fh
