from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, user data directory resolution, atomic text
writes and the tree copy/count primitives used by the snapshot builder.
Acts as a thin abstraction over 'os' and 'shutil'.
"""

import os
import shutil
import tempfile
from typing import Optional

from brdatakit.domain.constants import JSON_SUFFIX

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "brdatakit"
UNIX_APP_DIR_NAME = ".brdatakit"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/brdatakit
    - Linux/Mac: ~/.brdatakit

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and '~'. Reverts to
    fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use when the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILE WRITE API
# -----------------------------------------------------------------------------

def atomic_write_bytes(path: str, data: bytes) -> None:
    """
    Replace the content of 'path' without ever exposing a partial file.

    The payload goes to a temporary sibling which is then moved over the
    target. Raises OSError on failure; the original file is left as it was.
    The original file mode is kept.
    """
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", suffix=".part", dir=directory)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        if os.path.exists(path):
            shutil.copymode(path, tmp_path)
        os.replace(tmp_path, path)
    except OSError:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def write_text(path: str, text: str) -> None:
    """Write UTF-8 text, creating parent directories as needed."""
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

# -----------------------------------------------------------------------------
# TREE OPERATIONS API
# -----------------------------------------------------------------------------

def replace_tree(src: str, dest: str) -> None:
    """
    Copy the directory 'src' to 'dest', discarding any previous 'dest'.

    Raises OSError (shutil.Error included) on failure.
    """
    if os.path.exists(dest):
        shutil.rmtree(dest)
    shutil.copytree(src, dest)


def remove_path(path: str) -> None:
    """Delete a file or directory tree if it exists."""
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path, ignore_errors=True)
    elif os.path.lexists(path):
        os.remove(path)


def count_json_files(directory: str) -> int:
    """
    Count regular files ending in '.json' anywhere below 'directory'.

    Returns 0 for a missing directory.
    """
    if not os.path.isdir(directory):
        return 0

    count = 0
    for _root, _dirs, files in os.walk(directory):
        count += sum(1 for name in files if name.endswith(JSON_SUFFIX))
    return count
