from __future__ import annotations

"""
Data Structure Reader.

Walks a data directory and builds the DirectoryNode tree describing its
subdirectories and the JSON files found at each level. This is the table
of contents served to the frontend and written by the snapshot builder.
"""

import logging
import os
from typing import Dict, List, Optional

from brdatakit.domain.constants import JSON_SUFFIX
from brdatakit.domain.structure_models import DirectoryNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_data_structure(dir_path: str) -> Optional[DirectoryNode]:
    """
    Recursively read a directory into a DirectoryNode tree.

    Subdirectories become children keyed by name; regular files ending in
    '.json' are collected in enumeration order. Other entries are skipped.
    Symlinked directories are followed and no cycle guard is applied, so
    the input must be a trusted local data directory.

    Args:
        dir_path: Directory to read.

    Returns:
        Optional[DirectoryNode]: The tree, or None if 'dir_path' is not a
                                 directory.

    Raises:
        OSError: If a directory inside the tree cannot be listed.
    """
    if not os.path.isdir(dir_path):
        logger.debug(f"Not a directory, no structure to read: {dir_path}")
        return None

    logger.debug(f"Reading data structure from: {dir_path}")
    return _read_node(dir_path)

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _read_node(dir_path: str) -> DirectoryNode:
    files: List[str] = []
    children: Dict[str, DirectoryNode] = {}

    with os.scandir(dir_path) as entries:
        for entry in entries:
            if entry.is_dir():
                children[entry.name] = _read_node(entry.path)
            elif entry.is_file() and entry.name.endswith(JSON_SUFFIX):
                files.append(entry.name)

    return DirectoryNode(files=tuple(files), children=children)
