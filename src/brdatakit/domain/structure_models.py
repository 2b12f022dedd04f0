from __future__ import annotations

"""
Directory Structure Data Models.

Provides the recursive node type produced by the structure reader, together
with the two serializations exposed to consumers: the legacy mapping read by
the frontend and an explicit tagged form.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

logger = logging.getLogger(__name__)

FILES_KEY = "files"
DIRECTORY_KIND = "directory"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryNode:
    """
    One level of a data directory tree.

    File names and child directories live in separate fields, so a
    subdirectory literally named 'files' is a regular child.

    Attributes:
        files: JSON filenames found directly in the directory, in
               filesystem enumeration order.
        children: Subdirectory name to nested node.
    """
    files: Tuple[str, ...] = ()
    children: Mapping[str, "DirectoryNode"] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when the node holds neither files nor subdirectories."""
        return not self.files and not self.children

    def count_files(self) -> int:
        """Count JSON files in this node and all of its descendants."""
        return len(self.files) + sum(c.count_files() for c in self.children.values())

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the legacy wire format.

        Child directories are keys of the mapping; the file list sits under
        the reserved 'files' key and is omitted when empty. A child directory
        named 'files' is shadowed by the list.

        Returns:
            Dict[str, Any]: JSON-compatible nested mapping.
        """
        out: Dict[str, Any] = {}
        for name, child in self.children.items():
            out[name] = child.to_dict()

        if self.files:
            if FILES_KEY in out:
                logger.warning(
                    f"Directory named '{FILES_KEY}' is shadowed by the file list "
                    f"in the legacy format. Use the tagged format instead."
                )
            out[FILES_KEY] = list(self.files)
        return out

    def to_tagged_dict(self) -> Dict[str, Any]:
        """Serialize to the unambiguous tagged form."""
        return {
            "kind": DIRECTORY_KIND,
            "files": list(self.files),
            "children": {name: child.to_tagged_dict() for name, child in self.children.items()},
        }
