from __future__ import annotations

"""
Encoding Repair Data Models.

Defines the Data Transfer Objects returned by the encoding normalizer for
single files and for batch runs, plus the snapshot build result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from brdatakit.domain.structure_models import DirectoryNode

ENCODING_UTF16_LE_BOM = "utf-16-le-bom"
ENCODING_UTF8_BOM = "utf-8-bom"
ENCODING_UTF8 = "utf-8"

# -----------------------------------------------------------------------------
# NORMALIZATION RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class EncodingResult:
    """
    Outcome of normalizing a single JSON file.

    Attributes:
        path: File that was processed.
        ok: True when the content was decoded and parsed as JSON.
        encoding: Source encoding detected from the byte prefix.
        rewritten: True when new bytes were written to disk.
        error: Failure description; empty on success.
    """
    path: str
    ok: bool
    encoding: str = ENCODING_UTF8
    rewritten: bool = False
    error: str = ""

    def __bool__(self) -> bool:
        return self.ok


@dataclass(frozen=True)
class BatchReport:
    """
    Aggregate of a batch normalization run.

    Attributes:
        directory: Directory that was scanned.
        results: Per-file results in processing order.
    """
    directory: str
    results: List[EncodingResult] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.results)

    @property
    def fixed(self) -> int:
        return sum(1 for r in self.results if r.ok and r.rewritten)

    @property
    def failed(self) -> List[EncodingResult]:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failed

# -----------------------------------------------------------------------------
# SNAPSHOT RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SnapshotResult:
    """
    Artifacts produced by a successful snapshot build.

    Attributes:
        output_file: Path of the written structure file.
        publish_dir: Path of the copied data tree.
        json_files: Number of JSON files found in the copy.
        structure: The node tree that was serialized.
    """
    output_file: str
    publish_dir: str
    json_files: int
    structure: DirectoryNode

    def summary(self) -> Dict[str, Any]:
        return {
            "output_file": self.output_file,
            "publish_dir": self.publish_dir,
            "json_files": self.json_files,
        }
