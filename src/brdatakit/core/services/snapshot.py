from __future__ import annotations

"""
Build-Time Snapshot Generator.

Writes the data structure to a JSON file and copies the data tree into the
publish directory so a static build can fetch both. The step is a build
gate: either a complete, validated snapshot is produced or nothing is left
behind and SnapshotError is raised.
"""

import json
import logging
import os

from brdatakit.core.services.structure_reader import read_data_structure
from brdatakit.domain.encoding_models import SnapshotResult
from brdatakit.domain.errors import SnapshotError
from brdatakit.domain.structure_models import DirectoryNode
from brdatakit.infra.fs import count_json_files, remove_path, replace_tree, write_text

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_snapshot(data_dir: str, output_file: str, publish_dir: str) -> SnapshotResult:
    """
    Generate the structure file and the published copy of the data tree.

    Args:
        data_dir: Source data directory.
        output_file: Destination of the structure JSON.
        publish_dir: Destination of the copied data tree. Replaced if present.

    Returns:
        SnapshotResult: Paths and counts of the produced artifacts.

    Raises:
        SnapshotError: If reading, writing, copying or validation fails.
                       Artifacts from this run are removed first.
    """
    try:
        structure = read_data_structure(data_dir)
    except OSError as e:
        raise SnapshotError(f"Failed to read data structure from '{data_dir}': {e}") from e

    if structure is None:
        raise SnapshotError(f"Data directory not found: {data_dir}")

    try:
        _write_structure(structure, output_file)
        logger.info(f"Wrote structure to {output_file}")

        replace_tree(data_dir, publish_dir)
        logger.info(f"Copied {data_dir} to {publish_dir}")

        json_files = _validate(structure, output_file, publish_dir)
    except (OSError, SnapshotError) as e:
        logger.error(f"Snapshot aborted, removing partial artifacts: {e}")
        remove_path(output_file)
        remove_path(publish_dir)
        if isinstance(e, SnapshotError):
            raise
        raise SnapshotError(f"Failed to generate snapshot: {e}") from e

    return SnapshotResult(
        output_file=output_file,
        publish_dir=publish_dir,
        json_files=json_files,
        structure=structure,
    )

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _write_structure(structure: DirectoryNode, output_file: str) -> None:
    write_text(output_file, json.dumps(structure.to_dict(), ensure_ascii=False, indent=2))


def _validate(structure: DirectoryNode, output_file: str, publish_dir: str) -> int:
    """Check the produced artifacts and return the number of copied JSON files."""
    if not os.path.isfile(output_file) or os.path.getsize(output_file) == 0:
        raise SnapshotError(f"Structure file is empty or missing at {output_file}")

    if structure.is_empty:
        raise SnapshotError("Data structure is empty. Aborting build.")

    json_files = count_json_files(publish_dir)
    if json_files == 0:
        raise SnapshotError(f"No .json files found in {publish_dir} after copy. Aborting build.")

    return json_files
