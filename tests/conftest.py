from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation so the 'src' directory is importable without install.
2. Shared fixtures: a sample data directory and a validated configuration.
"""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """
    Create a sample data directory.

    Structure:
    /BR_Data
      battle_1.json
      battle_2.json
      notes.txt
      /season_2
        round_1.json
        /empty
    """
    root = tmp_path / "BR_Data"
    root.mkdir()
    (root / "battle_1.json").write_text(json.dumps({"team": "A"}), encoding="utf-8")
    (root / "battle_2.json").write_text(json.dumps({"team": "B"}), encoding="utf-8")
    (root / "notes.txt").write_text("not data", encoding="utf-8")

    season = root / "season_2"
    season.mkdir()
    (season / "round_1.json").write_text("[1, 2, 3]", encoding="utf-8")
    (season / "empty").mkdir()

    return root


@pytest.fixture
def app_config(tmp_path: Path, data_dir: Path) -> Dict[str, Any]:
    """Return a complete, validated configuration rooted in tmp_path."""
    public = tmp_path / "public"
    return {
        "data_dir": str(data_dir),
        "output_file": str(public / "br-data-structure.json"),
        "publish_dir": str(public / "BR_Data"),
        "host": "127.0.0.1",
        "port": 5174,
        "structure_endpoint": "br-data-structure",
        "data_mount": "BR_Data",
        "settle_delay": 0.0,
        "recursive": False,
    }
