from __future__ import annotations

"""
Unit tests for the Build-Time Snapshot Generator.

Verifies artifact generation, stale copy replacement and the
all-or-nothing guarantee on validation failures.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from brdatakit.core.services.snapshot import build_snapshot
from brdatakit.domain.errors import SnapshotError


def _targets(tmp_path: Path):
    public = tmp_path / "public"
    return public / "br-data-structure.json", public / "BR_Data"


def test_snapshot_writes_structure_and_copies_tree(tmp_path: Path, data_dir: Path) -> None:
    out_file, publish = _targets(tmp_path)

    result = build_snapshot(str(data_dir), str(out_file), str(publish))

    assert result.json_files == 3
    written = json.loads(out_file.read_text(encoding="utf-8"))
    assert sorted(written["files"]) == ["battle_1.json", "battle_2.json"]
    assert written["season_2"]["files"] == ["round_1.json"]
    assert (publish / "season_2" / "round_1.json").exists()
    assert (publish / "notes.txt").exists()
    assert result.summary()["publish_dir"] == str(publish)


def test_snapshot_replaces_stale_copy(tmp_path: Path, data_dir: Path) -> None:
    out_file, publish = _targets(tmp_path)
    publish.mkdir(parents=True)
    (publish / "stale.json").write_text("{}", encoding="utf-8")

    build_snapshot(str(data_dir), str(out_file), str(publish))

    assert not (publish / "stale.json").exists()


def test_missing_data_dir_is_fatal(tmp_path: Path) -> None:
    out_file, publish = _targets(tmp_path)

    with pytest.raises(SnapshotError, match="not found"):
        build_snapshot(str(tmp_path / "missing"), str(out_file), str(publish))

    assert not out_file.exists()


def test_tree_without_json_aborts_and_leaves_nothing(tmp_path: Path) -> None:
    source = tmp_path / "BR_Data"
    (source / "sub").mkdir(parents=True)
    (source / "sub" / "readme.txt").write_text("no data", encoding="utf-8")
    out_file, publish = _targets(tmp_path)

    with pytest.raises(SnapshotError, match="No .json files"):
        build_snapshot(str(source), str(out_file), str(publish))

    assert not out_file.exists()
    assert not publish.exists()


def test_empty_data_dir_aborts(tmp_path: Path) -> None:
    source = tmp_path / "BR_Data"
    source.mkdir()
    out_file, publish = _targets(tmp_path)

    with pytest.raises(SnapshotError, match="empty"):
        build_snapshot(str(source), str(out_file), str(publish))

    assert not out_file.exists()
    assert not publish.exists()


def test_copy_failure_rolls_back_structure_file(tmp_path: Path, data_dir: Path) -> None:
    out_file, publish = _targets(tmp_path)

    with patch("brdatakit.core.services.snapshot.replace_tree",
               side_effect=OSError("disk full")):
        with pytest.raises(SnapshotError, match="disk full"):
            build_snapshot(str(data_dir), str(out_file), str(publish))

    assert not out_file.exists()


def test_read_failure_is_wrapped(tmp_path: Path, data_dir: Path) -> None:
    out_file, publish = _targets(tmp_path)

    with patch("brdatakit.core.services.snapshot.read_data_structure",
               side_effect=PermissionError("denied")):
        with pytest.raises(SnapshotError, match="denied"):
            build_snapshot(str(data_dir), str(out_file), str(publish))
