from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stream output and filesystem side effects of the build snapshot and the
encoding repair.
"""

import codecs
import json
import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "brdatakit" / "main.py"


def run_cli(args: List[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    Injects 'src' into PYTHONPATH so the package resolves without install.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    for key in list(env):
        if key.startswith("BRDATA_"):
            del env[key]

    cmd = [sys.executable, str(ENTRY_POINT)] + args
    return subprocess.run(cmd, cwd=cwd, env=env, capture_output=True, text=True, encoding="utf-8")


def test_snapshot_happy_path_with_default_layout(tmp_path: Path, data_dir: Path) -> None:
    """Defaults resolve BR_Data and public/ relative to the working directory."""
    result = run_cli(["snapshot"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    structure = json.loads((tmp_path / "public" / "br-data-structure.json").read_text(encoding="utf-8"))
    assert structure["season_2"]["files"] == ["round_1.json"]
    assert (tmp_path / "public" / "BR_Data" / "battle_1.json").exists()


def test_snapshot_without_json_files_fails(tmp_path: Path) -> None:
    source = tmp_path / "BR_Data" / "nested"
    source.mkdir(parents=True)
    (source / "readme.txt").write_text("nothing here", encoding="utf-8")

    result = run_cli(["snapshot"], cwd=tmp_path)

    assert result.returncode != 0
    assert "ERROR" in result.stderr
    assert not (tmp_path / "public" / "br-data-structure.json").exists()
    assert not (tmp_path / "public" / "BR_Data").exists()


def test_snapshot_missing_data_dir_fails(tmp_path: Path) -> None:
    result = run_cli(["snapshot"], cwd=tmp_path)

    assert result.returncode == 1


def test_fix_encoding_end_to_end(tmp_path: Path) -> None:
    data = tmp_path / "BR_Data"
    data.mkdir()
    (data / "export.json").write_bytes(codecs.BOM_UTF16_LE + '{"a":1}'.encode("utf-16-le"))

    result = run_cli(["--data-dir", str(data), "fix-encoding"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    assert "Encoding fixed: 1" in result.stdout
    assert json.loads((data / "export.json").read_bytes().decode("utf-8")) == {"a": 1}


def test_structure_tagged_output(tmp_path: Path, data_dir: Path) -> None:
    result = run_cli(["--data-dir", str(data_dir), "structure", "--tagged"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["children"]["season_2"]["files"] == ["round_1.json"]
