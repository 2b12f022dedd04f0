from __future__ import annotations

"""
JSON Encoding Normalizer.

Repairs data files exported with a UTF-16LE byte-order-mark or a UTF-8 BOM
and rewrites every valid file as pretty-printed UTF-8 JSON. Failures are
reported through EncodingResult; nothing here raises, so batch callers can
simply continue with the next file.

The rewrite is not guarded against a concurrent edit of the same file.
"""

import codecs
import json
import logging
import os
from typing import Any, List, Tuple

from brdatakit.domain.constants import JSON_SUFFIX
from brdatakit.domain.encoding_models import (
    ENCODING_UTF16_LE_BOM,
    ENCODING_UTF8,
    ENCODING_UTF8_BOM,
    BatchReport,
    EncodingResult,
)
from brdatakit.infra.fs import atomic_write_bytes

logger = logging.getLogger(__name__)

_BOM_CHAR = "\ufeff"

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON literal: {token}")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def detect_encoding(raw: bytes) -> str:
    """
    Classify raw file bytes by their leading byte-order-mark.

    Args:
        raw: File content.

    Returns:
        str: One of 'utf-16-le-bom', 'utf-8-bom' or 'utf-8'.
    """
    if raw.startswith(codecs.BOM_UTF16_LE):
        return ENCODING_UTF16_LE_BOM
    if raw.startswith(codecs.BOM_UTF8):
        return ENCODING_UTF8_BOM
    return ENCODING_UTF8


def decode_json_bytes(raw: bytes) -> Tuple[str, Any]:
    """
    Decode raw bytes according to their BOM and parse them as JSON.

    Args:
        raw: File content.

    Returns:
        Tuple[str, Any]: (Detected encoding, parsed JSON value).

    Raises:
        UnicodeDecodeError: If the bytes are invalid for the detected encoding.
        ValueError: If the decoded text is not valid JSON. NaN and Infinity
                    literals are rejected.
    """
    encoding = detect_encoding(raw)

    if encoding == ENCODING_UTF16_LE_BOM:
        text = raw[len(codecs.BOM_UTF16_LE):].decode("utf-16-le")
        if text.startswith(_BOM_CHAR):
            text = text[1:]
    elif encoding == ENCODING_UTF8_BOM:
        text = raw[len(codecs.BOM_UTF8):].decode("utf-8")
    else:
        text = raw.decode("utf-8")

    return encoding, json.loads(text, parse_constant=_reject_constant)


def render_json(value: Any) -> bytes:
    """
    Serialize a JSON value as 2-space indented UTF-8 bytes.

    Strings holding lone surrogates cannot be encoded as UTF-8; those values
    are rendered with \\uXXXX escapes instead.

    Raises:
        ValueError: If the value holds NaN or Infinity.
    """
    text = json.dumps(value, ensure_ascii=False, allow_nan=False, indent=2)
    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(value, ensure_ascii=True, allow_nan=False, indent=2).encode("ascii")


def normalize_json_file(file_path: str) -> EncodingResult:
    """
    Repair the encoding of one JSON file in place.

    The replacement content is built completely in memory and only written
    when it differs from the current bytes, so running the normalizer on its
    own output is a no-op.

    Args:
        file_path: JSON file to normalize.

    Returns:
        EncodingResult: ok=False (file untouched) on read, decode, parse or
                        write failure.
    """
    name = os.path.basename(file_path)

    try:
        with open(file_path, "rb") as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Error reading {name}: {e}")
        return EncodingResult(path=file_path, ok=False, error=str(e))

    encoding = detect_encoding(raw)
    try:
        encoding, value = decode_json_bytes(raw)
    except ValueError as e:
        # UnicodeDecodeError and json.JSONDecodeError are both ValueErrors
        logger.error(f"Invalid JSON in {name} ({encoding}): {e}")
        return EncodingResult(path=file_path, ok=False, encoding=encoding, error=str(e))

    try:
        payload = render_json(value)
    except ValueError as e:
        logger.error(f"Cannot serialize {name}: {e}")
        return EncodingResult(path=file_path, ok=False, encoding=encoding, error=str(e))

    if payload == raw:
        logger.debug(f"File already clean: {name}")
        return EncodingResult(path=file_path, ok=True, encoding=encoding)

    try:
        atomic_write_bytes(file_path, payload)
    except OSError as e:
        logger.error(f"Error writing {name}: {e}")
        return EncodingResult(path=file_path, ok=False, encoding=encoding, error=str(e))

    if encoding == ENCODING_UTF8:
        logger.info(f"Reformatted: {name}")
    else:
        logger.info(f"Fixed {encoding} encoding: {name}")
    return EncodingResult(path=file_path, ok=True, encoding=encoding, rewritten=True)


def list_json_files(directory: str, recursive: bool = False) -> List[str]:
    """
    List the '.json' files to normalize, sorted by path.

    Hidden files (leading dot) and hidden directories are skipped.
    """
    found: List[str] = []

    for root, dirs, files in os.walk(directory):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for file_name in sorted(files):
            if file_name.startswith(".") or not file_name.endswith(JSON_SUFFIX):
                continue
            found.append(os.path.join(root, file_name))
        if not recursive:
            break

    return found


def normalize_directory(directory: str, recursive: bool = False) -> BatchReport:
    """
    Normalize every JSON file in a directory, continuing past failures.

    Args:
        directory: Data directory to process.
        recursive: Also descend into subdirectories.

    Returns:
        BatchReport: Per-file results. Empty if the directory is missing.
    """
    if not os.path.isdir(directory):
        logger.error(f"Data directory not found: {directory}")
        return BatchReport(directory=directory)

    files = list_json_files(directory, recursive=recursive)
    if not files:
        logger.info(f"No JSON files found in {directory}")
        return BatchReport(directory=directory)

    logger.info(f"Found {len(files)} JSON files to process")
    results = [normalize_json_file(p) for p in files]
    report = BatchReport(directory=directory, results=results)

    logger.info(
        f"Summary: processed={report.processed} fixed={report.fixed} failed={len(report.failed)}"
    )
    if not report.ok:
        logger.warning("Some files had issues. Check the log above for details.")

    return report
