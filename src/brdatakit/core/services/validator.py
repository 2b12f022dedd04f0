from __future__ import annotations

"""
Configuration Validation Service.

Gatekeeper between raw configuration sources (config file, environment,
CLI) and the services. Handles type coercion, path normalization and
default value injection.
"""

import logging
import re
from typing import Any, Dict, List, Tuple

from brdatakit.domain.config import get_default_config
from brdatakit.infra.fs import normalize_path

logger = logging.getLogger(__name__)

_ROUTE_SEGMENT_RX = re.compile(r"^[A-Za-z0-9._-]+$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on invalid values instead of
                falling back to defaults.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized configuration and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    path_fields = ["data_dir", "output_file", "publish_dir"]
    route_fields = ["structure_endpoint", "data_mount"]

    for field in path_fields:
        raw = _as_str(merged.get(field), defaults[field], field, warnings, strict)
        merged[field] = normalize_path(raw, defaults[field])

    merged["host"] = _as_str(merged.get("host"), defaults["host"], "host", warnings, strict)

    for field in route_fields:
        merged[field] = _as_route(merged.get(field), defaults[field], field, warnings, strict)

    merged["port"] = _as_port(merged.get("port"), defaults["port"], warnings, strict)
    merged["settle_delay"] = _as_delay(
        merged.get("settle_delay"), defaults["settle_delay"], warnings, strict
    )
    merged["recursive"] = _as_bool(
        merged.get("recursive"), defaults["recursive"], "recursive", warnings, strict
    )

    return merged, warnings

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool, exc: type = TypeError) -> None:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_route(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Accept a single URL path segment, tolerating surrounding slashes."""
    v = _as_str(value, fallback, field, warnings, strict).strip("/")
    if _ROUTE_SEGMENT_RX.match(v):
        return v

    _reject(f"Invalid field '{field}': '{value}' is not a single URL segment.", warnings, strict, ValueError)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                return True
            if s in ("false", "0", "no", "n", "off"):
                return False

    _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.", warnings, strict)
    return fallback


def _as_port(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Coerce the port to an int in the valid TCP range."""
    if value is None:
        return fallback

    port: Any = value
    if isinstance(value, str) and not strict:
        try:
            port = int(value.strip())
        except ValueError:
            port = None

    if isinstance(port, int) and not isinstance(port, bool) and 0 < port < 65536:
        return port

    _reject(f"Invalid field 'port': '{value}' is not a TCP port.", warnings, strict, ValueError)
    return fallback


def _as_delay(value: Any, fallback: float, warnings: List[str], strict: bool) -> float:
    """Coerce the watcher settle delay to a non-negative float."""
    if value is None:
        return fallback

    delay: Any = value
    if isinstance(value, str) and not strict:
        try:
            delay = float(value.strip())
        except ValueError:
            delay = None

    if isinstance(delay, (int, float)) and not isinstance(delay, bool) and delay >= 0:
        return float(delay)

    _reject(f"Invalid field 'settle_delay': '{value}' is not a non-negative number.", warnings, strict, ValueError)
    return fallback
