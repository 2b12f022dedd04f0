from __future__ import annotations

"""
Configuration Domain Management.

Builds the runtime configuration dictionary from defaults, an optional JSON
config file and BRDATA_* environment variables. Every service receives its
paths from this dictionary instead of module-level constants.
"""

import json
import logging
import os
from typing import Any, Dict, Mapping, Optional

from brdatakit.domain.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_DATA_DIR,
    DEFAULT_DATA_MOUNT,
    DEFAULT_HOST,
    DEFAULT_OUTPUT_FILE_NAME,
    DEFAULT_PORT,
    DEFAULT_PUBLIC_DIR,
    DEFAULT_SETTLE_DELAY,
    DEFAULT_STRUCTURE_ENDPOINT,
    ENV_KEYS,
    ENV_PREFIX,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config(base: Optional[str] = None) -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Args:
        base: Directory the default paths are relative to. Defaults to cwd.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    base = base or os.getcwd()
    public_dir = os.path.join(base, DEFAULT_PUBLIC_DIR)
    return {
        # IO Paths
        "data_dir": os.path.join(base, DEFAULT_DATA_DIR),
        "output_file": os.path.join(public_dir, DEFAULT_OUTPUT_FILE_NAME),
        "publish_dir": os.path.join(public_dir, DEFAULT_DATA_DIR),

        # HTTP
        "host": DEFAULT_HOST,
        "port": DEFAULT_PORT,
        "structure_endpoint": DEFAULT_STRUCTURE_ENDPOINT,
        "data_mount": DEFAULT_DATA_MOUNT,

        # Watcher / Encoding repair
        "settle_delay": DEFAULT_SETTLE_DELAY,
        "recursive": False,
    }

# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config_file(path: str) -> Dict[str, Any]:
    """
    Read a JSON config file.

    Missing, unreadable or non-object files are logged and yield an empty
    mapping so the defaults stay in effect.
    """
    if not os.path.exists(path):
        logger.debug(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config '{path}': {e}. Using defaults.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{path}'. Ignoring it.")
        return {}

    return data


def env_overrides(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect BRDATA_* environment variables as raw (string) overrides."""
    environ = os.environ if environ is None else environ
    out: Dict[str, Any] = {}
    for suffix, key in ENV_KEYS.items():
        value = environ.get(ENV_PREFIX + suffix)
        if value is not None and value.strip():
            out[key] = value.strip()
    return out


def load_config(
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """
    Resolve the active configuration (unvalidated).

    Precedence: defaults < config file < environment.

    Args:
        path: Explicit config file. Defaults to 'brdatakit.json' in cwd.
        environ: Environment mapping, for tests.

    Returns:
        Dict[str, Any]: Merged configuration.
    """
    config = get_default_config()
    config_path = path or os.path.join(os.getcwd(), CONFIG_FILE_NAME)

    file_values = load_config_file(config_path)
    for k, v in file_values.items():
        if k in config:
            config[k] = v
        else:
            logger.warning(f"Unknown config key '{k}' in {config_path}. Ignored.")

    config.update(env_overrides(environ))
    return config
