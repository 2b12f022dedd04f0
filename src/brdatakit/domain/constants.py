from __future__ import annotations

"""
Domain Constants.

Centralizes default names, routes and timings shared by the reader, the
HTTP layer, the snapshot builder and the watcher.
"""

from typing import Dict

CONFIG_FILE_NAME = "brdatakit.json"
ENV_PREFIX = "BRDATA_"

JSON_SUFFIX = ".json"

DEFAULT_DATA_DIR = "BR_Data"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_OUTPUT_FILE_NAME = "br-data-structure.json"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5174  # Out of the way of the Vite dev server
DEFAULT_STRUCTURE_ENDPOINT = "br-data-structure"
DEFAULT_DATA_MOUNT = "BR_Data"

DEFAULT_SETTLE_DELAY = 0.5  # Seconds

# Environment variable suffix -> config key
ENV_KEYS: Dict[str, str] = {
    "DATA_DIR": "data_dir",
    "OUTPUT_FILE": "output_file",
    "PUBLISH_DIR": "publish_dir",
    "HOST": "host",
    "PORT": "port",
    "STRUCTURE_ENDPOINT": "structure_endpoint",
    "DATA_MOUNT": "data_mount",
    "SETTLE_DELAY": "settle_delay",
    "RECURSIVE": "recursive",
}
