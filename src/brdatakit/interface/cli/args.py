from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema (global options plus one subcommand per
component) and translates the parsed namespace into configuration
overrides.
"""

import argparse
from typing import Any, Dict

from brdatakit.infra.logging import get_default_log_path

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the brdatakit CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="brdatakit",
        description="Serve, index and repair the JSON data files behind the analyzer.",
    )

    # --- Path Management ---
    p.add_argument("--data-dir", dest="data_dir", default=None,
                   help="Data directory (default: ./BR_Data).")
    p.add_argument("--output-file", dest="output_file", default=None,
                   help="Snapshot structure file (default: ./public/br-data-structure.json).")
    p.add_argument("--publish-dir", dest="publish_dir", default=None,
                   help="Snapshot copy of the data directory (default: ./public/BR_Data).")

    # --- HTTP ---
    p.add_argument("--host", dest="host", default=None, help="Bind address for 'serve'.")
    p.add_argument("--port", dest="port", type=int, default=None, help="Port for 'serve'.")

    # --- Configuration and Diagnostics ---
    p.add_argument("--config", dest="config_file", default=None,
                   help="JSON config file (default: ./brdatakit.json if present).")
    p.add_argument("--dump-config", action="store_true",
                   help="Print the resolved configuration and exit.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")
    p.add_argument("--log-file", dest="log_file", nargs="?", const=get_default_log_path(),
                   default=None, help="Also write logs to a rotating file.")

    sub = p.add_subparsers(dest="command", metavar="COMMAND")

    s = sub.add_parser("structure", help="Print the data structure as JSON.")
    s.add_argument("--tagged", action="store_true",
                   help="Use the tagged format instead of the legacy one.")

    f = sub.add_parser("fix-encoding", help="Repair BOM/UTF-16 JSON files in place.")
    f.add_argument("files", nargs="*", help="Files to fix (default: every JSON file in the data directory).")
    f.add_argument("--recursive", action="store_true", default=None,
                   help="Descend into subdirectories of the data directory.")

    sub.add_parser("snapshot", help="Write the structure file and copy the data tree for a build.")
    sub.add_parser("serve", help="Run the HTTP API and static file server.")

    w = sub.add_parser("watch", help="Repair JSON files as they are added or changed.")
    w.add_argument("--recursive", action="store_true", default=None,
                   help="Watch subdirectories too.")
    w.add_argument("--no-initial", action="store_true",
                   help="Do not process files already present at startup.")
    w.add_argument("--settle-delay", dest="settle_delay", type=float, default=None,
                   help="Seconds to wait after a change before processing.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options that were not given map to None and are ignored by the merge.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    return {
        "data_dir": args.data_dir,
        "output_file": args.output_file,
        "publish_dir": args.publish_dir,
        "host": args.host,
        "port": args.port,
        "recursive": getattr(args, "recursive", None),
        "settle_delay": getattr(args, "settle_delay", None),
    }
