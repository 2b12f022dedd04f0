from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration loading and
merging (defaults, config file, environment, CLI overrides), validation and
dispatch to the selected component.
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Callable, Dict, List, Optional

from brdatakit.core.services.encoding_normalizer import normalize_directory, normalize_json_file
from brdatakit.core.services.snapshot import build_snapshot
from brdatakit.core.services.structure_reader import read_data_structure
from brdatakit.core.services.validator import validate_config
from brdatakit.core.services.watcher import watch_forever
from brdatakit.domain.config import load_config
from brdatakit.domain.errors import SnapshotError
from brdatakit.infra.logging import LoggingConfig, configure_logging
from brdatakit.interface.cli import args as cli_args
from brdatakit.interface.http.app import run_server

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 bad input).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    # 3. Configuration hierarchy
    raw_conf = _merge_config(load_config(args.config_file), cli_args.args_to_overrides(args))
    conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if not args.command:
        parser.print_help(sys.stderr)
        return EXIT_BAD_INPUT

    # 4. Command dispatch
    handler = _COMMANDS[args.command]
    try:
        return handler(args, conf)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return EXIT_INTERRUPTED
    except SnapshotError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as e:
        logger.critical(f"Command '{args.command}' failed: {e}", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FAILURE

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_structure(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    if not _require_data_dir(conf):
        return EXIT_BAD_INPUT

    structure = read_data_structure(conf["data_dir"])
    if structure is None:
        return EXIT_BAD_INPUT
    payload = structure.to_tagged_dict() if args.tagged else structure.to_dict()
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return EXIT_OK


def _cmd_fix_encoding(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    if args.files:
        results = [normalize_json_file(os.path.abspath(p)) for p in args.files]
        failed = [r for r in results if not r.ok]
        print(f"Files processed: {len(results)}")
        print(f"Encoding fixed: {sum(1 for r in results if r.rewritten)}")
        return EXIT_FAILURE if failed else EXIT_OK

    if not _require_data_dir(conf):
        return EXIT_BAD_INPUT

    report = normalize_directory(conf["data_dir"], recursive=conf["recursive"])
    print(f"Files processed: {report.processed}")
    print(f"Encoding fixed: {report.fixed}")
    for r in report.failed:
        print(f"  FAILED {r.path}: {r.error}", file=sys.stderr)
    return EXIT_OK if report.ok else EXIT_FAILURE


def _cmd_snapshot(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    result = build_snapshot(conf["data_dir"], conf["output_file"], conf["publish_dir"])
    print(f"Wrote structure to {result.output_file}")
    print(f"Copied data to {result.publish_dir} ({result.json_files} JSON files)")
    return EXIT_OK


def _cmd_serve(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    if not os.path.isdir(conf["data_dir"]):
        logger.warning(f"Data directory does not exist yet: {conf['data_dir']}")
    run_server(conf)
    return EXIT_OK


def _cmd_watch(args: argparse.Namespace, conf: Dict[str, Any]) -> int:
    if not _require_data_dir(conf):
        return EXIT_BAD_INPUT

    watch_forever(
        conf["data_dir"],
        settle_delay=conf["settle_delay"],
        recursive=conf["recursive"],
        process_existing=not args.no_initial,
    )
    return EXIT_OK


_COMMANDS: Dict[str, Callable[[argparse.Namespace, Dict[str, Any]], int]] = {
    "structure": _cmd_structure,
    "fix-encoding": _cmd_fix_encoding,
    "snapshot": _cmd_snapshot,
    "serve": _cmd_serve,
    "watch": _cmd_watch,
}

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides for known keys into the base config."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out


def _require_data_dir(conf: Dict[str, Any]) -> bool:
    data_dir = conf["data_dir"]
    if os.path.isdir(data_dir):
        return True
    msg = f"Data directory not found: {data_dir}"
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return False


if __name__ == "__main__":
    sys.exit(main())
