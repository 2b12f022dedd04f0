from __future__ import annotations

"""
Data Directory Change Watcher.

Observes the data directory with watchdog and runs the encoding normalizer
on every JSON file that is added, modified or moved into place. Existing
files can be processed once at startup.
"""

import logging
import os
import time
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from brdatakit.core.services.encoding_normalizer import normalize_directory, normalize_json_file
from brdatakit.domain.constants import DEFAULT_SETTLE_DELAY, JSON_SUFFIX
from brdatakit.domain.encoding_models import EncodingResult

logger = logging.getLogger(__name__)

Normalizer = Callable[[str], EncodingResult]

# -----------------------------------------------------------------------------
# EVENT HANDLER
# -----------------------------------------------------------------------------

class JsonFileEventHandler(FileSystemEventHandler):
    """
    Dispatch created/modified/moved JSON files to the normalizer.

    Events run on watchdog's observer thread. The handler sleeps for
    'settle_delay' seconds before processing so the writer can finish.
    """

    def __init__(
            self,
            settle_delay: float = DEFAULT_SETTLE_DELAY,
            normalizer: Normalizer = normalize_json_file,
    ) -> None:
        super().__init__()
        self.settle_delay = settle_delay
        self.normalizer = normalizer

    def on_created(self, event: FileSystemEvent) -> None:
        if self._is_candidate(event, event.src_path):
            logger.info(f"New file detected: {os.path.basename(event.src_path)}")
            self._process(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        if self._is_candidate(event, event.src_path):
            logger.info(f"File changed: {os.path.basename(event.src_path)}")
            self._process(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        dest = getattr(event, "dest_path", "")
        if dest and self._is_candidate(event, dest):
            logger.info(f"File moved into place: {os.path.basename(dest)}")
            self._process(dest)

    @staticmethod
    def _is_candidate(event: FileSystemEvent, path: str) -> bool:
        if event.is_directory:
            return False
        name = os.path.basename(os.fsdecode(path))
        return name.endswith(JSON_SUFFIX) and not name.startswith(".")

    def _process(self, path: str) -> Optional[EncodingResult]:
        if self.settle_delay > 0:
            time.sleep(self.settle_delay)

        path = os.fsdecode(path)
        if not os.path.isfile(path):
            logger.debug(f"File vanished before processing: {path}")
            return None

        try:
            result = self.normalizer(path)
        except Exception as e:
            logger.error(f"Watcher failed to process {path}: {e}", exc_info=True)
            return None

        if result.ok:
            logger.info(f"Successfully processed: {os.path.basename(path)}")
        return result

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def start_watcher(
        directory: str,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        recursive: bool = False,
        process_existing: bool = True,
) -> Observer:
    """
    Start observing 'directory' and return the running observer.

    Args:
        directory: Data directory to watch.
        settle_delay: Seconds to wait after an event before processing.
        recursive: Watch subdirectories too.
        process_existing: Normalize files already present before watching.

    Returns:
        Observer: Started watchdog observer; the caller stops and joins it.

    Raises:
        FileNotFoundError: If 'directory' does not exist.
    """
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Data directory not found: {directory}")

    logger.info(f"Watching: {directory}")

    if process_existing:
        normalize_directory(directory, recursive=recursive)

    observer = Observer()
    observer.schedule(JsonFileEventHandler(settle_delay), directory, recursive=recursive)
    observer.start()
    logger.info("File watcher is ready and monitoring for changes")
    return observer


def watch_forever(
        directory: str,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        recursive: bool = False,
        process_existing: bool = True,
) -> None:
    """Run the watcher until interrupted with Ctrl+C."""
    observer = start_watcher(directory, settle_delay, recursive, process_existing)
    try:
        while observer.is_alive():
            observer.join(1.0)
    except KeyboardInterrupt:
        logger.info("Shutting down file watcher...")
    finally:
        observer.stop()
        observer.join()
