"""File discovery for the upload pipeline."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from orthanc_import.uploaders.queues import ClosableQueue

logger = logging.getLogger(__name__)


def iter_files(root: Path) -> Iterator[Path]:
    """Lazily yield every regular file below ``root``.

    Directories are walked in sorted order. Entries that cannot be read are
    logged and skipped.

    Args:
        root: Directory to walk.

    Yields:
        File paths, joined onto ``root`` as given (relative stays relative).
    """

    def on_error(error: OSError) -> None:
        logger.warning("Skipping unreadable path %s: %s", error.filename, error.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for name in sorted(filenames):
            path = Path(dirpath) / name
            if path.is_file():
                yield path


def produce_paths(
    root: Path,
    work_queue: ClosableQueue[Path],
    stop_event: Optional[threading.Event] = None,
) -> int:
    """Push every file under ``root`` onto the work queue, then close it.

    The queue is closed even if the walk fails, so workers always finish.

    Args:
        root: Directory to walk.
        work_queue: Queue to fill.
        stop_event: When set, no further paths are queued.

    Returns:
        Number of paths queued.
    """
    count = 0
    try:
        for path in iter_files(root):
            if stop_event is not None and stop_event.is_set():
                logger.debug("Discovery stopped after %d files", count)
                break
            work_queue.put(path)
            count += 1
    finally:
        work_queue.close()
    logger.debug("Queued %d files from %s", count, root)
    return count
