"""Upload worker.

Each worker owns one HTTP client and processes paths from the work queue one
at a time until the queue is closed and drained.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

import httpx

from orthanc_import.core.client import INSTANCES_PATH, OrthancClient
from orthanc_import.core.output import print_skipped
from orthanc_import.history.store import FileUploadHistory
from orthanc_import.models.responses import ErrorReport
from orthanc_import.models.results import UploadResult
from orthanc_import.uploaders.classifier import classify_response
from orthanc_import.uploaders.queues import ClosableQueue

logger = logging.getLogger(__name__)


def read_failure(path: Path, error: OSError) -> UploadResult:
    """Result for a file that could not be read from disk."""
    return UploadResult(
        path=path,
        outcome=ErrorReport.synthetic(
            error.strerror or str(error),
            message="Failed to read file",
        ),
    )


def request_failure(path: Path, error: httpx.HTTPError) -> UploadResult:
    """Result for a request that never produced a response."""
    return UploadResult(
        path=path,
        outcome=ErrorReport.synthetic(
            f"{type(error).__name__}: {error}",
            message="Request failed",
            method="POST",
            uri=INSTANCES_PATH,
        ),
    )


class UploadWorker:
    """Pulls paths, uploads them, and pushes one result per attempted upload.

    Setting ``stop_event`` makes the worker finish its current file and exit
    without pushing further results.
    """

    def __init__(
        self,
        worker_id: int,
        client: OrthancClient,
        history: FileUploadHistory,
        work_queue: ClosableQueue[Path],
        result_queue: ClosableQueue[UploadResult],
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        self.worker_id = worker_id
        self.client = client
        self.history = history
        self.work_queue = work_queue
        self.result_queue = result_queue
        self.stop_event = stop_event or threading.Event()
        self.skipped = 0
        self.processed = 0

    def upload(self, path: Path) -> UploadResult:
        """Upload one file and classify the response.

        Local read errors and transport errors become failure results.
        """
        try:
            content = path.read_bytes()
        except OSError as e:
            logger.warning("Worker %d: cannot read %s: %s", self.worker_id, path, e)
            return read_failure(path, e)

        try:
            response = self.client.upload_instance(content)
        except httpx.HTTPError as e:
            logger.error("Worker %d: failed request for %s: %s", self.worker_id, path, e)
            return request_failure(path, e)

        logger.debug("Worker %d: %s -> HTTP %d", self.worker_id, path, response.status_code)
        return UploadResult(path=path, outcome=classify_response(response.status_code, response.content))

    def process(self, path: Path) -> Optional[UploadResult]:
        """Upload ``path`` unless the history says it was already sent."""
        if self.history.already_uploaded(path):
            print_skipped(path)
            self.skipped += 1
            return None
        return self.upload(path)

    def run(self) -> int:
        """Drain the work queue, or stop early once ``stop_event`` is set.

        The worker's share of the result queue is closed on exit, including
        when an unexpected error escapes.

        Returns:
            Number of results pushed.
        """
        try:
            for path in self.work_queue:
                if self.stop_event.is_set():
                    break
                result = self.process(path)
                if result is None:
                    continue
                if self.stop_event.is_set():
                    break
                self.result_queue.put(result)
                self.processed += 1
        finally:
            self.client.close()
            self.result_queue.close()
        logger.debug(
            "Worker %d finished: %d uploaded, %d skipped",
            self.worker_id,
            self.processed,
            self.skipped,
        )
        return self.processed
