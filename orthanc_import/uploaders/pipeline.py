"""Concurrent upload pipeline.

Data flows producer -> work queue -> upload workers -> result queue ->
aggregator. The producer and the workers run on their own threads; the
aggregator drains the result queue on the calling thread, records successes
in the upload history, and prints one line per file.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional

import httpx

from orthanc_import.core.client import OrthancClient
from orthanc_import.core.exceptions import HistoryError
from orthanc_import.core.logging import log_context
from orthanc_import.core.output import print_error, print_line, print_totals
from orthanc_import.core.validation import (
    validate_queue_size,
    validate_server_url,
    validate_source_dir,
    validate_workers,
)
from orthanc_import.history.store import DisabledFileUploadHistory, FileUploadHistory
from orthanc_import.models.results import UploadResult, UploadSummary
from orthanc_import.uploaders.common import produce_paths
from orthanc_import.uploaders.constants import (
    DEFAULT_UPLOAD_WORKERS,
    QUEUE_CAPACITY,
    UPLOAD_TIMEOUT,
)
from orthanc_import.uploaders.queues import ClosableQueue
from orthanc_import.uploaders.worker import UploadWorker

logger = logging.getLogger(__name__)


# =============================================================================
# Result Aggregation
# =============================================================================


class ResultAggregator:
    """Single consumer of the result queue."""

    def __init__(self, history: FileUploadHistory, *, verbose: bool = False) -> None:
        self.history = history
        self.verbose = verbose
        self.successes = 0
        self.failures = 0

    def handle(self, result: UploadResult) -> None:
        """Record and print one result."""
        if result.success:
            self.successes += 1
            try:
                self.history.on_success(result.path)
            except HistoryError as e:
                # The server holds the file; only the local record is missing
                logger.error("Upload of %s not recorded: %s", result.path, e)
                print_error(str(e))
        else:
            self.failures += 1

        print_line(str(result))
        if self.verbose or not result.success:
            print_line(result.render())

    def consume(self, result_queue: ClosableQueue[UploadResult]) -> tuple[int, int]:
        """Drain the queue until it is closed and empty, then print totals.

        Returns:
            Tuple of (successes, failures).
        """
        for result in result_queue:
            self.handle(result)
        print_totals(self.successes, self.failures)
        return self.successes, self.failures


# =============================================================================
# Producer Thread
# =============================================================================


class PathProducer(threading.Thread):
    """Background thread feeding the work queue.

    Runs as a daemon so a producer blocked on a full queue cannot keep the
    process alive after every worker has stopped.
    """

    def __init__(
        self,
        root: Path,
        work_queue: ClosableQueue[Path],
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        super().__init__(name="orthanc-import-producer", daemon=True)
        self.root = root
        self.work_queue = work_queue
        self.stop_event = stop_event
        self.count = 0
        self.error: Optional[BaseException] = None

    def run(self) -> None:
        try:
            self.count = produce_paths(self.root, self.work_queue, self.stop_event)
        except Exception as e:
            logger.error("File discovery failed under %s: %s", self.root, e)
            self.error = e


def _abort(
    stop_event: threading.Event,
    work_queue: ClosableQueue[Path],
    result_queue: ClosableQueue[UploadResult],
    producer: PathProducer,
) -> None:
    """Stop every pipeline thread after the aggregator failed.

    Workers blocked on a full result queue and a producer blocked on a full
    work queue are released by discarding what is left in both queues.
    """
    stop_event.set()
    dropped = result_queue.drain()
    work_queue.drain()
    producer.join()
    logger.warning("Upload aborted; %d finished uploads were not reported", dropped)


# =============================================================================
# Main Upload Function
# =============================================================================


def upload_directory(
    source_dir: Path,
    *,
    base_url: str,
    username: Optional[str] = None,
    password: Optional[str] = None,
    threads: int = DEFAULT_UPLOAD_WORKERS,
    history: Optional[FileUploadHistory] = None,
    verbose: bool = False,
    timeout: int = UPLOAD_TIMEOUT,
    verify_ssl: bool = True,
    queue_size: int = QUEUE_CAPACITY,
    transport: Optional[httpx.BaseTransport] = None,
) -> UploadSummary:
    """Upload every file under ``source_dir`` to an Orthanc server.

    Args:
        source_dir: Directory to walk recursively.
        base_url: Orthanc REST API URL.
        username: Basic auth user; used only together with ``password``.
        password: Basic auth password.
        threads: Number of upload workers.
        history: Upload history; defaults to a disabled history.
        verbose: Print the full response for successful uploads too.
        timeout: Per-request timeout in seconds.
        verify_ssl: Whether to verify TLS certificates.
        queue_size: Capacity of the work and result queues.
        transport: Optional httpx transport shared by the worker clients.

    Returns:
        UploadSummary with success, failure and skip counts.

    Raises:
        ValidationError: If the directory, URL, thread count or queue size is
            invalid.
        QueueClosedError: If a queue is used after being closed.
    """
    source_dir = validate_source_dir(Path(source_dir))
    threads = validate_workers(threads)
    queue_size = validate_queue_size(queue_size)
    base_url = validate_server_url(base_url)
    if history is None:
        history = DisabledFileUploadHistory()

    stop_event = threading.Event()
    work_queue: ClosableQueue[Path] = ClosableQueue(queue_size, name="work")
    result_queue: ClosableQueue[UploadResult] = ClosableQueue(
        queue_size, name="results", producers=threads
    )

    workers = [
        UploadWorker(
            worker_id=i,
            client=OrthancClient(
                base_url=base_url,
                username=username,
                password=password,
                timeout=timeout,
                verify_ssl=verify_ssl,
                transport=transport,
            ),
            history=history,
            work_queue=work_queue,
            result_queue=result_queue,
            stop_event=stop_event,
        )
        for i in range(threads)
    ]
    aggregator = ResultAggregator(history, verbose=verbose)

    with log_context("upload", logger, source=source_dir, url=base_url, threads=threads) as ctx:
        producer = PathProducer(source_dir, work_queue, stop_event)
        producer.start()

        with ThreadPoolExecutor(max_workers=threads, thread_name_prefix="upload") as executor:
            futures = [executor.submit(worker.run) for worker in workers]
            try:
                aggregator.consume(result_queue)
            except BaseException:
                _abort(stop_event, work_queue, result_queue, producer)
                raise
            for future in futures:
                future.result()

        producer.join()
        if producer.error is not None:
            raise producer.error

        duration = ctx.elapsed

    return UploadSummary(
        successes=aggregator.successes,
        failures=aggregator.failures,
        skipped=sum(worker.skipped for worker in workers),
        duration=duration,
    )
