"""Concurrent upload pipeline for orthanc-import.

Files discovered under a directory flow through a bounded work queue to a
pool of upload workers; their results flow through a bounded result queue to
a single aggregator.
"""

from orthanc_import.uploaders.classifier import classify_response, is_success_status
from orthanc_import.uploaders.common import iter_files, produce_paths
from orthanc_import.uploaders.constants import (
    DEFAULT_UPLOAD_WORKERS,
    QUEUE_CAPACITY,
    UPLOAD_TIMEOUT,
)
from orthanc_import.uploaders.pipeline import PathProducer, ResultAggregator, upload_directory
from orthanc_import.uploaders.queues import ClosableQueue
from orthanc_import.uploaders.worker import UploadWorker

__all__ = [
    # Constants
    "DEFAULT_UPLOAD_WORKERS",
    "QUEUE_CAPACITY",
    "UPLOAD_TIMEOUT",
    # Discovery
    "iter_files",
    "produce_paths",
    # Pipeline
    "ClosableQueue",
    "classify_response",
    "is_success_status",
    "UploadWorker",
    "ResultAggregator",
    "PathProducer",
    "upload_directory",
]
