"""Shared constants for uploader modules."""

from orthanc_import.core.config import DEFAULT_QUEUE_SIZE, DEFAULT_THREADS, DEFAULT_TIMEOUT

# Parallel upload workers
DEFAULT_UPLOAD_WORKERS = DEFAULT_THREADS

# Capacity of both the work queue and the result queue
QUEUE_CAPACITY = DEFAULT_QUEUE_SIZE

# Per-request timeout in seconds (connect plus transfer)
UPLOAD_TIMEOUT = DEFAULT_TIMEOUT
