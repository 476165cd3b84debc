"""Input validation helpers."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from orthanc_import.core.exceptions import (
    InvalidURLError,
    PathValidationError,
    ValidationError,
)


def validate_server_url(url: str) -> str:
    """Validate and normalize an Orthanc server URL.

    Args:
        url: Base URL of the Orthanc REST API.

    Returns:
        URL without trailing slash.

    Raises:
        InvalidURLError: If the URL is empty, has no host, or is not http(s).
    """
    url = (url or "").strip()
    if not url:
        raise InvalidURLError(url, "URL cannot be empty")

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise InvalidURLError(url, "scheme must be http or https")
    if not parsed.netloc:
        raise InvalidURLError(url, "missing host")

    return url.rstrip("/")


def validate_workers(workers: int, max_workers: int = 64) -> int:
    """Validate worker thread count.

    Raises:
        ValidationError: If out of range.
    """
    if workers < 1 or workers > max_workers:
        raise ValidationError(
            f"Workers must be between 1 and {max_workers}",
            field="threads",
            value=workers,
        )
    return workers


def validate_timeout(timeout: int) -> int:
    """Validate a request timeout in seconds."""
    if timeout < 1:
        raise ValidationError("Timeout must be at least 1 second", field="timeout", value=timeout)
    return timeout


def validate_source_dir(path: Path) -> Path:
    """Validate the directory to upload.

    Raises:
        PathValidationError: If the path is missing or not a directory.
    """
    if not path.exists():
        raise PathValidationError(str(path), "does not exist")
    if not path.is_dir():
        raise PathValidationError(str(path), "not a directory")
    return path


def validate_queue_size(queue_size: int) -> int:
    """Validate the capacity of the work and result queues.

    ``queue.Queue`` treats a capacity below 1 as unbounded, so it is rejected.

    Raises:
        ValidationError: If the capacity is below 1.
    """
    if queue_size < 1:
        raise ValidationError("Queue size must be at least 1", field="queue_size", value=queue_size)
    return queue_size
