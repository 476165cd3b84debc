"""Core modules for orthanc-import."""

from orthanc_import.core.client import OrthancClient
from orthanc_import.core.config import CONFIG_DIR, CONFIG_FILE, Config
from orthanc_import.core.exceptions import (
    ConfigurationError,
    HistoryError,
    InvalidURLError,
    OrthancImportError,
    PathValidationError,
    QueueClosedError,
    ValidationError,
)
from orthanc_import.core.logging import LogContext, log_context, setup_logging
from orthanc_import.core.output import (
    console,
    print_error,
    print_line,
    print_warning,
)
from orthanc_import.core.validation import (
    validate_queue_size,
    validate_server_url,
    validate_source_dir,
    validate_timeout,
    validate_workers,
)

__all__ = [
    # Exceptions
    "OrthancImportError",
    "ConfigurationError",
    "ValidationError",
    "InvalidURLError",
    "PathValidationError",
    "HistoryError",
    "QueueClosedError",
    # Validation
    "validate_queue_size",
    "validate_server_url",
    "validate_source_dir",
    "validate_timeout",
    "validate_workers",
    # Config
    "Config",
    "CONFIG_DIR",
    "CONFIG_FILE",
    # Client
    "OrthancClient",
    # Output
    "print_line",
    "print_error",
    "print_warning",
    "console",
    # Logging
    "setup_logging",
    "log_context",
    "LogContext",
]
