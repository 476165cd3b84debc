"""orthanc-import - Bulk upload imaging files to an Orthanc server.

Walks a directory tree and POSTs every file to the Orthanc REST API using a
pool of upload workers. A persistent upload history makes repeated runs
skip files the server has already accepted.
"""

__version__ = "0.1.0"

from orthanc_import.core.client import OrthancClient
from orthanc_import.core.config import Config
from orthanc_import.core.exceptions import (
    ConfigurationError,
    HistoryError,
    OrthancImportError,
    ValidationError,
)
from orthanc_import.uploaders.pipeline import upload_directory

__all__ = [
    "__version__",
    "OrthancClient",
    "Config",
    "OrthancImportError",
    "ConfigurationError",
    "HistoryError",
    "ValidationError",
    "upload_directory",
]
