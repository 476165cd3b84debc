"""Upload history stores.

``open_history`` picks the persistent store when a history file is configured
and the disabled store otherwise.
"""

from orthanc_import.history.cache import PathCache
from orthanc_import.history.store import (
    DisabledFileUploadHistory,
    FileUploadHistory,
    TextFileUploadHistory,
    open_history,
    read_path_set,
)

__all__ = [
    "FileUploadHistory",
    "DisabledFileUploadHistory",
    "TextFileUploadHistory",
    "open_history",
    "read_path_set",
    "PathCache",
]
