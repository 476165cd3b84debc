"""Data models for orthanc-import.

Provides Pydantic models for Orthanc responses and dataclasses for upload
results.
"""

from __future__ import annotations

from .base import BaseModel
from .responses import (
    BatchUpload,
    ErrorReport,
    SingleUpload,
    UploadOutcome,
    UploadRecord,
    UploadReport,
    UploadStatus,
    is_success,
)
from .results import UploadResult, UploadSummary

__all__ = [
    # Base
    "BaseModel",
    # Responses
    "UploadStatus",
    "UploadRecord",
    "SingleUpload",
    "BatchUpload",
    "ErrorReport",
    "UploadReport",
    "UploadOutcome",
    "is_success",
    # Results
    "UploadResult",
    "UploadSummary",
]
