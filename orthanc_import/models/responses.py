"""Orthanc ``/instances`` response models.

A successful upload returns either one record (a single instance) or an array
of records (an archive holding several instances). Failed uploads return an
error object. Field names follow the capitalized Orthanc wire format; the
snake_case names are accepted as well.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import Field

from .base import BaseModel


class UploadStatus(str, Enum):
    """Per-instance status reported by Orthanc."""

    ALREADY_STORED = "AlreadyStored"
    SUCCESS = "Success"

    @property
    def label(self) -> str:
        """Human-readable status."""
        if self is UploadStatus.ALREADY_STORED:
            return "Already Stored"
        return "Success"


class UploadRecord(BaseModel):
    """One stored instance."""

    id: str = Field(..., alias="ID", description="Orthanc instance ID")
    parent_patient: str = Field(..., alias="ParentPatient", description="Orthanc patient ID")
    parent_series: str = Field(..., alias="ParentSeries", description="Orthanc series ID")
    parent_study: str = Field(..., alias="ParentStudy", description="Orthanc study ID")
    path: str = Field(..., alias="Path", description="REST path of the stored instance")
    status: UploadStatus = Field(..., alias="Status")

    @property
    def is_new(self) -> bool:
        """True if the server did not already hold this instance."""
        return self.status is UploadStatus.SUCCESS

    def render(self) -> str:
        return (
            "OrthancUploadResponse:\n"
            f"    ID: {self.id}\n"
            f"    Orthanc Patient ID: {self.parent_patient}\n"
            f"    Orthanc Series ID: {self.parent_series}\n"
            f"    Orthanc Study ID: {self.parent_study}\n"
            f"    Stored Path: {self.path}\n"
            f"    Status: {self.status.label}"
        )


@dataclass(frozen=True)
class SingleUpload:
    """Response describing a single stored instance."""

    record: UploadRecord

    @property
    def success_message(self) -> str:
        return self.record.status.label

    def render(self) -> str:
        return self.record.render()

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class BatchUpload:
    """Response describing every instance found in an uploaded archive."""

    records: tuple[UploadRecord, ...]

    @property
    def new_count(self) -> int:
        return sum(1 for record in self.records if record.is_new)

    @property
    def success_message(self) -> str:
        return f"({self.new_count}/{len(self.records)}) (New/Total)"

    def render(self) -> str:
        return "\n".join(record.render() for record in self.records)

    def __str__(self) -> str:
        return self.render()


class ErrorReport(BaseModel):
    """Error body returned by Orthanc for a rejected upload."""

    details: str = Field("", alias="Details")
    http_error: str = Field(..., alias="HttpError")
    http_status: int = Field(..., alias="HttpStatus")
    message: str = Field(..., alias="Message")
    method: str = Field(..., alias="Method")
    orthanc_error: str = Field(..., alias="OrthancError")
    orthanc_status: int = Field(..., alias="OrthancStatus")
    uri: str = Field(..., alias="Uri")

    @classmethod
    def synthetic(
        cls,
        details: str,
        *,
        message: str = "",
        method: str = "",
        uri: str = "",
    ) -> ErrorReport:
        """Build a locally generated report; numeric fields are zero."""
        return cls(
            details=details,
            http_error="",
            http_status=0,
            message=message,
            method=method,
            orthanc_error="",
            orthanc_status=0,
            uri=uri,
        )

    @classmethod
    def failed_to_parse(cls) -> ErrorReport:
        """Report used when a response body cannot be decoded."""
        return cls.synthetic("Failed to parse")

    def render(self) -> str:
        return (
            "OrthancErrorResponse:\n"
            f"    Details: {self.details}\n"
            f"    Http Error: {self.http_error}\n"
            f"    Http Status: {self.http_status}\n"
            f"    Message: {self.message}\n"
            f"    Method: {self.method}\n"
            f"    Orthanc Error: {self.orthanc_error}\n"
            f"    Orthanc Status: {self.orthanc_status}\n"
            f"    Uri: {self.uri}"
        )

    def __str__(self) -> str:
        return self.render()


UploadReport = Union[SingleUpload, BatchUpload]
UploadOutcome = Union[SingleUpload, BatchUpload, ErrorReport]


def is_success(outcome: UploadOutcome) -> bool:
    """Return True if the outcome is an upload report rather than an error."""
    return not isinstance(outcome, ErrorReport)
