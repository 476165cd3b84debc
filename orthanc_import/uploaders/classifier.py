"""Turn raw ``/instances`` responses into typed outcomes.

Orthanc answers a single-file upload with one JSON object and an archive
upload with an array of objects. The top-level JSON kind decides which model
is decoded; anything that does not decode becomes a synthetic
"Failed to parse" error report.
"""

from __future__ import annotations

import json
from typing import Any, Union

from pydantic import ValidationError

from orthanc_import.models.responses import (
    BatchUpload,
    ErrorReport,
    SingleUpload,
    UploadOutcome,
    UploadRecord,
)

_UNPARSEABLE = object()


def is_success_status(status_code: int) -> bool:
    """Return True for 2xx status codes."""
    return 200 <= status_code < 300


def _load_json(body: Union[bytes, str]) -> Any:
    try:
        return json.loads(body)
    except ValueError:
        # Covers JSONDecodeError and UnicodeDecodeError
        return _UNPARSEABLE


def parse_upload_report(data: Any) -> UploadOutcome:
    """Decode a success body already loaded from JSON."""
    try:
        if isinstance(data, dict):
            return SingleUpload(UploadRecord.model_validate(data))
        if isinstance(data, list):
            return BatchUpload(tuple(UploadRecord.model_validate(item) for item in data))
    except ValidationError:
        pass
    return ErrorReport.failed_to_parse()


def parse_error_report(data: Any) -> ErrorReport:
    """Decode an error body already loaded from JSON."""
    if isinstance(data, dict):
        try:
            return ErrorReport.model_validate(data)
        except ValidationError:
            pass
    return ErrorReport.failed_to_parse()


def classify_response(status_code: int, body: Union[bytes, str]) -> UploadOutcome:
    """Classify an ``/instances`` response.

    Args:
        status_code: HTTP status code.
        body: Raw response body.

    Returns:
        A SingleUpload or BatchUpload for 2xx responses that decode, otherwise
        an ErrorReport.
    """
    data = _load_json(body)
    if data is _UNPARSEABLE:
        return ErrorReport.failed_to_parse()
    if is_success_status(status_code):
        return parse_upload_report(data)
    return parse_error_report(data)
