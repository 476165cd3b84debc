"""Shared test helpers for orthanc-import tests."""

from __future__ import annotations

import threading
from typing import Any, Callable

import httpx


def make_record(status: str = "Success", instance_id: str = "abc") -> dict[str, Any]:
    """Build a single-instance upload response body."""
    return {
        "ID": instance_id,
        "ParentPatient": "patient-1",
        "ParentSeries": "series-1",
        "ParentStudy": "study-1",
        "Path": f"/instances/{instance_id}",
        "Status": status,
    }


def make_error(
    status: int = 400, details: str = "Cannot parse an invalid DICOM file"
) -> dict[str, Any]:
    """Build an Orthanc error body."""
    return {
        "Details": details,
        "HttpError": "Bad Request",
        "HttpStatus": status,
        "Message": "Bad file format",
        "Method": "POST",
        "OrthancError": "Bad file format",
        "OrthancStatus": 15,
        "Uri": "/instances",
    }


class FakeOrthanc:
    """In-process stand-in for the Orthanc ``/instances`` endpoint.

    Every request is recorded. By default each upload answers with a
    single-instance success; ``responder`` can override that per request.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.bodies: list[bytes] = []
        self.responder: Callable[[httpx.Request], httpx.Response] | None = None
        self._lock = threading.Lock()

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = request.read()
        with self._lock:
            self.requests.append(request)
            self.bodies.append(body)
        if self.responder is not None:
            return self.responder(request)
        return httpx.Response(200, json=make_record())

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
