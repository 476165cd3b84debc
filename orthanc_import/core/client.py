"""HTTP client for the Orthanc REST API.

One client is owned by each upload worker, so no instance is shared between
threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx

from orthanc_import.core.config import DEFAULT_TIMEOUT
from orthanc_import.core.validation import validate_server_url

INSTANCES_PATH = "/instances"


@dataclass
class OrthancClient:
    """Minimal Orthanc client for instance uploads."""

    base_url: str
    username: str | None = None
    password: str | None = None
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    transport: httpx.BaseTransport | None = field(default=None, repr=False)
    _client: httpx.Client | None = field(init=False, default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate and normalize URL."""
        self.base_url = validate_server_url(self.base_url)

    # =========================================================================
    # Client Management
    # =========================================================================

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                timeout=self.timeout,
                verify=self.verify_ssl,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> OrthancClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    # =========================================================================
    # Authentication
    # =========================================================================

    @property
    def uses_basic_auth(self) -> bool:
        """Basic auth is sent only when both username and password are set."""
        return bool(self.username) and bool(self.password)

    def _get_auth(self) -> tuple[str, str] | None:
        """Get basic auth tuple if credentials are complete."""
        if self.uses_basic_auth:
            return (str(self.username), str(self.password))
        return None

    # =========================================================================
    # Uploads
    # =========================================================================

    def upload_instance(self, content: bytes) -> httpx.Response:
        """POST one file's raw bytes to ``/instances``.

        Args:
            content: Raw file contents.

        Returns:
            The server response, whatever its status code.

        Raises:
            httpx.HTTPError: If the request could not be completed.
        """
        client = self._get_client()
        auth = self._get_auth()
        if auth is not None:
            return client.post(INSTANCES_PATH, content=content, auth=auth)
        return client.post(INSTANCES_PATH, content=content)
