"""Configuration management for orthanc-import.

Supports a YAML settings file and environment variable overrides. Credentials
are never read from the file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from orthanc_import.core.exceptions import ConfigurationError
from orthanc_import.core.validation import validate_queue_size

# =============================================================================
# Constants
# =============================================================================

CONFIG_DIR = Path.home() / ".config" / "orthanc-import"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_THREADS = 4
DEFAULT_TIMEOUT = 120
DEFAULT_QUEUE_SIZE = 100

# Environment variable names
ENV_USER = "ORTHANC_USER"
ENV_PASS = "ORTHANC_PASS"
ENV_THREADS = "ORTHANC_IMPORT_THREADS"
ENV_TIMEOUT = "ORTHANC_IMPORT_TIMEOUT"
ENV_VERIFY_SSL = "ORTHANC_IMPORT_VERIFY_SSL"
ENV_CACHE_PATH = "ORTHANC_IMPORT_CACHE_PATH"


def _parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "0", "no"):
        return False
    raise ConfigurationError(f"Expected a boolean for {field_name}", field=field_name, value=value)


def _parse_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"Expected an integer for {field_name}", field=field_name, value=value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"Expected an integer for {field_name}", field=field_name, value=value
        ) from None


# =============================================================================
# Config
# =============================================================================


@dataclass
class Config:
    """Upload settings."""

    threads: int = DEFAULT_THREADS
    timeout: int = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    cache_path: Optional[Path] = None
    queue_size: int = DEFAULT_QUEUE_SIZE

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create from dictionary, validating value types.

        Raises:
            ConfigurationError: If a value has the wrong type.
            ValidationError: If ``queue_size`` is below 1.
        """
        config = cls()
        if "threads" in data:
            config.threads = _parse_int(data["threads"], "threads")
        if "timeout" in data:
            config.timeout = _parse_int(data["timeout"], "timeout")
        if "verify_ssl" in data:
            config.verify_ssl = _parse_bool(data["verify_ssl"], "verify_ssl")
        if data.get("cache_path"):
            config.cache_path = Path(str(data["cache_path"])).expanduser()
        if "queue_size" in data:
            config.queue_size = validate_queue_size(_parse_int(data["queue_size"], "queue_size"))
        return config

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Config":
        """Load config from file with environment variable overrides.

        Priority (highest to lowest):
        1. Environment variables
        2. Config file
        3. Defaults

        Args:
            config_path: Optional path to config file. An explicitly given
                path must exist.

        Returns:
            Loaded configuration.

        Raises:
            ConfigurationError: If the file is unreadable or malformed.
        """
        path = config_path or CONFIG_FILE
        config = cls()

        if config_path is not None and not path.exists():
            raise ConfigurationError(f"Config file not found: {path}", field="config")

        if path.exists():
            try:
                with open(path) as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file must contain a mapping: {path}")
            config = cls.from_dict(data)

        # Environment variable overrides
        if threads := os.getenv(ENV_THREADS):
            config.threads = _parse_int(threads, ENV_THREADS)
        if timeout := os.getenv(ENV_TIMEOUT):
            config.timeout = _parse_int(timeout, ENV_TIMEOUT)
        if verify_ssl := os.getenv(ENV_VERIFY_SSL):
            config.verify_ssl = _parse_bool(verify_ssl, ENV_VERIFY_SSL)
        if cache_path := os.getenv(ENV_CACHE_PATH):
            config.cache_path = Path(cache_path).expanduser()

        return config
