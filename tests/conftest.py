"""Pytest configuration and fixtures for orthanc-import tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from helpers import FakeOrthanc


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def fake_orthanc() -> FakeOrthanc:
    """Fake Orthanc server."""
    return FakeOrthanc()


@pytest.fixture
def dicom_tree(temp_dir: Path) -> Path:
    """Directory with five files spread over nested folders."""
    root = temp_dir / "dicom"
    (root / "study1" / "series1").mkdir(parents=True)
    (root / "study1" / "series2").mkdir(parents=True)
    (root / "study2").mkdir(parents=True)
    (root / "study1" / "series1" / "IM0001.dcm").write_bytes(b"DICM-1")
    (root / "study1" / "series1" / "IM0002.dcm").write_bytes(b"DICM-2")
    (root / "study1" / "series2" / "IM0001.dcm").write_bytes(b"DICM-3")
    (root / "study2" / "IM0001").write_bytes(b"DICM-4")
    (root / "archive.zip").write_bytes(b"PK-5")
    return root


@pytest.fixture
def sample_config_yaml() -> str:
    """Sample config YAML content."""
    return """
threads: 8
timeout: 60
verify_ssl: false
cache_path: /var/lib/orthanc-import/history.txt
queue_size: 50
"""
