"""Tests for CLI common helpers."""

from __future__ import annotations

import click
import pytest

from orthanc_import.cli.common import ExitCode, handle_errors
from orthanc_import.core.exceptions import HistoryError


def test_handle_errors_passes_through_return_value():
    @handle_errors
    def command() -> str:
        return "ok"

    assert command() == "ok"


def test_handle_errors_converts_package_errors_to_exit(capsys):
    @handle_errors
    def command() -> None:
        raise HistoryError("Failed to read upload history", "/tmp/history.txt")

    with pytest.raises(SystemExit) as exc_info:
        command()

    assert exc_info.value.code == ExitCode.GENERAL_ERROR
    assert "Failed to read upload history" in capsys.readouterr().err


def test_handle_errors_reraises_click_exceptions():
    @handle_errors
    def command() -> None:
        raise click.UsageError("bad usage")

    with pytest.raises(click.UsageError):
        command()


def test_handle_errors_leaves_other_errors_alone():
    @handle_errors
    def command() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        command()
