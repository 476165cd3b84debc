"""Common CLI helpers."""

from __future__ import annotations

import sys
from functools import wraps
from typing import Any, Callable, TypeVar

import click

from orthanc_import.core.exceptions import OrthancImportError
from orthanc_import.core.output import print_error

F = TypeVar("F", bound=Callable[..., Any])


# =============================================================================
# Error Handling
# =============================================================================


def handle_errors(f: F) -> F:
    """Handle common errors and convert to CLI exits."""

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        """Capture errors and exit with consistent messaging."""
        try:
            return f(*args, **kwargs)
        except OrthancImportError as e:
            print_error(str(e))
            sys.exit(ExitCode.GENERAL_ERROR)
        except click.ClickException:
            raise

    return wrapper  # type: ignore


# =============================================================================
# Exit Codes
# =============================================================================


class ExitCode:
    """Standard exit codes."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    UPLOAD_FAILURES = 4
