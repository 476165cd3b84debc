"""Console output for orthanc-import.

Per-file protocol lines are plain text on stdout; status messages use Rich
styling. Both consoles are safe to use from worker threads.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

# =============================================================================
# Console Instances
# =============================================================================

console = Console()
err_console = Console(stderr=True)


# =============================================================================
# Protocol Lines
# =============================================================================


def print_line(message: str) -> None:
    """Print a line verbatim to stdout.

    File paths may contain square brackets, so Rich markup and highlighting
    are disabled, and soft wrapping keeps long paths on one line.
    """
    console.print(message, markup=False, highlight=False, soft_wrap=True)


def print_skipped(path: object) -> None:
    """Print the notice for a file found in the upload history."""
    print_line(f"{path} skipped")


def print_totals(successes: int, failures: int) -> None:
    """Print the end-of-run summary."""
    print_line(f"Successes: {successes}")
    print_line(f"Failures: {failures}")


# =============================================================================
# Status Messages
# =============================================================================


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)


def print_warning(message: str) -> None:
    """Print warning message to stderr."""
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False, soft_wrap=True)
