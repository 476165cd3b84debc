"""Per-file results and run summaries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .responses import UploadOutcome, is_success


@dataclass(frozen=True)
class UploadResult:
    """Outcome of uploading one file."""

    path: Path
    outcome: UploadOutcome

    @property
    def success(self) -> bool:
        return is_success(self.outcome)

    @property
    def summary(self) -> str:
        """Short status shown next to the path."""
        if self.success:
            return self.outcome.success_message  # type: ignore[union-attr]
        return "Error"

    def render(self) -> str:
        """Full multi-line dump of the outcome."""
        return self.outcome.render()

    def __str__(self) -> str:
        return f"{self.path}: {self.summary}"


@dataclass
class UploadSummary:
    """Summary of a complete upload run."""

    successes: int = 0
    failures: int = 0
    skipped: int = 0
    duration: float = 0.0

    @property
    def total(self) -> int:
        """Files that produced a result (skipped files excluded)."""
        return self.successes + self.failures

    @property
    def success(self) -> bool:
        return self.failures == 0
