"""Whole-file path cache.

A lighter alternative to the upload history: the set is loaded once and
rewritten in full, sorted, on save. It uses the same line format as the
history log but is not interchangeable with it, and the upload pipeline does
not use it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from orthanc_import.core.exceptions import HistoryError
from orthanc_import.history.store import read_path_set


@dataclass
class PathCache:
    """Set of paths persisted as a sorted newline-delimited file."""

    paths: set[Path] = field(default_factory=set)

    @classmethod
    def from_file(cls, cache_path: Path) -> PathCache:
        """Load a cache file; a missing file yields an empty cache.

        Raises:
            HistoryError: If the file exists but cannot be read.
        """
        return cls(read_path_set(cache_path))

    def save_to_file(self, cache_path: Path) -> None:
        """Rewrite ``cache_path`` with every path, sorted.

        Raises:
            HistoryError: If the file cannot be written.
        """
        try:
            with open(cache_path, "w", encoding="utf-8") as f:
                for path in sorted(self.paths):
                    f.write(f"{path}\n")
        except OSError as e:
            raise HistoryError(f"Failed to write cache: {e}", str(cache_path)) from e

    def add(self, path: Path) -> None:
        self.paths.add(path)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __len__(self) -> int:
        return len(self.paths)
