"""Upload history used to skip files that were already accepted.

The persistent history is an append-only text file with one path per line.
It is loaded in full at startup and extended by one line for every upload the
server confirms.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from orthanc_import.core.exceptions import HistoryError

logger = logging.getLogger(__name__)


def read_path_set(history_path: Path) -> set[Path]:
    """Read a newline-delimited path file into a set.

    Blank lines and surrounding whitespace are ignored. A missing file yields
    an empty set.

    Raises:
        HistoryError: If the file exists but cannot be read or decoded.
    """
    try:
        with open(history_path, encoding="utf-8") as f:
            return {Path(line.strip()) for line in f if line.strip()}
    except FileNotFoundError:
        return set()
    except (OSError, UnicodeDecodeError) as e:
        raise HistoryError(f"Failed to read upload history: {e}", str(history_path)) from e


class FileUploadHistory(ABC):
    """Record of files that were uploaded successfully."""

    @abstractmethod
    def already_uploaded(self, path: Path) -> bool:
        """Return True if ``path`` was uploaded by an earlier success."""

    @abstractmethod
    def on_success(self, path: Path) -> None:
        """Record a confirmed upload of ``path``."""


class DisabledFileUploadHistory(FileUploadHistory):
    """History used when no history file is configured."""

    def already_uploaded(self, path: Path) -> bool:
        return False

    def on_success(self, path: Path) -> None:
        return None


class TextFileUploadHistory(FileUploadHistory):
    """History persisted as an append-only text file.

    One lock guards both the in-memory set and the log file, so a path is
    never visible in memory unless its line has been written.
    """

    def __init__(self, history_path: Path, paths: Optional[set[Path]] = None) -> None:
        self.history_path = history_path
        self._paths: set[Path] = set(paths or ())
        self._lock = threading.Lock()

    @classmethod
    def from_file(cls, history_path: Path) -> TextFileUploadHistory:
        """Load the history file; a missing file starts an empty history.

        Raises:
            HistoryError: If the file exists but cannot be read.
        """
        paths = read_path_set(history_path)
        logger.debug("Loaded %d paths from %s", len(paths), history_path)
        return cls(history_path, paths)

    @property
    def paths(self) -> set[Path]:
        """Snapshot of recorded paths."""
        with self._lock:
            return set(self._paths)

    def __len__(self) -> int:
        with self._lock:
            return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self.already_uploaded(path)

    def already_uploaded(self, path: Path) -> bool:
        with self._lock:
            return path in self._paths

    def on_success(self, path: Path) -> None:
        """Append ``path`` to the log, then add it to the in-memory set.

        A path that is already recorded is left alone: nothing is appended,
        so the log never holds duplicate lines.

        Raises:
            HistoryError: If the line cannot be appended. The in-memory set
                is left unchanged.
        """
        with self._lock:
            if path in self._paths:
                return
            try:
                with open(self.history_path, "a", encoding="utf-8") as f:
                    f.write(f"{path}\n")
            except OSError as e:
                raise HistoryError(
                    f"Failed to record {path} in upload history: {e}",
                    str(self.history_path),
                ) from e
            self._paths.add(path)


def open_history(history_path: Optional[Path]) -> FileUploadHistory:
    """Return the persistent history for ``history_path``, or a disabled one.

    Raises:
        HistoryError: If an existing history file cannot be read.
    """
    if history_path is None:
        return DisabledFileUploadHistory()
    return TextFileUploadHistory.from_file(history_path)
