"""Tests for orthanc_import.history module."""

from __future__ import annotations

import threading
from pathlib import Path

import pytest

from orthanc_import.core.exceptions import HistoryError
from orthanc_import.history import (
    DisabledFileUploadHistory,
    PathCache,
    TextFileUploadHistory,
    open_history,
    read_path_set,
)

# =============================================================================
# read_path_set Tests
# =============================================================================


class TestReadPathSet:
    def test_missing_file_is_empty(self, temp_dir: Path):
        assert read_path_set(temp_dir / "missing.txt") == set()

    def test_ignores_blank_lines_and_whitespace(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history_file.write_text("a/b.dcm\n\n   \n  c/d.dcm  \na/b.dcm\n")

        assert read_path_set(history_file) == {Path("a/b.dcm"), Path("c/d.dcm")}

    def test_directory_raises(self, temp_dir: Path):
        with pytest.raises(HistoryError, match="Failed to read upload history"):
            read_path_set(temp_dir)

    def test_undecodable_file_raises(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history_file.write_bytes(b"\xff\xfe\xfa\n")

        with pytest.raises(HistoryError):
            read_path_set(history_file)


# =============================================================================
# DisabledFileUploadHistory Tests
# =============================================================================


class TestDisabledHistory:
    def test_never_reports_uploaded(self):
        history = DisabledFileUploadHistory()

        history.on_success(Path("a.dcm"))

        assert history.already_uploaded(Path("a.dcm")) is False

    def test_open_history_without_path(self, temp_dir: Path):
        history = open_history(None)

        history.on_success(temp_dir / "a.dcm")

        assert isinstance(history, DisabledFileUploadHistory)
        assert list(temp_dir.iterdir()) == []


# =============================================================================
# TextFileUploadHistory Tests
# =============================================================================


class TestTextFileHistory:
    def test_from_missing_file_starts_empty(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"

        history = TextFileUploadHistory.from_file(history_file)

        assert len(history) == 0
        assert not history_file.exists()

    def test_loads_existing_paths(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history_file.write_text("one.dcm\ntwo.dcm\n")

        history = TextFileUploadHistory.from_file(history_file)

        assert history.already_uploaded(Path("one.dcm")) is True
        assert history.already_uploaded(Path("three.dcm")) is False
        assert Path("two.dcm") in history

    def test_on_success_appends_line(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history_file.write_text("one.dcm\n")
        history = TextFileUploadHistory.from_file(history_file)

        history.on_success(Path("two.dcm"))

        assert history_file.read_text() == "one.dcm\ntwo.dcm\n"
        assert history.already_uploaded(Path("two.dcm")) is True

    def test_on_success_creates_file(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history = TextFileUploadHistory.from_file(history_file)

        history.on_success(Path("one.dcm"))

        assert history_file.read_text() == "one.dcm\n"

    def test_on_success_does_not_duplicate(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history = TextFileUploadHistory.from_file(history_file)

        history.on_success(Path("one.dcm"))
        history.on_success(Path("one.dcm"))

        assert history_file.read_text() == "one.dcm\n"

    def test_reload_sees_appended_paths(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        first = TextFileUploadHistory.from_file(history_file)
        first.on_success(Path("a.dcm"))
        first.on_success(Path("b.dcm"))

        second = TextFileUploadHistory.from_file(history_file)

        assert second.paths == {Path("a.dcm"), Path("b.dcm")}

    def test_append_failure_leaves_memory_unchanged(self, temp_dir: Path):
        history = TextFileUploadHistory(temp_dir / "no-such-dir" / "history.txt")

        with pytest.raises(HistoryError, match="Failed to record"):
            history.on_success(Path("a.dcm"))

        assert history.already_uploaded(Path("a.dcm")) is False
        assert len(history) == 0

    def test_unreadable_history_is_fatal(self, temp_dir: Path):
        with pytest.raises(HistoryError):
            open_history(temp_dir)

    def test_paths_is_a_snapshot(self, temp_dir: Path):
        history = TextFileUploadHistory(temp_dir / "history.txt", {Path("a.dcm")})

        snapshot = history.paths
        snapshot.add(Path("b.dcm"))

        assert history.already_uploaded(Path("b.dcm")) is False

    def test_concurrent_on_success_writes_every_line_once(self, temp_dir: Path):
        history_file = temp_dir / "history.txt"
        history = TextFileUploadHistory.from_file(history_file)
        paths = [Path(f"file{i:03d}.dcm") for i in range(200)]

        def record(chunk: list[Path]) -> None:
            for path in chunk:
                history.already_uploaded(path)
                history.on_success(path)

        # Every thread records the full list, so each path is offered 4 times
        threads = [threading.Thread(target=record, args=(paths,)) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = history_file.read_text().splitlines()
        assert sorted(lines) == sorted(str(p) for p in paths)
        assert history.paths == set(paths)


# =============================================================================
# PathCache Tests
# =============================================================================


class TestPathCache:
    def test_round_trip_ignores_insertion_order(self, temp_dir: Path):
        cache_file = temp_dir / "cache.txt"
        cache = PathCache()
        for name in ("c.dcm", "a.dcm", "b/z.dcm", "b/a.dcm"):
            cache.add(Path(name))

        cache.save_to_file(cache_file)
        loaded = PathCache.from_file(cache_file)

        assert loaded.paths == cache.paths

    def test_save_sorts_and_rewrites(self, temp_dir: Path):
        cache_file = temp_dir / "cache.txt"
        cache_file.write_text("stale.dcm\n")
        cache = PathCache({Path("b.dcm"), Path("a.dcm")})

        cache.save_to_file(cache_file)

        assert cache_file.read_text() == "a.dcm\nb.dcm\n"

    def test_missing_file_is_empty(self, temp_dir: Path):
        cache = PathCache.from_file(temp_dir / "missing.txt")
        assert len(cache) == 0

    def test_save_failure_raises(self, temp_dir: Path):
        cache = PathCache({Path("a.dcm")})

        with pytest.raises(HistoryError, match="Failed to write cache"):
            cache.save_to_file(temp_dir / "missing-dir" / "cache.txt")
