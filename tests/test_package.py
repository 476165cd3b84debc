"""Tests for orthanc_import package imports and exports."""

from __future__ import annotations


class TestPackageImports:
    """Tests for package imports."""

    def test_import_orthanc_import(self):
        import orthanc_import

        assert hasattr(orthanc_import, "__version__")
        assert callable(orthanc_import.upload_directory)

    def test_import_core_modules(self):
        from orthanc_import.core import client, config, exceptions, logging, output, validation

        assert client is not None
        assert config is not None
        assert exceptions is not None
        assert validation is not None
        assert output is not None
        assert logging is not None

    def test_import_models(self):
        from orthanc_import.models import base, responses, results

        assert base is not None
        assert responses is not None
        assert results is not None

    def test_import_history(self):
        from orthanc_import.history import cache, store

        assert cache is not None
        assert store is not None

    def test_import_uploaders(self):
        from orthanc_import.uploaders import classifier, common, pipeline, queues, worker

        assert classifier is not None
        assert common is not None
        assert pipeline is not None
        assert queues is not None
        assert worker is not None

    def test_import_cli(self):
        from orthanc_import.cli.main import cli, main

        assert cli is not None
        assert callable(main)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_all_exceptions_inherit_from_base(self):
        from orthanc_import.core.exceptions import (
            ConfigurationError,
            HistoryError,
            InvalidURLError,
            OrthancImportError,
            PathValidationError,
            QueueClosedError,
            ValidationError,
        )

        assert issubclass(ConfigurationError, OrthancImportError)
        assert issubclass(ValidationError, OrthancImportError)
        assert issubclass(InvalidURLError, ValidationError)
        assert issubclass(PathValidationError, ValidationError)
        assert issubclass(HistoryError, OrthancImportError)
        assert issubclass(QueueClosedError, OrthancImportError)

    def test_exception_details_rendering(self):
        from orthanc_import.core.exceptions import HistoryError, OrthancImportError

        assert str(OrthancImportError("plain")) == "plain"
        error = HistoryError("Failed to read upload history", "/tmp/history.txt")
        assert str(error) == "Failed to read upload history (history=/tmp/history.txt)"
        assert error.history_path == "/tmp/history.txt"
