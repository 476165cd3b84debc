"""Command-line interface for orthanc-import."""
