"""Main CLI entry point for orthanc-import."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import click

from orthanc_import import __version__
from orthanc_import.cli.common import ExitCode, handle_errors
from orthanc_import.core.config import ENV_PASS, ENV_USER, Config
from orthanc_import.core.logging import setup_logging
from orthanc_import.core.output import print_warning
from orthanc_import.core.validation import (
    validate_server_url,
    validate_timeout,
    validate_workers,
)
from orthanc_import.history.store import open_history
from orthanc_import.uploaders.pipeline import upload_directory

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=__version__, prog_name="orthanc-import")
@click.argument("url")
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
)
@click.option("--username", "-u", envvar=ENV_USER, help="Username for the REST API")
@click.option("--password", "-p", envvar=ENV_PASS, help="Password for the REST API")
@click.option("--verbose", "-v", is_flag=True, help="Print the full server response for every file")
@click.option("--threads", "-t", type=int, default=None, help="Number of upload threads [default: 4]")
@click.option(
    "--cache-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Upload history file; files listed there are skipped",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file [default: ~/.config/orthanc-import/config.yaml]",
)
@click.option("--timeout", type=int, default=None, help="Request timeout in seconds [default: 120]")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
@handle_errors
def cli(
    ctx: click.Context,
    url: str,
    path: Path,
    username: Optional[str],
    password: Optional[str],
    verbose: bool,
    threads: Optional[int],
    cache_path: Optional[Path],
    config_path: Optional[Path],
    timeout: Optional[int],
    insecure: bool,
    debug: bool,
) -> None:
    """Import every file under PATH into the Orthanc server at URL.

    Files are POSTed to URL/instances by a pool of upload threads. With
    --cache-path, files the server accepted are recorded and skipped on
    later runs.

    Examples:

      orthanc-import http://localhost:8042 ./dicom

      orthanc-import -u orthanc -p orthanc --cache-path uploaded.txt http://pacs:8042 ./dicom
    """
    setup_logging(debug=debug)

    config = Config.load(config_path)
    url = validate_server_url(url)
    threads = validate_workers(threads if threads is not None else config.threads)
    timeout = validate_timeout(timeout if timeout is not None else config.timeout)
    history_path = cache_path or config.cache_path
    verify_ssl = config.verify_ssl and not insecure

    if bool(username) != bool(password):
        print_warning("Both --username and --password are required for authentication")

    history = open_history(history_path)
    logger.debug("Using %s", type(history).__name__)

    summary = upload_directory(
        path,
        base_url=url,
        username=username,
        password=password,
        threads=threads,
        history=history,
        verbose=verbose,
        timeout=timeout,
        verify_ssl=verify_ssl,
        queue_size=config.queue_size,
    )

    if not summary.success:
        ctx.exit(ExitCode.UPLOAD_FAILURES)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
