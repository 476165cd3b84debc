"""Logging utilities for orthanc-import.

Diagnostics go to stderr through the standard logging module so that the
per-file protocol lines on stdout stay machine-readable.
"""

from __future__ import annotations

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Generator, Optional

# =============================================================================
# Constants
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers that would otherwise log every request at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


# =============================================================================
# Logger Setup
# =============================================================================


def setup_logging(*, debug: bool = False) -> None:
    """Send diagnostics to stderr.

    Args:
        debug: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# =============================================================================
# Run Timing
# =============================================================================


class LogContext:
    """Elapsed time and descriptive fields of a logged operation."""

    def __init__(self, **fields: Any):
        self.fields = fields
        self._started: Optional[float] = None

    @property
    def elapsed(self) -> float:
        """Seconds since the run started, or 0.0 before it starts."""
        if self._started is None:
            return 0.0
        return time.monotonic() - self._started

    def start(self) -> None:
        self._started = time.monotonic()

    def describe(self) -> str:
        return " ".join(f"{key}={value}" for key, value in self.fields.items())


@contextmanager
def log_context(
    operation: str,
    logger: logging.Logger,
    **fields: Any,
) -> Generator[LogContext, None, None]:
    """Log the start and end of ``operation`` with its elapsed time.

    An exception escaping the block is logged and re-raised.

    Yields:
        LogContext whose ``elapsed`` can be read inside the block.
    """
    ctx = LogContext(**fields)
    ctx.start()
    logger.info("%s started: %s", operation, ctx.describe())
    try:
        yield ctx
    except BaseException as e:
        logger.error("%s aborted after %.2fs: %r", operation, ctx.elapsed, e)
        raise
    logger.info("%s finished in %.2fs", operation, ctx.elapsed)
