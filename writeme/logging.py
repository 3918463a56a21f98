"""Logging helpers shared by the scanners, the merger and the CLI."""

from __future__ import annotations

import logging
from pathlib import Path

_ROOT = "writeme"
_CONSOLE_FORMAT = "[writeme] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``writeme.<name>`` (or the package logger when *name* is empty)."""
    return logging.getLogger(f"{_ROOT}.{name}" if name else _ROOT)


def _resolve_level(verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.INFO


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Path | None = None,
) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Scanner degradation is reported as warnings, so the default INFO level keeps
    them visible inline while the README is being assembled. ``quiet`` drops
    everything below ERROR; ``verbose`` wins over ``quiet``.
    """
    level = _resolve_level(verbose, quiet)
    logger = logging.getLogger(_ROOT)
    logger.setLevel(level)
    logger.propagate = False

    # main() may run repeatedly in one interpreter; never stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(sink)
        logger.setLevel(logging.DEBUG)

    return logger


__all__ = ["configure_logging", "get_logger"]
