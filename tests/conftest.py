from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.repo_builder import RecordingChooser, RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a throwaway project rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def chooser() -> RecordingChooser:
    """A chooser that records every prompt and picks index 0 unless told otherwise."""
    return RecordingChooser()


@pytest.fixture(autouse=True)
def _reset_writeme_logger() -> Iterator[None]:
    # configure_logging() detaches the package logger from the root; caplog needs it attached.
    logger = logging.getLogger("writeme")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
