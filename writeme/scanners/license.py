"""License file scanner for the top level of a project."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence, Tuple

from ..licenses import classify_license
from ..logging import get_logger
from ..models import MetadataRecord

logger = get_logger("scanners.license")

_STEMS = ("license", "copying", "notice")
_EXTENSIONS = ("", ".txt", ".md", ".html", ".yml", ".yaml", ".json")

LICENSE_FILENAMES: Tuple[str, ...] = tuple(
    f"{stem}{extension}" for stem in _STEMS for extension in _EXTENSIONS
)


class LicenseNotFoundError(FileNotFoundError):
    """No license, copying or notice file at the project root."""


def find_license_file(
    project_location: str, candidates: Sequence[str] = LICENSE_FILENAMES
) -> Optional[Path]:
    """Return the first top-level file whose lowercased name ends with a candidate.

    Entries are visited in sorted name order so the winner does not depend on
    the filesystem's listing order.
    """
    root = Path(project_location)
    for entry in sorted(root.iterdir(), key=lambda item: item.name):
        if not entry.is_file():
            continue
        lowered = entry.name.lower()
        if any(lowered.endswith(candidate) for candidate in candidates):
            return entry
    return None


def scan_license(project_location: str) -> MetadataRecord:
    """Classify the project's license file.

    Raises :class:`LicenseNotFoundError` when the project root holds none.
    """
    path = find_license_file(project_location)
    if path is None:
        raise LicenseNotFoundError(f"No license file found in {project_location}")

    logger.debug("Using license file %s", path)
    text = path.read_text(encoding="utf-8", errors="replace")
    return MetadataRecord(
        license=classify_license(text, path=str(path)),
        source_config_file_path=str(path),
    )


__all__ = ["LICENSE_FILENAMES", "LicenseNotFoundError", "find_license_file", "scan_license"]
