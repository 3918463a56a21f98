"""Scanners that turn a project into partial metadata."""

from __future__ import annotations

from .history import AuthorFieldMissing, HistoryScanner, scan_history
from .license import LicenseNotFoundError, scan_license
from .patterns import PatternScanner, scan_configs, scan_dependencies, scan_techs

__all__ = [
    "AuthorFieldMissing",
    "HistoryScanner",
    "LicenseNotFoundError",
    "PatternScanner",
    "scan_configs",
    "scan_dependencies",
    "scan_history",
    "scan_license",
    "scan_techs",
]
