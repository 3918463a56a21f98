"""Registry-driven scanners for config files, technologies and dependencies."""

from __future__ import annotations

import re
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Set

from ..logging import get_logger
from ..models import Dependency, PatternEntry
from ..registry import PatternRegistry, RegistryError, default_registry

DEFAULT_TECHNOLOGY_LIMIT = 40

logger = get_logger("scanners.patterns")


def scan_configs(paths: Sequence[str], registry: Optional[PatternRegistry] = None) -> List[str]:
    """Return the paths whose file name matches a known config file, in input order."""
    registry = registry or default_registry()
    anchored = [
        rf"(?:^|/)(?:{pattern})$"
        for patterns in registry.config_patterns.values()
        for pattern in patterns
    ]
    compiled = _compile(anchored, "config files")

    present: List[str] = []
    for path in paths:
        if _matches_any(compiled, _normalise(path)):
            present.append(path)
    return present


def scan_techs(
    paths: Sequence[str],
    registry: Optional[PatternRegistry] = None,
    *,
    limit: int = DEFAULT_TECHNOLOGY_LIMIT,
) -> Set[str]:
    """Return technologies with at least one config pattern matching a path."""
    normalised = [_normalise(path) for path in paths]
    return _detect(
        registry or default_registry(),
        limit,
        lambda entry: entry.config_file_patterns,
        normalised,
        "config_files",
    )


def scan_dependencies(
    dependencies: Iterable[Dependency],
    registry: Optional[PatternRegistry] = None,
    *,
    limit: int = DEFAULT_TECHNOLOGY_LIMIT,
) -> Set[str]:
    """Return technologies with a dependency-name pattern matching a declared dependency."""
    names = [dependency.name for dependency in dependencies]
    return _detect(
        registry or default_registry(),
        limit,
        lambda entry: entry.dependency_name_patterns,
        names,
        "dependency_names",
    )


class PatternScanner:
    """Runs the three registry scans against one shared registry."""

    def __init__(
        self,
        registry: Optional[PatternRegistry] = None,
        *,
        limit: int = DEFAULT_TECHNOLOGY_LIMIT,
    ) -> None:
        self.registry = registry or default_registry()
        self.limit = limit

    def configs(self, paths: Sequence[str]) -> List[str]:
        return scan_configs(paths, self.registry)

    def techs(self, paths: Sequence[str]) -> Set[str]:
        return scan_techs(paths, self.registry, limit=self.limit)

    def dependencies(self, dependencies: Iterable[Dependency]) -> Set[str]:
        return scan_dependencies(dependencies, self.registry, limit=self.limit)


def _detect(
    registry: PatternRegistry,
    limit: int,
    patterns_of: Callable[[PatternEntry], Sequence[str]],
    candidates: Sequence[str],
    category: str,
) -> Set[str]:
    present: Set[str] = set()
    # Registry tables are sorted by name, so the cap always keeps the same entries.
    for index, (name, entry) in enumerate(registry.technologies.items()):
        if index >= limit:
            logger.debug(
                "Technology limit %d reached; skipped %d registry entries",
                limit,
                len(registry.technologies) - limit,
            )
            break
        patterns = patterns_of(entry)
        if not patterns:
            continue
        compiled = _compile(patterns, f"{name}.{category}")
        if any(_matches_any(compiled, candidate) for candidate in candidates):
            present.add(name)
    return present


def _compile(patterns: Iterable[str], where: str) -> List[Pattern[str]]:
    try:
        return [re.compile(pattern) for pattern in patterns]
    except re.error as exc:
        raise RegistryError(f"Invalid pattern in registry '{where}': {exc}") from exc


def _matches_any(compiled: Sequence[Pattern[str]], candidate: str) -> bool:
    return any(pattern.search(candidate) for pattern in compiled)


def _normalise(path: str) -> str:
    return path.replace("\\", "/")


__all__ = [
    "DEFAULT_TECHNOLOGY_LIMIT",
    "PatternScanner",
    "scan_configs",
    "scan_dependencies",
    "scan_techs",
]
