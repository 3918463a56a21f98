"""Pattern registries: known config files and detectable technologies.

Both tables ship as YAML under ``writeme/data`` and can be replaced per project
through ``.writeme.yml``. They are the ground truth for every scanner, so any
defect in them is fatal: loading raises :class:`RegistryError` instead of
skipping the bad entry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .config import WriteMeConfig
from .models import PatternEntry

_DATA_PACKAGE = "writeme.data"
CONFIGS_RESOURCE = "configs.yml"
TECHS_RESOURCE = "techs.yml"


class RegistryError(RuntimeError):
    """Raised when registry data is missing, malformed or holds a bad pattern."""


def load_config_patterns(path: Optional[Path] = None) -> Mapping[str, Tuple[str, ...]]:
    """Return ``ecosystem -> config filename patterns`` sorted by ecosystem."""
    data = _load_table(path, CONFIGS_RESOURCE)

    table: Dict[str, Tuple[str, ...]] = {}
    for ecosystem in sorted(data):
        table[ecosystem] = _pattern_tuple(data[ecosystem], ecosystem)
    return MappingProxyType(table)


def load_technology_patterns(path: Optional[Path] = None) -> Mapping[str, PatternEntry]:
    """Return ``technology -> PatternEntry`` sorted by technology name."""
    data = _load_table(path, TECHS_RESOURCE)

    table: Dict[str, PatternEntry] = {}
    for name in sorted(data):
        entry = data[name]
        if entry is None:
            entry = {}
        if not isinstance(entry, dict):
            raise RegistryError(f"Technology '{name}' must map to a mapping of pattern lists")
        unknown = set(entry) - {"config_files", "dependency_names"}
        if unknown:
            raise RegistryError(
                f"Technology '{name}' has unknown keys: {', '.join(sorted(map(str, unknown)))}"
            )
        table[name] = PatternEntry(
            technology_name=name,
            config_file_patterns=_pattern_tuple(entry.get("config_files"), f"{name}.config_files"),
            dependency_name_patterns=_pattern_tuple(
                entry.get("dependency_names"), f"{name}.dependency_names"
            ),
        )
    return MappingProxyType(table)


@dataclass(frozen=True)
class PatternRegistry:
    """Both registry tables, loaded once and shared read-only by the scanners."""

    config_patterns: Mapping[str, Tuple[str, ...]]
    technologies: Mapping[str, PatternEntry]

    @classmethod
    def load(cls, config: Optional[WriteMeConfig] = None) -> "PatternRegistry":
        configs_path = config.registry.configs if config else None
        techs_path = config.registry.techs if config else None
        return cls(
            config_patterns=load_config_patterns(configs_path),
            technologies=load_technology_patterns(techs_path),
        )


_default_registry: Optional[PatternRegistry] = None


def default_registry() -> PatternRegistry:
    """Return the bundled registry, loading it on first use."""
    global _default_registry
    if _default_registry is None:
        _default_registry = PatternRegistry.load()
    return _default_registry


def _load_table(path: Optional[Path], resource: str) -> Dict[str, Any]:
    source = str(path) if path is not None else f"{_DATA_PACKAGE}/{resource}"
    try:
        if path is not None:
            text = Path(path).read_text(encoding="utf-8")
        else:
            text = resources.files(_DATA_PACKAGE).joinpath(resource).read_text(encoding="utf-8")
    except OSError as exc:
        raise RegistryError(f"Cannot read registry {source}: {exc}") from exc

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RegistryError(f"Registry {source} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise RegistryError(f"Registry {source} must contain a mapping at the root")
    for key in data:
        if not isinstance(key, str):
            raise RegistryError(f"Registry {source} has a non-string key: {key!r}")
    return data


def _pattern_tuple(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise RegistryError(f"Registry entry '{where}' must be a list of patterns")

    patterns = []
    for item in value:
        if not isinstance(item, str) or not item:
            raise RegistryError(f"Registry entry '{where}' holds a non-string pattern: {item!r}")
        try:
            re.compile(item)
        except re.error as exc:
            raise RegistryError(f"Registry entry '{where}' has a bad pattern {item!r}: {exc}") from exc
        patterns.append(item)
    return tuple(patterns)


__all__ = [
    "PatternRegistry",
    "RegistryError",
    "default_registry",
    "load_config_patterns",
    "load_technology_patterns",
]
