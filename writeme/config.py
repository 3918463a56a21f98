"""Configuration loading for writeme (.writeme.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".writeme.yml"
DEFAULT_MAX_TECHNOLOGIES = 40
DEFAULT_AUTHORITATIVE_PLATFORMS = ("github",)


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScannerConfig:
    """Limits and policies used by the scanners."""

    max_technologies: int = DEFAULT_MAX_TECHNOLOGIES
    authoritative_platforms: List[str] = field(
        default_factory=lambda: list(DEFAULT_AUTHORITATIVE_PLATFORMS)
    )


@dataclass
class RegistryConfig:
    """Overrides for the bundled pattern registries."""

    configs: Optional[Path] = None
    techs: Optional[Path] = None


@dataclass
class PromptConfig:
    """Interactive conflict resolution settings."""

    interactive: bool = True


@dataclass
class WriteMeConfig:
    """Represents the settings defined in .writeme.yml."""

    root: Path
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> WriteMeConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return WriteMeConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    scanner = ScannerConfig()
    scanner_data = _as_dict(data.get("scanner"))
    if scanner_data:
        max_techs = _as_int(scanner_data.get("max_technologies"))
        if max_techs is not None:
            if max_techs < 0:
                raise ConfigError("scanner.max_technologies must not be negative")
            scanner.max_technologies = max_techs
        if "authoritative_platforms" in scanner_data:
            scanner.authoritative_platforms = [
                value.lower() for value in _as_str_list(scanner_data.get("authoritative_platforms"))
            ]

    registry = RegistryConfig()
    registry_data = _as_dict(data.get("registry"))
    if registry_data:
        configs = _as_str(registry_data.get("configs"))
        techs = _as_str(registry_data.get("techs"))
        registry.configs = root / configs if configs else None
        registry.techs = root / techs if techs else None

    prompt = PromptConfig()
    prompt_data = _as_dict(data.get("prompt"))
    if prompt_data:
        interactive = _as_bool(prompt_data.get("interactive"))
        if interactive is not None:
            prompt.interactive = interactive

    return WriteMeConfig(
        root=root,
        scanner=scanner,
        registry=registry,
        prompt=prompt,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Expected an integer, got {value!r}") from None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
