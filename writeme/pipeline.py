"""Run every scanner over a project and merge the results."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .config import ConfigError, WriteMeConfig, load_config
from .converters import convert
from .logging import get_logger
from .merger import Merger
from .models import Dependency, MetadataRecord, Platform
from .prompting import Chooser, FirstChoiceChooser, QuestionaryChooser
from .registry import PatternRegistry
from .repo_scanner import RepoScanner
from .scanners.history import HistoryScanner
from .scanners.license import LicenseNotFoundError, scan_license
from .scanners.patterns import PatternScanner


@dataclass
class ScanReport:
    """Everything gathered for one project."""

    root: Path
    configs: List[str]
    technologies: List[str]
    metadata: MetadataRecord
    records: List[MetadataRecord] = field(default_factory=list)


class Pipeline:
    """Coordinates the walker, the scanners, the converters and the merger."""

    def __init__(
        self,
        config: WriteMeConfig | None = None,
        *,
        registry: PatternRegistry | None = None,
        chooser: Chooser | None = None,
        history_scanner: HistoryScanner | None = None,
    ) -> None:
        self._config = config
        self._registry = registry
        self._chooser = chooser
        self._history_scanner = history_scanner
        self.logger = get_logger("pipeline")

    def run(self, path: str) -> ScanReport:
        root = Path(path).expanduser().resolve()
        config = self._config or load_config(root)
        self.logger.info("Scanning %s", root)

        # Registry problems are fatal and must surface before any scanning.
        registry = self._registry or PatternRegistry.load(config)
        patterns = PatternScanner(registry, limit=config.scanner.max_technologies)

        paths = RepoScanner(config).scan(str(root))
        configs = patterns.configs(paths)
        self.logger.debug("Config files: %s", ", ".join(configs) or "(none)")

        records: List[MetadataRecord] = []
        for relative in configs:
            record = convert(root, relative)
            if record is not None:
                records.append(record)

        declared: List[Dependency] = []
        for record in records:
            declared.extend(record.dependencies or [])
        technologies = patterns.techs(paths) | patterns.dependencies(declared)

        records.append(self._history(config).scan(str(root)))
        try:
            records.append(scan_license(str(root)))
        except LicenseNotFoundError as exc:
            self.logger.warning("%s", exc)
        except OSError as exc:
            self.logger.warning("Failed to read license file: %s", exc)

        metadata = Merger(self._resolve_chooser(config)).merge(records)
        return ScanReport(
            root=root,
            configs=configs,
            technologies=sorted(technologies),
            metadata=metadata,
            records=records,
        )

    def _history(self, config: WriteMeConfig) -> HistoryScanner:
        if self._history_scanner is not None:
            return self._history_scanner
        platforms = []
        for value in config.scanner.authoritative_platforms:
            try:
                platforms.append(Platform(value))
            except ValueError:
                raise ConfigError(f"Unknown platform in scanner.authoritative_platforms: {value}") from None
        return HistoryScanner(authoritative_platforms=platforms)

    def _resolve_chooser(self, config: WriteMeConfig) -> Chooser:
        if self._chooser is not None:
            return self._chooser
        if config.prompt.interactive:
            return QuestionaryChooser()
        return FirstChoiceChooser()


__all__ = ["Pipeline", "ScanReport"]
