"""Merge partial metadata records into the record used for the README."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .logging import get_logger
from .models import ContributorList, Dependency, MetadataRecord
from .prompting import Chooser, FirstChoiceChooser, PromptTheme, resolve_conflict

logger = get_logger("merger")


@dataclass(frozen=True)
class ScalarField:
    """A single optional value; conflicts are resolved by the chooser."""

    name: str

    def merge(self, values: Sequence[Any], chooser: Chooser, theme: PromptTheme) -> Any:
        return resolve_conflict(self.name, values, chooser, theme=theme)


@dataclass(frozen=True)
class ContributorsField:
    """A whole contributor list; conflicting lists are resolved by the chooser."""

    name: str = "contributors"

    def merge(
        self, values: Sequence[Optional[ContributorList]], chooser: Chooser, theme: PromptTheme
    ) -> Optional[ContributorList]:
        chosen = resolve_conflict(
            self.name, values, chooser, display=self.display, theme=theme
        )
        return list(chosen) if chosen is not None else None

    @staticmethod
    def display(contributors: ContributorList) -> str:
        return ", ".join(str(contributor) for contributor in contributors) or "(none)"


@dataclass(frozen=True)
class DependenciesField:
    """Dependency lists are combined, never prompted for."""

    name: str = "dependencies"

    def merge(
        self,
        values: Sequence[Optional[List[Dependency]]],
        chooser: Chooser,
        theme: PromptTheme,
    ) -> Optional[List[Dependency]]:
        present = [value for value in values if value is not None]
        if not present:
            return None
        merged: Dict[str, Dependency] = {}
        for dependencies in present:
            for dependency in dependencies:
                merged.setdefault(dependency.name, dependency)
        return list(merged.values())


MERGED_FIELDS = (
    ScalarField("name"),
    ScalarField("description"),
    ScalarField("version"),
    ContributorsField(),
    ScalarField("repository"),
    ScalarField("license"),
    DependenciesField(),
)


class Merger:
    """Combines the records produced by every detected source, field by field.

    Fields are independent: the choice made for one never constrains another.
    Input records are left untouched and the merged record has no provenance.
    """

    def __init__(self, chooser: Chooser | None = None, theme: PromptTheme | None = None) -> None:
        self.chooser = chooser or FirstChoiceChooser()
        self.theme = theme or PromptTheme()

    def merge(self, records: Iterable[MetadataRecord]) -> MetadataRecord:
        records = list(records)
        logger.debug("Merging %d metadata records", len(records))

        merged: Dict[str, Any] = {}
        for kind in MERGED_FIELDS:
            values = [getattr(record, kind.name) for record in records]
            merged[kind.name] = kind.merge(values, self.chooser, self.theme)
        return MetadataRecord(**merged)


def merge(records: Iterable[MetadataRecord], chooser: Chooser | None = None) -> MetadataRecord:
    """Merge *records* with a one-off :class:`Merger`."""
    return Merger(chooser).merge(records)


__all__ = ["ContributorsField", "DependenciesField", "Merger", "ScalarField", "merge"]
