"""Helpers for building throwaway projects and scripted choosers in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Dict, List, Mapping, Sequence, Tuple

from writeme.repo_scanner import RepoScanner


class RepoBuilder:
    """Writes files into a temporary project and lists it like the CLI would."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")

    def paths(self) -> List[str]:
        """Return the project's relative file paths."""
        return RepoScanner().scan(str(self.root))

    def path(self) -> Path:
        return self.root


class RecordingChooser:
    """Scripted chooser: answers from `answers` keyed by field label fragment."""

    def __init__(self, answers: Dict[str, int] | None = None) -> None:
        self.answers = dict(answers or {})
        self.prompts: List[Tuple[str, List[str]]] = []

    def choose(self, label: str, options: Sequence[str]) -> int:
        self.prompts.append((label, list(options)))
        for fragment, index in self.answers.items():
            if f"[{fragment}]" in label:
                return index
        return 0

    def fields(self) -> List[str]:
        """Field names that were prompted for, in order."""
        return [label.split("]", 1)[0].lstrip("[") for label, _ in self.prompts]


__all__ = ["RecordingChooser", "RepoBuilder"]
