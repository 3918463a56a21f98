"""Project file walker producing the path list the scanners match against."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from .config import WriteMeConfig, load_config
from .logging import get_logger

logger = get_logger("repo_scanner")

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".venv",
    "venv",
    "node_modules",
    "target",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".idea",
    ".vscode",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}


@dataclass(frozen=True)
class IgnoreRule:
    """One pattern from .gitignore or the ``exclude_paths`` setting."""

    pattern: str
    directory_only: bool
    anchored: bool
    negate: bool

    @classmethod
    def parse(cls, line: str) -> Optional["IgnoreRule"]:
        pattern = line.strip()
        negate = pattern.startswith("!")
        if negate:
            pattern = pattern[1:]
        directory_only = pattern.endswith("/")
        pattern = pattern.rstrip("/")
        anchored = pattern.startswith("/") or "/" in pattern
        pattern = pattern.lstrip("/")
        if not pattern:
            return None
        return cls(pattern=pattern, directory_only=directory_only, anchored=anchored, negate=negate)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.anchored:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _read_gitignore(path: Path) -> List[IgnoreRule]:
    if not path.is_file():
        return []
    rules: List[IgnoreRule] = []
    for raw_line in path.read_text(encoding="utf-8", errors="replace").splitlines():
        if not raw_line.strip() or raw_line.lstrip().startswith("#"):
            continue
        rule = IgnoreRule.parse(raw_line)
        if rule is not None:
            rules.append(rule)
    return rules


def _is_ignored(rel_path: str, is_dir: bool, rules: Sequence[IgnoreRule]) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(rel_path, is_dir):
            ignored = not rule.negate
    return ignored


class RepoScanner:
    """Walks a project and returns POSIX paths relative to its root."""

    def __init__(self, config: WriteMeConfig | None = None) -> None:
        self._config = config

    def scan(self, root: str) -> List[str]:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        config = self._config or load_config(root_path)
        rules = _read_gitignore(root_path / ".gitignore")
        rules.extend(
            rule for rule in map(IgnoreRule.parse, config.exclude_paths) if rule is not None
        )

        paths = list(self._walk(root_path, rules))
        logger.debug("Found %d files under %s", len(paths), root_path)
        return paths

    @staticmethod
    def _walk(root: Path, rules: Sequence[IgnoreRule]) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            rel_dir = "" if current == root else current.relative_to(root).as_posix()

            kept = []
            for name in sorted(dirnames):
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if name in _EXCLUDED_DIRS or _is_ignored(rel_path, True, rules):
                    continue
                kept.append(name)
            dirnames[:] = kept

            for filename in sorted(filenames):
                if filename in _EXCLUDED_FILES:
                    continue
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if _is_ignored(rel_path, False, rules):
                    continue
                yield rel_path


__all__ = ["IgnoreRule", "RepoScanner"]
