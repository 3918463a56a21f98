"""Git history scanner: remote repository details and ranked contributors."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, Sequence, Tuple

from ..config import DEFAULT_AUTHORITATIVE_PLATFORMS as _DEFAULT_PLATFORM_NAMES
from ..logging import get_logger
from ..models import Contributor, ContributorList, MetadataRecord, Platform, Repository

logger = get_logger("scanners.history")

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = "--format=%an%x1f%ae%x1e"

DEFAULT_AUTHORITATIVE_PLATFORMS: Tuple[Platform, ...] = tuple(
    Platform(name) for name in _DEFAULT_PLATFORM_NAMES
)

GitRunner = Callable[..., str]


class AuthorFieldMissing(ValueError):
    """A commit has no author name or email."""


class HistoryScanner:
    """Builds a metadata record from the project's git store.

    Every git failure degrades to a warning and the record gathered so far;
    nothing raised here reaches the caller.
    """

    def __init__(
        self,
        runner: GitRunner | None = None,
        *,
        authoritative_platforms: Iterable[Platform] = DEFAULT_AUTHORITATIVE_PLATFORMS,
    ) -> None:
        self._runner = runner or self._default_runner
        self.authoritative_platforms = frozenset(authoritative_platforms)

    def scan(self, project_location: str) -> MetadataRecord:
        repo = Path(project_location)
        record = MetadataRecord(source_config_file_path=str(repo / ".git"))

        if not (repo / ".git").exists():
            logger.warning("Failed to open repository: %s is not a git repository", repo)
            return record
        try:
            self._git(["rev-parse", "--git-dir"], repo)
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.warning("Failed to open repository: %s", _describe(exc))
            return record

        try:
            url = self._git(["remote", "get-url", "origin"], repo).strip()
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.warning("Failed to read the origin remote: %s", _describe(exc))
            return record
        if not url:
            logger.warning("Failed to read the origin remote: empty URL")
            return record

        try:
            repository = Repository.from_url(url)
        except ValueError as exc:
            logger.warning("Failed to read the origin remote: %s", exc)
            return record
        record.repository = repository
        record.name = repository.name

        if repository.platform in self.authoritative_platforms:
            logger.debug(
                "Skipping history walk; %s metadata is authoritative", repository.platform.value
            )
            return record

        try:
            head = self._git(["rev-parse", "--verify", "HEAD"], repo).strip()
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.warning("Failed to get repository head: %s", _describe(exc))
            return record

        try:
            output = self._git(["log", _LOG_FORMAT, head], repo)
        except (subprocess.CalledProcessError, OSError) as exc:
            logger.warning("Failed to walk commit history: %s", _describe(exc))
            return record

        counts: Dict[Contributor, int] = {}
        try:
            for contributor in _iter_authors(output):
                counts[contributor] = counts.get(contributor, 0) + 1
        except AuthorFieldMissing as exc:
            logger.warning("Stopped walking commit history: %s", exc)

        record.contributors = rank_contributors(counts)
        return record

    # ------------------------------------------------------------------
    # Internals

    def _git(self, args: Sequence[str], repo: Path) -> str:
        return self._runner(["git", *args], cwd=repo, capture_output=True)

    @staticmethod
    def _default_runner(
        args: Iterable[str],
        *,
        cwd: Path,
        capture_output: bool = False,
    ) -> str:
        completed = subprocess.run(
            list(args),
            cwd=str(cwd),
            check=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            capture_output=capture_output,
        )
        return completed.stdout if capture_output else ""


def scan_history(project_location: str) -> MetadataRecord:
    """Scan *project_location* with a default :class:`HistoryScanner`."""
    return HistoryScanner().scan(project_location)


def rank_contributors(counts: Dict[Contributor, int]) -> ContributorList:
    """Order contributors by commit count, keeping first-seen order on ties."""
    # sorted() is stable and dicts keep insertion order.
    return [contributor for contributor, _ in sorted(counts.items(), key=lambda item: -item[1])]


def _iter_authors(output: str) -> Iterator[Contributor]:
    for position, raw in enumerate(output.split(_RECORD_SEP)):
        entry = raw.strip("\r\n")
        if not entry.strip():
            continue
        name, _, email = entry.partition(_FIELD_SEP)
        if not name or not email:
            missing = "name" if not name else "email"
            raise AuthorFieldMissing(f"commit #{position + 1} has no author {missing}")
        yield Contributor(name=name, email=email)


def _describe(exc: BaseException) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = exc.stderr.strip() if isinstance(exc.stderr, str) else ""
        return stderr or f"git exited with status {exc.returncode}"
    return str(exc)


__all__ = [
    "AuthorFieldMissing",
    "HistoryScanner",
    "rank_contributors",
    "scan_history",
]
