"""Core data models shared across writeme components."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple
from urllib.parse import urlparse


@dataclass(frozen=True)
class PatternEntry:
    """Registry entry describing how one technology is detected."""

    technology_name: str
    config_file_patterns: Tuple[str, ...] = ()
    dependency_name_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Dependency:
    """A dependency declared by a project config file."""

    name: str
    version: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} {self.version}" if self.version else self.name


@dataclass(frozen=True)
class Contributor:
    """A commit author. Identity is the exact ``(name, email)`` pair."""

    name: Optional[str]
    email: Optional[str]
    url: Optional[str] = field(default=None, compare=False)

    def __str__(self) -> str:
        if self.name and self.email:
            return f"{self.name} <{self.email}>"
        return self.name or self.email or ""


ContributorList = List[Contributor]


class Platform(str, Enum):
    """Known code hosting platforms."""

    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    UNKNOWN = "unknown"

    @classmethod
    def from_host(cls, host: Optional[str]) -> "Platform":
        if not host:
            return cls.UNKNOWN
        host = host.lower()
        for platform, domain in _PLATFORM_DOMAINS:
            if host == domain or host.endswith(f".{domain}"):
                return platform
        return cls.UNKNOWN


_PLATFORM_DOMAINS: Tuple[Tuple[Platform, str], ...] = (
    (Platform.GITHUB, "github.com"),
    (Platform.GITLAB, "gitlab.com"),
    (Platform.BITBUCKET, "bitbucket.org"),
)

# git@host:owner/name.git
_SCP_REMOTE = re.compile(r"^(?:[\w.\-]+@)?(?P<host>[\w.\-]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class Repository:
    """Remote repository inferred from a URL."""

    url: str
    platform: Platform = Platform.UNKNOWN
    name: Optional[str] = None

    @classmethod
    def from_url(cls, url: str) -> "Repository":
        url = url.strip()
        host: Optional[str] = None
        path = ""
        if "://" in url:
            parsed = urlparse(url)
            host = parsed.hostname
            path = parsed.path
        else:
            match = _SCP_REMOTE.match(url)
            if match:
                host = match.group("host")
                path = match.group("path")
            else:
                path = url

        segments = [segment for segment in path.replace("\\", "/").split("/") if segment]
        name = segments[-1] if segments else None
        if name and name.endswith(".git"):
            name = name[: -len(".git")] or None

        return cls(url=url, platform=Platform.from_host(host), name=name)

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class License:
    """A classified license file or declaration."""

    kind: str
    path: Optional[str] = None
    year: Optional[str] = None
    holder: Optional[str] = None

    def __str__(self) -> str:
        if self.holder and self.year:
            return f"{self.kind} (c) {self.year} {self.holder}"
        if self.holder:
            return f"{self.kind} (c) {self.holder}"
        return self.kind


@dataclass
class MetadataRecord:
    """Partial (or merged) project metadata. ``None`` means "no opinion"."""

    name: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    contributors: Optional[ContributorList] = None
    repository: Optional[Repository] = None
    license: Optional[License] = None
    dependencies: Optional[List[Dependency]] = None
    source_config_file_path: Optional[str] = None

    def is_empty(self) -> bool:
        return not any(
            (
                self.name,
                self.description,
                self.version,
                self.contributors,
                self.repository,
                self.license,
                self.dependencies,
            )
        )


__all__ = [
    "Contributor",
    "ContributorList",
    "Dependency",
    "License",
    "MetadataRecord",
    "PatternEntry",
    "Platform",
    "Repository",
]
