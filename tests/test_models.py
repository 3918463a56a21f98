"""Tests for writeme.models."""

from __future__ import annotations

import pytest

from writeme.models import Contributor, Dependency, License, MetadataRecord, Platform, Repository


@pytest.mark.parametrize(
    "url, platform, name",
    [
        ("https://github.com/acme/widget.git", Platform.GITHUB, "widget"),
        ("https://github.com/acme/widget", Platform.GITHUB, "widget"),
        ("git@github.com:acme/widget.git", Platform.GITHUB, "widget"),
        ("ssh://git@gitlab.com/group/sub/widget.git", Platform.GITLAB, "widget"),
        ("https://bitbucket.org/acme/widget.git/", Platform.BITBUCKET, "widget"),
        ("https://git.example.com/acme/widget.git", Platform.UNKNOWN, "widget"),
        ("/srv/git/widget.git", Platform.UNKNOWN, "widget"),
        ("git+https://github.com/acme/widget.git", Platform.GITHUB, "widget"),
    ],
)
def test_repository_from_url(url: str, platform: Platform, name: str) -> None:
    repository = Repository.from_url(url)

    assert repository.platform is platform
    assert repository.name == name
    assert repository.url == url


def test_platform_from_host() -> None:
    assert Platform.from_host("GitHub.com") is Platform.GITHUB
    assert Platform.from_host("gitlab.example.org") is Platform.UNKNOWN
    assert Platform.from_host(None) is Platform.UNKNOWN


def test_contributor_identity_ignores_url() -> None:
    first = Contributor("Alice", "a@x", url="https://alice.dev")
    second = Contributor("Alice", "a@x")

    assert first == second
    assert hash(first) == hash(second)
    assert Contributor("alice", "a@x") != second
    assert str(second) == "Alice <a@x>"


def test_display_strings() -> None:
    assert str(Dependency("react", "^18")) == "react ^18"
    assert str(Dependency("react")) == "react"
    assert str(License("MIT", year="2020", holder="Jane")) == "MIT (c) 2020 Jane"
    assert str(License("MIT")) == "MIT"


def test_metadata_record_is_empty() -> None:
    assert MetadataRecord(source_config_file_path="x").is_empty()
    assert not MetadataRecord(version="1").is_empty()
