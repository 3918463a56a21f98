"""Tests for writeme.merger."""

from __future__ import annotations

from writeme.merger import ContributorsField, Merger, merge
from writeme.models import Contributor, Dependency, License, MetadataRecord, Repository
from writeme.prompting import FirstChoiceChooser


def test_absent_everywhere_stays_absent(chooser) -> None:
    merged = Merger(chooser).merge([MetadataRecord(), MetadataRecord(source_config_file_path="a")])

    assert merged == MetadataRecord()
    assert chooser.prompts == []


def test_single_value_is_used_without_prompt(chooser) -> None:
    records = [
        MetadataRecord(name="A", source_config_file_path="package.json"),
        MetadataRecord(version="1.0.0", source_config_file_path="Cargo.toml"),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.name == "A"
    assert merged.version == "1.0.0"
    assert chooser.prompts == []


def test_fields_are_resolved_independently(chooser) -> None:
    records = [
        MetadataRecord(name="A"),
        MetadataRecord(name=None, description="d1"),
        MetadataRecord(description="d2"),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.name == "A"
    assert merged.description == "d1"
    assert chooser.fields() == ["description"]
    assert chooser.prompts[0][1] == ["d1", "d2"]


def test_user_selection_is_applied_per_field(chooser) -> None:
    chooser.answers = {"name": 1, "description": 0}
    records = [
        MetadataRecord(name="from-npm", description="npm description"),
        MetadataRecord(name="from-cargo", description="cargo description"),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.name == "from-cargo"
    assert merged.description == "npm description"


def test_duplicates_still_prompt_with_deduplicated_options(chooser) -> None:
    records = [MetadataRecord(version="1.0"), MetadataRecord(version="2.0"), MetadataRecord(version="1.0")]

    merged = Merger(chooser).merge(records)

    assert merged.version == "1.0"
    assert chooser.prompts[0][1] == ["1.0", "2.0"]

    chooser.prompts.clear()
    Merger(chooser).merge([MetadataRecord(name="same"), MetadataRecord(name="same")])
    assert chooser.prompts[0][1] == ["same"]


def test_failed_selection_defaults_to_first_candidate() -> None:
    class BrokenChooser:
        def choose(self, label, options):  # type: ignore[no-untyped-def]
            raise RuntimeError("no terminal")

    class OutOfRangeChooser:
        def choose(self, label, options):  # type: ignore[no-untyped-def]
            return 7

    records = [MetadataRecord(name="first"), MetadataRecord(name="second")]

    assert Merger(BrokenChooser()).merge(records).name == "first"
    assert Merger(OutOfRangeChooser()).merge(records).name == "first"


def test_contributor_lists_prompt_as_a_whole(chooser) -> None:
    alice, bob = Contributor("Alice", "a@x"), Contributor("Bob", "b@x")
    chooser.answers = {"contributors": 1}
    records = [
        MetadataRecord(contributors=[alice]),
        MetadataRecord(contributors=[bob, alice]),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.contributors == [bob, alice]
    assert chooser.prompts[0][1] == ["Alice <a@x>", "Bob <b@x>, Alice <a@x>"]


def test_dependencies_are_combined_without_prompt(chooser) -> None:
    records = [
        MetadataRecord(dependencies=[Dependency("react", "^18"), Dependency("vite")]),
        MetadataRecord(dependencies=[Dependency("react", "^17"), Dependency("express")]),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.dependencies == [Dependency("react", "^18"), Dependency("vite"), Dependency("express")]
    assert chooser.prompts == []


def test_repository_and_license_conflicts_prompt(chooser) -> None:
    chooser.answers = {"license": 1}
    records = [
        MetadataRecord(
            repository=Repository.from_url("https://gitlab.com/acme/widget.git"),
            license=License(kind="MIT"),
        ),
        MetadataRecord(license=License(kind="Apache-2.0", path="LICENSE")),
    ]

    merged = Merger(chooser).merge(records)

    assert merged.repository is not None
    assert merged.repository.name == "widget"
    assert merged.license == License(kind="Apache-2.0", path="LICENSE")
    assert chooser.fields() == ["license"]


def test_provenance_is_preserved_on_inputs_and_absent_on_output() -> None:
    records = [
        MetadataRecord(name="a", source_config_file_path="package.json"),
        MetadataRecord(name="b", source_config_file_path="/repo/.git"),
    ]

    merged = merge(records, FirstChoiceChooser())

    assert merged.source_config_file_path is None
    assert [record.source_config_file_path for record in records] == ["package.json", "/repo/.git"]
    assert [record.name for record in records] == ["a", "b"]


def test_merge_is_idempotent(chooser) -> None:
    records = [
        MetadataRecord(name="A", description="d", contributors=[Contributor("Alice", "a@x")]),
        MetadataRecord(version="1.2.3", dependencies=[Dependency("numpy")], source_config_file_path="x"),
    ]

    once = Merger(chooser).merge(records)
    twice = Merger(chooser).merge([once])

    assert twice == once
    assert chooser.prompts == []


def test_contributors_display() -> None:
    assert ContributorsField.display([]) == "(none)"
    assert ContributorsField.display([Contributor("Alice", None)]) == "Alice"
