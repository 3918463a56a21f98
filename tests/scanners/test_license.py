"""Tests for the license scanner and classifier."""

from __future__ import annotations

from pathlib import Path

import pytest

from writeme.licenses import UNKNOWN_LICENSE, classify_license
from writeme.scanners.license import (
    LICENSE_FILENAMES,
    LicenseNotFoundError,
    find_license_file,
    scan_license,
)

MIT_TEXT = """\
MIT License

Copyright (c) 2021 Jane Doe

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction.

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.
"""

APACHE_TEXT = """\
                                 Apache License
                           Version 2.0, January 2004
                        http://www.apache.org/licenses/
"""


def test_license_txt_is_found_next_to_readme(repo_builder) -> None:
    repo_builder.write({"README.md": "# Demo\n", "LICENSE.txt": MIT_TEXT})

    record = scan_license(str(repo_builder.path()))

    assert record.license is not None
    assert record.license.kind == "MIT"
    assert record.license.year == "2021"
    assert record.license.holder == "Jane Doe"
    assert record.license.path == str(repo_builder.path() / "LICENSE.txt")
    assert record.source_config_file_path == str(repo_builder.path() / "LICENSE.txt")


@pytest.mark.parametrize("filename", ["LICENSE", "License.md", "COPYING", "copying.html", "NOTICE.json"])
def test_known_names_match_case_insensitively(repo_builder, filename: str) -> None:
    repo_builder.write({filename: APACHE_TEXT})

    record = scan_license(str(repo_builder.path()))

    assert record.license is not None
    assert record.license.kind == "Apache-2.0"


def test_missing_license_raises_not_found(repo_builder) -> None:
    repo_builder.write(
        {"README.md": "# Demo\n", "LICENSE.rst": MIT_TEXT, "docs/LICENSE": MIT_TEXT, "src/app.py": ""}
    )

    with pytest.raises(LicenseNotFoundError):
        scan_license(str(repo_builder.path()))


def test_not_found_is_a_file_not_found_error(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        scan_license(str(tmp_path))


def test_directories_are_ignored(repo_builder) -> None:
    (repo_builder.path() / "license").mkdir()

    assert find_license_file(str(repo_builder.path())) is None


def test_first_match_in_sorted_order_wins(repo_builder) -> None:
    repo_builder.write({"NOTICE": "Notice text\n", "COPYING": APACHE_TEXT, "LICENSE": MIT_TEXT})

    found = find_license_file(str(repo_builder.path()))

    assert found is not None
    assert found.name == "COPYING"


def test_candidate_list_covers_every_variant() -> None:
    assert len(LICENSE_FILENAMES) == 21
    assert "license" in LICENSE_FILENAMES
    assert "notice.yaml" in LICENSE_FILENAMES


@pytest.mark.parametrize(
    "text, expected",
    [
        ("SPDX-License-Identifier: BSD-3-Clause\n", "BSD-3-Clause"),
        (MIT_TEXT, "MIT"),
        (APACHE_TEXT, "Apache-2.0"),
        ("GNU GENERAL PUBLIC LICENSE\nVersion 3, 29 June 2007\n", "GPL-3.0"),
        ("GNU GENERAL PUBLIC LICENSE\nVersion 2, June 1991\n", "GPL-2.0"),
        ("GNU AFFERO GENERAL PUBLIC LICENSE\nVersion 3, 19 November 2007\n", "AGPL-3.0"),
        ("GNU LESSER GENERAL PUBLIC LICENSE\nVersion 2.1, February 1999\n", "LGPL-2.1"),
        ("Mozilla Public License Version 2.0\n", "MPL-2.0"),
        (
            "Redistribution and use in source and binary forms, with or without\n"
            "modification, are permitted.\n",
            "BSD-2-Clause",
        ),
        ("This is free and unencumbered software released into the public domain.\n", "Unlicense"),
        ("All rights reserved. Ask first.\n", UNKNOWN_LICENSE),
    ],
)
def test_classify_license(text: str, expected: str) -> None:
    assert classify_license(text).kind == expected


def test_classify_license_reads_year_ranges() -> None:
    license = classify_license("Copyright 2019-2023 Acme Corp.\n\nAll rights reserved.\n")

    assert license.year == "2019-2023"
    assert license.holder == "Acme Corp"
    assert license.kind == UNKNOWN_LICENSE


def test_classify_license_without_attribution() -> None:
    license = classify_license(APACHE_TEXT, path="LICENSE")

    assert license.year is None
    assert license.holder is None
    assert license.path == "LICENSE"
