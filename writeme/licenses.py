"""License text classification.

Detection order:
1. ``SPDX-License-Identifier`` header.
2. Anchor phrases from the canonical license texts.

The first ``Copyright`` line supplies the year and holder.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from .models import License

UNKNOWN_LICENSE = "Unknown"

MAX_LICENSE_CHARS = 128 * 1024

SPDX_HEADER_RE = re.compile(r"SPDX-License-Identifier:\s*([A-Za-z0-9.+\-]+)", re.IGNORECASE)

COPYRIGHT_RE = re.compile(
    r"^\s*copyright\s*(?:\(c\)|©)?\s*(?P<year>\d{4}(?:\s*[-,]\s*\d{4})*)?[\s,]*(?P<holder>[^\n]*)$",
    re.IGNORECASE | re.MULTILINE,
)

# Order matters: more specific texts before the ones they contain.
_ANCHORS: Sequence[Tuple[str, Sequence[str]]] = (
    ("AGPL-3.0", ("gnu affero general public license",)),
    ("LGPL-3.0", ("gnu lesser general public license", "version 3")),
    ("LGPL-2.1", ("gnu lesser general public license", "version 2.1")),
    ("GPL-3.0", ("gnu general public license", "version 3")),
    ("GPL-2.0", ("gnu general public license", "version 2")),
    ("Apache-2.0", ("apache license", "version 2.0")),
    ("MPL-2.0", ("mozilla public license", "2.0")),
    ("BSD-3-Clause", ("redistribution and use in source and binary forms", "neither the name")),
    ("BSD-2-Clause", ("redistribution and use in source and binary forms",)),
    ("MIT", ("permission is hereby granted, free of charge",)),
    ("ISC", ("permission to use, copy, modify, and/or distribute this software",)),
    ("Unlicense", ("this is free and unencumbered software released into the public domain",)),
    ("CC0-1.0", ("cc0 1.0 universal",)),
)


def classify_license(text: str, path: Optional[str] = None) -> License:
    """Return the :class:`License` described by *text*."""
    text = text[:MAX_LICENSE_CHARS]
    year, holder = _copyright(text)
    return License(kind=_identify(text), path=path, year=year, holder=holder)


def _identify(text: str) -> str:
    header = SPDX_HEADER_RE.search(text)
    if header:
        return header.group(1)

    haystack = " ".join(text.lower().split())
    for spdx_id, phrases in _ANCHORS:
        if all(phrase in haystack for phrase in phrases):
            return spdx_id
    return UNKNOWN_LICENSE


def _copyright(text: str) -> Tuple[Optional[str], Optional[str]]:
    for match in COPYRIGHT_RE.finditer(text):
        year = match.group("year")
        holder = match.group("holder").strip().rstrip(".") or None
        if holder and holder.lower().startswith(("notice", "holders", "owner")):
            # "copyright notice ..." in the license body, not an attribution
            continue
        if year or holder:
            return (re.sub(r"\s+", "", year) if year else None), holder
    return None, None


__all__ = ["UNKNOWN_LICENSE", "classify_license"]
