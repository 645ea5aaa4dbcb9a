from __future__ import annotations

import re


def slugify(name: str) -> str:
    """Lookup key for a tag label: case-folded, word runs joined by ``-``.

    Unicode letters and the symbols that distinguish names like ``C++`` or
    ``C#`` are kept; labels with nothing left fall back to the folded label.
    """
    folded = clean_label(name).casefold()
    slug = re.sub(r"[^\w+#.&]+", "-", folded).strip("-")
    return slug or folded


def clean_label(label: str) -> str:
    return " ".join(label.strip().split())
