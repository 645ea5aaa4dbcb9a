"""Title matching shared by storage, wiki-link resolution and rendering.

Two titles refer to the same article when their keys are equal: trimmed of
leading/trailing whitespace and case folded. Inner whitespace is significant.
"""

from __future__ import annotations


def normalize_title(title: str | None) -> str:
    if not title:
        return ""
    return title.strip().casefold()
