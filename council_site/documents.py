"""
Logical documents published by the site and where they live in storage.
"""

from __future__ import annotations

import time
from typing import Optional

DOCUMENTS: dict[str, str] = {
    "handbook": "student-handbook.pdf",
    "constitution": "src-constitution.pdf",
}

# Filename rule for uploads: first matching entry wins.
UPLOAD_NAME_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("handbook", "student"), "handbook"),
    (("constitution", "src"), "constitution"),
)


def object_path(doc: str, prefix: str = "") -> Optional[str]:
    """Storage key for a logical document name, or None if it is unknown."""
    filename = DOCUMENTS.get(doc.lower())
    if filename is None:
        return None
    prefix = prefix.strip("/")
    return f"{prefix}/{filename}" if prefix else filename


def classify_upload(filename: str) -> Optional[str]:
    lowered = (filename or "").lower()
    for needles, doc in UPLOAD_NAME_RULES:
        if any(needle in lowered for needle in needles):
            return doc
    return None


def cache_bust_token() -> str:
    return str(int(time.time() * 1000))


def versioned_url(url: str, version: str) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}v={version}"
