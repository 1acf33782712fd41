"""Slug generation for output paths and taxonomy anchors."""

from __future__ import annotations

import re
import unicodedata

MAX_SLUG_LENGTH = 80

_WORD_RE = re.compile(r"[a-z0-9]+")


def _ascii_words(text: str) -> list[str]:
    folded = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _WORD_RE.findall(folded.lower())


def generate_slug(text: str, fallback: str = "untitled", max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a file name, title or taxonomy name.

    Accented letters are folded to ASCII, every other run of non-alphanumeric
    characters becomes a single hyphen. Whole words are kept while they fit in
    ``max_length``; a first word longer than that is cut. Text with no usable
    characters yields ``fallback``.
    """
    words = _ascii_words(text)
    if not words:
        return fallback

    kept: list[str] = []
    length = 0
    for word in words:
        extra = len(word) + (1 if kept else 0)
        if length + extra > max_length:
            break
        kept.append(word)
        length += extra

    if not kept:
        return words[0][:max_length]
    return "-".join(kept)
