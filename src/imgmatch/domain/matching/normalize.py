"""Comparable keys derived from free-form names and filenames.

All functions are pure and total: ``None`` or empty input yields an empty string.
"""

from __future__ import annotations

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_APOSTROPHES = re.compile(r"['’]")
_EXTENSION = re.compile(r"\.[^.]+\Z")
_LEADING_ARTICLE = re.compile(r"^(?:the|an?)\s+", re.IGNORECASE)


def slugify(name: str | None) -> str:
    """Lower-case, accent-stripped, punctuation-collapsed-to-hyphen form of ``name``.

    >>> slugify("Déjà Vu & Friends' Lair")
    'deja-vu-and-friends-lair'
    """

    if not name:
        return ""
    text = unicodedata.normalize("NFKD", name.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.replace("&", " and ")
    text = _APOSTROPHES.sub("", text)
    text = _NON_ALNUM.sub("-", text)
    return text.strip("-")


def condense(slug: str | None) -> str:
    """Drop every hyphen from an already slugified string."""

    return (slug or "").replace("-", "")


def strip_extension(filename: str | None) -> str:
    """Remove the final ``.suffix``; names without one are returned unchanged."""

    if not filename:
        return ""
    return _EXTENSION.sub("", filename)


def strip_leading_article(name: str | None) -> str:
    """Remove a single leading "the", "a" or "an" followed by whitespace."""

    if not name:
        return ""
    return _LEADING_ARTICLE.sub("", name, count=1)


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def file_extension(path: str) -> str:
    """Lower-cased text after the final dot of the basename, or ``""``."""

    name = basename(path)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[-1].lower()
