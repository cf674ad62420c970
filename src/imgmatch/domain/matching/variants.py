"""Alternate lookup keys for a record, widening recall past its primary name."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .normalize import condense, slugify, strip_leading_article

if TYPE_CHECKING:
    from collections.abc import Iterator

    from imgmatch.domain.model import Record


def generate_name_variants(record: Record) -> Iterator[str]:
    """Yield slug and condensed-slug keys for the record's names, without repeats.

    Names are the primary name followed by each present alias; each name is also
    tried with its leading article removed. The generator is single pass.
    """

    names = dict.fromkeys(name for name in (record.name, *record.aliases()) if name)
    forms: dict[str, None] = {}
    for name in names:
        forms.setdefault(name)
        forms.setdefault(strip_leading_article(name))

    seen: set[str] = set()
    for form in forms:
        slug = slugify(form)
        for key in (slug, condense(slug)):
            if key and key not in seen:
                seen.add(key)
                yield key
