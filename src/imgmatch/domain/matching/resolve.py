"""Tiered resolution of a record to at most one candidate path.

Tiers run in a fixed order and the first hit wins:

1. exact stem, using the raw name and then the name with its extension removed
2. slug of the name
3. condensed slug of the name
4. every generated name variant, each tried as a slug and then as a condensed slug

Resolution never mutates the record, so it is safe to repeat as a dry preview.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .contracts import MatchResult, MatchStatus, MatchTier
from .normalize import condense, slugify, strip_extension
from .variants import generate_name_variants

if TYPE_CHECKING:
    from collections.abc import Iterable

    from imgmatch.domain.model import Record

    from .index import CandidateIndex

log = logging.getLogger(__name__)


def resolve_record(record: Record, index: CandidateIndex) -> MatchResult:
    if not record.supports_image:
        return MatchResult(
            record_id=record.id,
            record_name=record.name,
            status=MatchStatus.SKIPPED_UNSUPPORTED,
        )

    hit = _lookup_primary_name(record.name, index)
    candidates: tuple[str, ...] = ()
    if hit is None:
        hit, candidates = _sweep_variants(record, index)

    if hit is None:
        log.debug("No match for %s; tried %s", record.name, ", ".join(candidates))
        return MatchResult(
            record_id=record.id,
            record_name=record.name,
            status=MatchStatus.NO_MATCH,
            candidates=candidates,
        )

    tier, path = hit
    status = MatchStatus.MATCHED_UNCHANGED if record.img == path else MatchStatus.MATCHED_NEW
    return MatchResult(
        record_id=record.id,
        record_name=record.name,
        status=status,
        path=path,
        tier=tier,
    )


def resolve_records(records: Iterable[Record], index: CandidateIndex) -> tuple[MatchResult, ...]:
    return tuple(resolve_record(record, index) for record in records)


def _lookup_primary_name(name: str, index: CandidateIndex) -> tuple[MatchTier, str] | None:
    path = index.by_exact_stem.get(name) or index.by_exact_stem.get(strip_extension(name))
    if path is not None:
        return MatchTier.EXACT, path

    slug = slugify(name)
    path = index.by_slug.get(slug)
    if path is not None:
        return MatchTier.SLUG, path

    path = index.by_condensed_slug.get(condense(slug))
    if path is not None:
        return MatchTier.CONDENSED, path
    return None


def _sweep_variants(
    record: Record,
    index: CandidateIndex,
) -> tuple[tuple[MatchTier, str] | None, tuple[str, ...]]:
    """Try generated keys in order; on a miss also return every key tried."""

    tried: list[str] = []
    for key in generate_name_variants(record):
        tried.append(key)
        path = index.by_slug.get(key) or index.by_condensed_slug.get(key)
        if path is not None:
            return (MatchTier.VARIANT, path), tuple(tried)
    return None, tuple(tried)
