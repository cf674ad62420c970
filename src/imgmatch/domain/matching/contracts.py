"""Result types shared by the resolver, the orchestrator and report rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID


class MatchStatus(StrEnum):
    MATCHED_NEW = "matched-new"
    MATCHED_UNCHANGED = "matched-unchanged"
    NO_MATCH = "no-match"
    SKIPPED_UNSUPPORTED = "skipped-unsupported"


class MatchTier(StrEnum):
    """Lookup strategy that produced a match, in priority order."""

    EXACT = "exact"
    SLUG = "slug"
    CONDENSED = "condensed"
    VARIANT = "variant"


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchResult:
    record_id: UUID
    record_name: str
    status: MatchStatus
    path: str | None = None
    tier: MatchTier | None = None
    candidates: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        matched = self.status in (MatchStatus.MATCHED_NEW, MatchStatus.MATCHED_UNCHANGED)
        if matched != (self.path is not None):
            raise ValueError(f"Match status {self.status} inconsistent with path {self.path!r}")

    @property
    def needs_update(self) -> bool:
        return self.status is MatchStatus.MATCHED_NEW


@dataclass(slots=True, kw_only=True)
class RunReport:
    """Outcome of one replacement run; built fresh per invocation."""

    collection_id: str
    folder: str
    dry_run: bool
    import_first: bool = False
    results: list[MatchResult] = field(default_factory=list[MatchResult])
    updated: int = 0
    failed: int = 0

    @property
    def scanned(self) -> int:
        return len(self.results)

    @property
    def matched(self) -> int:
        """Records resolved to a path different from their current image."""
        return self._count(MatchStatus.MATCHED_NEW)

    @property
    def unchanged(self) -> int:
        return self._count(MatchStatus.MATCHED_UNCHANGED)

    @property
    def no_match(self) -> int:
        return self._count(MatchStatus.NO_MATCH)

    @property
    def skipped(self) -> int:
        return self._count(MatchStatus.SKIPPED_UNSUPPORTED)

    def _count(self, status: MatchStatus) -> int:
        return sum(1 for result in self.results if result.status is status)
