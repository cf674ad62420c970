"""Name-to-file matching: key normalization, candidate index and resolution."""

from __future__ import annotations

from .contracts import MatchResult, MatchStatus, MatchTier, RunReport
from .index import CandidateIndex, build_candidate_index, list_candidate_files
from .normalize import (
    condense,
    file_extension,
    slugify,
    strip_extension,
    strip_leading_article,
)
from .resolve import resolve_record, resolve_records
from .variants import generate_name_variants

__all__ = [
    "CandidateIndex",
    "MatchResult",
    "MatchStatus",
    "MatchTier",
    "RunReport",
    "build_candidate_index",
    "condense",
    "file_extension",
    "generate_name_variants",
    "list_candidate_files",
    "resolve_record",
    "resolve_records",
    "slugify",
    "strip_extension",
    "strip_leading_article",
]
