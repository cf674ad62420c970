from __future__ import annotations

from dataclasses import replace

import pytest

from imgmatch.domain.matching import (
    CandidateIndex,
    MatchResult,
    MatchStatus,
    MatchTier,
    resolve_record,
    resolve_records,
)
from imgmatch.domain.model import DocumentType
from tests.helpers.records import make_record

EXTENSIONS = ("webp", "png", "jpg", "jpeg")


def _index(*paths: str) -> CandidateIndex:
    return CandidateIndex.from_paths(paths, EXTENSIONS)


def test_slug_tier_match() -> None:
    result = resolve_record(make_record("Goblin Warrior"), _index("art/goblin-warrior.webp"))

    assert result.status is MatchStatus.MATCHED_NEW
    assert result.tier is MatchTier.SLUG
    assert result.path == "art/goblin-warrior.webp"


def test_condensed_tier_match() -> None:
    result = resolve_record(make_record("The Witch"), _index("art/thewitch.png"))

    assert result.status is MatchStatus.MATCHED_NEW
    assert result.tier is MatchTier.CONDENSED
    assert result.path == "art/thewitch.png"


def test_no_match_reports_tried_keys() -> None:
    result = resolve_record(make_record("Unknown Beast"), _index("art/goblin.png"))

    assert result.status is MatchStatus.NO_MATCH
    assert result.path is None
    assert result.tier is None
    assert "unknown-beast" in result.candidates
    assert "unknownbeast" in result.candidates


def test_already_set_image_is_unchanged() -> None:
    record = make_record("Goblin", img="art/Goblin.png")

    result = resolve_record(record, _index("art/Goblin.png"))

    assert result.status is MatchStatus.MATCHED_UNCHANGED
    assert result.path == "art/Goblin.png"
    assert not result.needs_update


def test_exact_stem_wins_over_slug() -> None:
    index = _index("a/goblin-warrior.png", "b/Goblin Warrior.webp")

    result = resolve_record(make_record("Goblin Warrior"), index)

    assert result.tier is MatchTier.EXACT
    assert result.path == "b/Goblin Warrior.webp"


def test_exact_stem_tries_name_without_extension() -> None:
    result = resolve_record(make_record("Map.old"), _index("maps/Map.png"))

    assert result.tier is MatchTier.EXACT
    assert result.path == "maps/Map.png"


def test_article_variant_match() -> None:
    result = resolve_record(make_record("The Acid Burrower"), _index("art/acid_burrower.webp"))

    assert result.status is MatchStatus.MATCHED_NEW
    assert result.tier is MatchTier.VARIANT
    assert result.path == "art/acid_burrower.webp"


def test_alias_variant_match() -> None:
    record = make_record("Sir Reginald", system_slug="knight-errant")

    result = resolve_record(record, _index("art/knighterrant.png"))

    assert result.tier is MatchTier.VARIANT
    assert result.path == "art/knighterrant.png"


def test_unsupported_document_type_is_skipped() -> None:
    record = make_record("Goblin", document_type=DocumentType.JOURNAL_ENTRY)

    result = resolve_record(record, _index("art/goblin.png"))

    assert result.status is MatchStatus.SKIPPED_UNSUPPORTED
    assert result.path is None


def test_punctuation_only_name_matches_punctuation_only_stem() -> None:
    result = resolve_record(make_record("!!!"), _index("art/---.png"))

    assert result.status is MatchStatus.MATCHED_NEW
    assert result.tier is MatchTier.SLUG
    assert result.path == "art/---.png"


def test_punctuation_only_name_without_such_stem_has_no_candidates() -> None:
    result = resolve_record(make_record("!!!"), _index("art/goblin.png"))

    assert result.status is MatchStatus.NO_MATCH
    assert result.candidates == ()


def test_resolution_does_not_mutate_and_is_repeatable() -> None:
    record = make_record("Goblin Warrior", img="old.png")
    before = replace(record)
    index = _index("art/goblin-warrior.webp")

    first = resolve_records([record], index)
    second = resolve_records([record], index)

    assert first == second
    assert record.img == before.img
    assert record.name == before.name


def test_match_result_rejects_inconsistent_path() -> None:
    record = make_record("Goblin")

    with pytest.raises(ValueError, match="inconsistent"):
        MatchResult(
            record_id=record.id,
            record_name=record.name,
            status=MatchStatus.MATCHED_NEW,
        )
    with pytest.raises(ValueError, match="inconsistent"):
        MatchResult(
            record_id=record.id,
            record_name=record.name,
            status=MatchStatus.NO_MATCH,
            path="goblin.png",
        )


@pytest.mark.parametrize(
    ("name", "stem"),
    [
        ("Goblin Warrior", "goblin-warrior"),
        ("Déjà Vu", "Deja_Vu"),
        ("Salt & Pepper", "salt and pepper"),
        ("The Witch", "TheWitch"),
        ("!!!", "---"),
        ("?", "_"),
    ],
)
def test_slug_equal_stem_resolves_by_condensed_tier_at_latest(name: str, stem: str) -> None:
    result = resolve_record(make_record(name), _index(f"art/{stem}.png"))

    assert result.tier in {MatchTier.EXACT, MatchTier.SLUG, MatchTier.CONDENSED}
    assert result.path == f"art/{stem}.png"
