"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class DocumentType(StrEnum):
    """Document classes a record or collection can hold."""

    ACTOR = "Actor"
    ITEM = "Item"
    JOURNAL_ENTRY = "JournalEntry"
    ROLL_TABLE = "RollTable"
    MACRO = "Macro"
    SCENE = "Scene"
    PLAYLIST = "Playlist"
    CARDS = "Cards"
    ADVENTURE = "Adventure"


# Document types whose schema carries an ``img`` field.
IMAGE_DOCUMENT_TYPES: frozenset[DocumentType] = frozenset(
    {
        DocumentType.ACTOR,
        DocumentType.ITEM,
        DocumentType.ROLL_TABLE,
        DocumentType.MACRO,
        DocumentType.CARDS,
        DocumentType.ADVENTURE,
    }
)
