"""Translate compendium export payloads into domain entities."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from imgmatch.domain.model import Collection, DocumentType, Record

if TYPE_CHECKING:
    from .schema import CompendiumExport, DocumentPayload

log = logging.getLogger(__name__)


class UnsupportedDocumentTypeError(ValueError):
    """Raised when an export names a document class we do not model."""


def parse_document_type(value: str) -> DocumentType:
    try:
        return DocumentType(value)
    except ValueError:
        pass
    for member in DocumentType:
        if member.value.lower() == value.lower():
            return member
    raise UnsupportedDocumentTypeError(f"Unsupported document type: {value}")


def translate_export(export: CompendiumExport) -> tuple[Collection, tuple[Record, ...]]:
    document_type = parse_document_type(export.document_name)
    collection = Collection(
        id=export.id,
        label=export.label or export.id,
        document_type=document_type,
        locked=export.locked,
    )
    records = tuple(
        _translate_document(payload, collection) for payload in export.documents
    )
    log.debug("Translated %s document(s) for %s", len(records), collection.id)
    return collection, records


def _translate_document(payload: DocumentPayload, collection: Collection) -> Record:
    # A document's own ``type`` is a system subtype such as "adversary", not its class.
    return Record(
        name=payload.name,
        document_type=collection.document_type,
        img=payload.img,
        system_slug=payload.system.slug,
        flag_slug=payload.flags.daggerheart.slug,
        collection_id=collection.id,
    )
