"""Public domain model surface."""

from __future__ import annotations

from imgmatch.domain.model.enums import IMAGE_DOCUMENT_TYPES, DocumentType
from imgmatch.domain.model.record import Collection, Folder, Record

__all__ = [
    "IMAGE_DOCUMENT_TYPES",
    "Collection",
    "DocumentType",
    "Folder",
    "Record",
]
