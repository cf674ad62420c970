"""Public interface for the compendium export adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .schema import CompendiumExport, DocumentPayload
from .translator import UnsupportedDocumentTypeError, parse_document_type, translate_export

if TYPE_CHECKING:
    from pathlib import Path

    from imgmatch.domain.model import Collection, Record


def load_compendium_export(path: Path) -> tuple[Collection, tuple[Record, ...]]:
    """Read and validate an export file, returning its collection and records."""

    export = CompendiumExport.model_validate_json(path.read_text(encoding="utf-8"))
    return translate_export(export)


__all__ = [
    "CompendiumExport",
    "DocumentPayload",
    "UnsupportedDocumentTypeError",
    "load_compendium_export",
    "parse_document_type",
    "translate_export",
]
