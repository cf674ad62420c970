"""Ports for reading and updating records in the record store."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from imgmatch.domain.model import Collection, Folder, Record

if TYPE_CHECKING:
    from collections.abc import Sequence

    from imgmatch.domain.model import DocumentType


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class RecordRepository(Repository[Record], Protocol):
    """Persistence contract for records."""

    def fetch_all(self, collection_id: str) -> Sequence[Record]: ...

    def update_image(self, record: Record, path: str) -> None:
        """Set ``record.img`` to ``path``; raise ``RecordUpdateError`` on failure."""
        ...

    def import_record(self, record: Record, *, folder: Folder | None = None) -> Record:
        """Copy ``record`` into the primary store and return the copy."""
        ...


@runtime_checkable
class CollectionRepository(Repository[Collection], Protocol):
    """Persistence contract for collections and their write lock."""

    def get(self, collection_id: str) -> Collection | None: ...

    def list_all(self) -> Sequence[Collection]: ...

    def set_locked(self, collection: Collection, *, locked: bool) -> None: ...


@runtime_checkable
class FolderRepository(Repository[Folder], Protocol):
    """Persistence contract for folders in the primary store."""

    def find(self, name: str, document_type: DocumentType) -> Folder | None: ...

    def add(self, entity: Folder) -> None:
        """Store ``entity``; raise ``RecordUpdateError`` if it cannot be stored."""
        ...
