"""Records, the collections holding them and the folders they are filed in."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from imgmatch.domain.model.enums import IMAGE_DOCUMENT_TYPES, DocumentType


def new_id() -> UUID:
    return uuid4()


@dataclass(eq=False, kw_only=True)
class Collection:
    """A compendium: a named, lockable store of records of one document type."""

    id: str
    label: str
    document_type: DocumentType
    locked: bool = False


@dataclass(eq=False, kw_only=True)
class Folder:
    id: UUID = field(default_factory=new_id)
    name: str
    document_type: DocumentType


@dataclass(eq=False, kw_only=True)
class Record:
    """A named document whose image path the matcher may propose to change.

    ``collection_id`` is ``None`` for records in the primary (world) store.
    """

    id: UUID = field(default_factory=new_id)
    name: str
    document_type: DocumentType
    img: str | None = None
    system_slug: str | None = None
    flag_slug: str | None = None
    collection_id: str | None = None
    folder_id: UUID | None = None

    @property
    def supports_image(self) -> bool:
        """Whether ``img`` is a recognised field for this document type."""
        return self.document_type in IMAGE_DOCUMENT_TYPES

    def aliases(self) -> tuple[str, ...]:
        """Alternate names carried by the record; absent aliases are omitted."""
        return tuple(alias for alias in (self.system_slug, self.flag_slug) if alias)

    def copy_to_world(self, *, folder: Folder | None = None) -> Record:
        """Return a detached copy of this record for the primary store."""
        return Record(
            name=self.name,
            document_type=self.document_type,
            img=self.img,
            system_slug=self.system_slug,
            flag_slug=self.flag_slug,
            collection_id=None,
            folder_id=folder.id if folder is not None else None,
        )
