"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from imgmatch.adapters.sqlalchemy.mappings import collection_table, folder_table, record_table
from imgmatch.domain.errors import RecordUpdateError
from imgmatch.domain.model import Collection, Folder, Record

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from imgmatch.domain.model import DocumentType

log = logging.getLogger(__name__)


class SqlAlchemyRecordRepository:
    """Records of every collection plus the primary (world) store.

    Writes run inside a SAVEPOINT so that a failing record rolls back alone and
    the surrounding unit of work stays usable.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Record) -> None:
        self.session.add(entity)

    def fetch_all(self, collection_id: str) -> tuple[Record, ...]:
        stmt = (
            select(Record)
            .where(record_table.c.collection_id == collection_id)
            .order_by(record_table.c.name, record_table.c.id)
        )
        return tuple(self.session.scalars(stmt))

    def update_image(self, record: Record, path: str) -> None:
        try:
            with self.session.begin_nested():
                record.img = path
                self.session.flush()
        except SQLAlchemyError as exc:
            raise RecordUpdateError(record.name, str(exc)) from exc

    def import_record(self, record: Record, *, folder: Folder | None = None) -> Record:
        imported = record.copy_to_world(folder=folder)
        try:
            with self.session.begin_nested():
                self.session.add(imported)
                self.session.flush()
        except SQLAlchemyError as exc:
            raise RecordUpdateError(record.name, str(exc)) from exc
        log.debug("Imported %s into the world store as %s", record.name, imported.id)
        return imported


class SqlAlchemyCollectionRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Collection) -> None:
        self.session.add(entity)

    def get(self, collection_id: str) -> Collection | None:
        return self.session.get(Collection, collection_id)

    def list_all(self) -> tuple[Collection, ...]:
        stmt = select(Collection).order_by(collection_table.c.id)
        return tuple(self.session.scalars(stmt))

    def set_locked(self, collection: Collection, *, locked: bool) -> None:
        collection.locked = locked
        self.session.flush()
        log.debug("Collection %s locked=%s", collection.id, locked)


class SqlAlchemyFolderRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Folder) -> None:
        try:
            with self.session.begin_nested():
                self.session.add(entity)
                self.session.flush()
        except SQLAlchemyError as exc:
            raise RecordUpdateError(entity.name, str(exc)) from exc

    def find(self, name: str, document_type: DocumentType) -> Folder | None:
        stmt = (
            select(Folder)
            .where(folder_table.c.name == name)
            .where(folder_table.c.document_type == document_type)
            .limit(1)
        )
        return self.session.scalars(stmt).first()
