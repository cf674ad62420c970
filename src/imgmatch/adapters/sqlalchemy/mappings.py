"""SQLAlchemy mapping metadata for records, collections and folders."""

from __future__ import annotations

import logging
import uuid
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, Enum, ForeignKey, Index, String, Table, Uuid, orm
from sqlalchemy.orm import configure_mappers

from imgmatch.domain.model import Collection, DocumentType, Folder, Record

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]

mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

collection_table = Table(
    "collection",
    mapper_registry.metadata,
    Column("id", String, primary_key=True),
    Column("label", String, nullable=False),
    Column("document_type", Enum(DocumentType), nullable=False),
    Column("locked", Boolean, nullable=False, default=False),
)

folder_table = Table(
    "folder",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("document_type", Enum(DocumentType), nullable=False),
)

record_table = Table(
    "record",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("document_type", Enum(DocumentType), nullable=False),
    Column("img", String, nullable=True),
    Column("system_slug", String, nullable=True),
    Column("flag_slug", String, nullable=True),
    Column("collection_id", String, ForeignKey("collection.id"), nullable=True),
    Column("folder_id", UUIDColumnType, ForeignKey("folder.id"), nullable=True),
    Index("ix_record_collection_name", "collection_id", "name"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Collection, collection_table)
    mapper_registry.map_imperatively(Folder, folder_table)
    mapper_registry.map_imperatively(Record, record_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
