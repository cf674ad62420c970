"""SQLAlchemy adapter package for imgmatch."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import (
    SqlAlchemyCollectionRepository,
    SqlAlchemyFolderRepository,
    SqlAlchemyRecordRepository,
)
from .unit_of_work import SqlAlchemyRecordUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyCollectionRepository",
    "SqlAlchemyFolderRepository",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyRecordUnitOfWork",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
