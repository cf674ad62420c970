"""Domain port definitions for adapters."""

from __future__ import annotations

from .filesystem import BrowseResult, DirectoryStatus, FileSystem, WriteOutcome
from .persistence import CollectionRepository, FolderRepository, RecordRepository, Repository
from .settings import SettingsStore
from .unit_of_work import (
    RecordRepositories,
    RecordUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BrowseResult",
    "CollectionRepository",
    "DirectoryStatus",
    "FileSystem",
    "FolderRepository",
    "RecordRepositories",
    "RecordRepository",
    "RecordUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "SettingsStore",
    "UnitOfWork",
    "WriteOutcome",
]
