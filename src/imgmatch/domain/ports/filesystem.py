"""Port for browsing and writing the file namespace that holds candidate images."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class BrowseResult:
    """Immediate children of a browsed folder as root-relative ``/`` paths."""

    files: tuple[str, ...] = ()
    dirs: tuple[str, ...] = ()


class DirectoryStatus(StrEnum):
    CREATED = "created"
    EXISTS = "exists"


class WriteOutcome(StrEnum):
    WRITTEN = "written"
    SKIPPED_EXISTING = "skipped_existing"


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem rooted at a fixed namespace.

    ``browse`` raises ``BrowseError`` for unreadable paths; ``create_directory`` and
    ``write_file`` raise ``FileSystemError`` for anything other than an existing
    directory or a file that is kept because ``overwrite`` is false.
    """

    def browse(self, path: str) -> BrowseResult: ...

    def create_directory(self, path: str) -> DirectoryStatus: ...

    def write_file(self, path: str, data: bytes, *, overwrite: bool) -> WriteOutcome: ...
