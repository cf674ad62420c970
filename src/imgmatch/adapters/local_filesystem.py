"""Filesystem port backed by a local directory."""

from __future__ import annotations

import logging
from pathlib import Path

from imgmatch.domain.errors import BrowseError, FileSystemError
from imgmatch.domain.ports.filesystem import BrowseResult, DirectoryStatus, WriteOutcome

log = logging.getLogger(__name__)


class LocalFileSystem:
    """Expose ``root`` as a ``/``-delimited namespace of relative paths.

    Listings are sorted by name so enumeration order (and therefore which file wins
    a slug collision) is stable across platforms.
    """

    def __init__(self, root: Path) -> None:
        self.root = root.expanduser().resolve()

    def browse(self, path: str) -> BrowseResult:
        try:
            directory = self._resolve(path)
            children = sorted(directory.iterdir(), key=lambda child: child.name)
        except (OSError, ValueError) as exc:
            raise BrowseError(path, str(exc)) from exc

        files: list[str] = []
        dirs: list[str] = []
        for child in children:
            relative = child.relative_to(self.root).as_posix()
            if child.is_dir():
                dirs.append(relative)
            elif child.is_file():
                files.append(relative)
        return BrowseResult(files=tuple(files), dirs=tuple(dirs))

    def create_directory(self, path: str) -> DirectoryStatus:
        target = self._resolve_for_write(path)
        if target.is_dir():
            return DirectoryStatus.EXISTS
        try:
            target.mkdir()
        except FileExistsError as exc:
            if target.is_dir():
                return DirectoryStatus.EXISTS
            raise FileSystemError(f"Not a directory: {path}") from exc
        except OSError as exc:
            raise FileSystemError(f"Could not create directory {path}: {exc}") from exc
        log.debug("Created directory %s", path)
        return DirectoryStatus.CREATED

    def write_file(self, path: str, data: bytes, *, overwrite: bool) -> WriteOutcome:
        target = self._resolve_for_write(path)
        if target.exists() and not overwrite:
            return WriteOutcome.SKIPPED_EXISTING
        try:
            target.write_bytes(data)
        except OSError as exc:
            raise FileSystemError(f"Could not write {path}: {exc}") from exc
        return WriteOutcome.WRITTEN

    def _resolve(self, path: str) -> Path:
        target = (self.root / path.strip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise ValueError(f"Path escapes the filesystem root: {path}")
        return target

    def _resolve_for_write(self, path: str) -> Path:
        try:
            return self._resolve(path)
        except ValueError as exc:
            raise FileSystemError(str(exc)) from exc
