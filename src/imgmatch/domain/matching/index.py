"""Lookup tables over the candidate file pool."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from imgmatch.domain.errors import BrowseError

from .normalize import basename, condense, file_extension, slugify, strip_extension

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Mapping

    from imgmatch.domain.ports.filesystem import FileSystem

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CandidateIndex:
    """Three read-only views from comparison keys to candidate paths.

    ``paths`` holds the files that passed the extension filter; ``listed`` counts every
    file offered, allowed or not.
    """

    by_exact_stem: Mapping[str, str]
    by_slug: Mapping[str, str]
    by_condensed_slug: Mapping[str, str]
    paths: tuple[str, ...] = ()
    listed: int = 0

    @classmethod
    def from_paths(
        cls,
        paths: Iterable[str],
        allowed_extensions: Collection[str],
    ) -> CandidateIndex:
        allowed = {extension.lower() for extension in allowed_extensions}
        by_exact_stem: dict[str, str] = {}
        by_slug: dict[str, str] = {}
        by_condensed_slug: dict[str, str] = {}
        retained: list[str] = []
        listed = 0
        for path in paths:
            listed += 1
            if file_extension(path) not in allowed:
                continue
            retained.append(path)
            stem = strip_extension(basename(path))
            by_exact_stem[stem] = path
            slug = slugify(stem)
            by_slug.setdefault(slug, path)
            by_condensed_slug.setdefault(condense(slug), path)
        return cls(
            by_exact_stem=MappingProxyType(by_exact_stem),
            by_slug=MappingProxyType(by_slug),
            by_condensed_slug=MappingProxyType(by_condensed_slug),
            paths=tuple(retained),
            listed=listed,
        )

    def __len__(self) -> int:
        return len(self.paths)


def list_candidate_files(filesystem: FileSystem, root: str, *, recursive: bool) -> list[str]:
    """List file paths under ``root``.

    The root must be browsable; ``BrowseError`` propagates. When ``recursive`` is set,
    a folder's files come before the contents of its subfolders, which are walked
    depth-first in listing order. Unreadable subfolders are logged and skipped.
    """

    listing = filesystem.browse(root)
    if not recursive:
        return list(listing.files)
    files: list[str] = []
    _walk(filesystem, listing.files, listing.dirs, files)
    return files


def _walk(
    filesystem: FileSystem,
    files: Iterable[str],
    dirs: Iterable[str],
    out: list[str],
) -> None:
    out.extend(files)
    for directory in dirs:
        try:
            listing = filesystem.browse(directory)
        except BrowseError as exc:
            log.warning("Skipping unreadable folder %s: %s", directory, exc)
            continue
        _walk(filesystem, listing.files, listing.dirs, out)


def build_candidate_index(
    filesystem: FileSystem,
    root: str,
    *,
    recursive: bool,
    allowed_extensions: Collection[str],
) -> CandidateIndex:
    """Scan ``root`` and index every file whose extension is allowed."""

    paths = list_candidate_files(filesystem, root, recursive=recursive)
    index = CandidateIndex.from_paths(paths, allowed_extensions)
    log.info(
        "Indexed %s candidate file(s) out of %s listed under %s (recursive=%s)",
        len(index),
        index.listed,
        root or "/",
        recursive,
    )
    return index

