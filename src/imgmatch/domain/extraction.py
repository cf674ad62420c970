"""Unpack an in-memory zip archive into a folder of the abstract filesystem.

Extraction is best-effort: a malformed archive aborts before anything is written,
but once writing starts each entry stands alone. A failing entry is logged and
counted, the remaining entries are still written, and nothing is rolled back.
"""

from __future__ import annotations

import io
import logging
import zipfile
import zlib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from imgmatch.domain.errors import ExtractionError, FileSystemError
from imgmatch.domain.ports.filesystem import WriteOutcome

if TYPE_CHECKING:
    from collections.abc import Callable

    from imgmatch.domain.ports.filesystem import FileSystem

type ProgressCallback = Callable[[int, int], None]

log = logging.getLogger(__name__)

# Per-entry failures that must not abort the rest of the archive.
_ENTRY_ERRORS = (
    FileSystemError,
    OSError,
    zipfile.BadZipFile,
    zlib.error,
    RuntimeError,  # also raised by zipfile for encrypted entries
    EOFError,
)


def normalize_relative_path(path_like: str | None) -> str:
    """Turn an arbitrary path into a safe ``/``-joined relative path.

    Backslashes become slashes; empty, ``.`` and ``..`` segments are dropped so the
    result can never climb above the folder it is joined to.
    """

    raw = (path_like or "").replace("\\", "/")
    parts = (part.strip() for part in raw.split("/"))
    return "/".join(part for part in parts if part and part not in {".", ".."})


def join_path(*parts: str) -> str:
    return "/".join(part for part in parts if part)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    destination: str
    total: int
    written: int
    skipped: int
    failed: int

    @property
    def processed(self) -> int:
        return self.written + self.skipped + self.failed


@dataclass(slots=True, kw_only=True)
class ExtractionJob:
    """One archive upload; created per action and discarded afterwards."""

    archive: bytes = field(repr=False)
    destination: str
    overwrite: bool = True
    verbose: bool = False
    done: int = 0
    written: int = 0
    skipped: int = 0
    failed: int = 0
    _known_dirs: set[str] = field(default_factory=set[str], repr=False)

    def run(
        self,
        filesystem: FileSystem,
        *,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionResult:
        destination = normalize_relative_path(self.destination)
        if not destination:
            raise ValueError("Destination folder required")

        with _open_archive(self.archive) as archive:
            entries = [info for info in archive.infolist() if not info.is_dir()]
            total = len(entries)
            log.info(
                "Unpacking %s file(s) to %s (overwrite=%s)", total, destination, self.overwrite
            )
            _notify(on_progress, self.done, total)

            self.ensure_directory(filesystem, destination)
            for info in entries:
                self._extract_entry(filesystem, archive, info, destination)
                self.done += 1
                _notify(on_progress, self.done, total)

        log.info(
            "Unpacked %s file(s) to %s: written=%s, skipped=%s, failed=%s",
            self.done,
            destination,
            self.written,
            self.skipped,
            self.failed,
        )
        return ExtractionResult(
            destination=destination,
            total=total,
            written=self.written,
            skipped=self.skipped,
            failed=self.failed,
        )

    def ensure_directory(self, filesystem: FileSystem, path: str) -> None:
        """Create ``path`` and each of its ancestors; existing ones are fine."""

        current = ""
        for part in normalize_relative_path(path).split("/"):
            if not part:
                continue
            current = join_path(current, part)
            if current in self._known_dirs:
                continue
            filesystem.create_directory(current)
            self._known_dirs.add(current)

    def _extract_entry(
        self,
        filesystem: FileSystem,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        destination: str,
    ) -> None:
        relative = normalize_relative_path(info.filename)
        if not relative:
            log.warning("Skipping archive entry with unusable name: %r", info.filename)
            self.failed += 1
            return

        parent = relative.rpartition("/")[0]
        target = join_path(destination, relative)
        try:
            self.ensure_directory(filesystem, join_path(destination, parent))
            data = archive.read(info)
            outcome = filesystem.write_file(target, data, overwrite=self.overwrite)
        except _ENTRY_ERRORS as exc:
            log.error("Failed to unpack %s: %s", target, exc)  # noqa: TRY400
            log.debug("Failure detail for %s", target, exc_info=exc)
            self.failed += 1
            return

        if outcome is WriteOutcome.SKIPPED_EXISTING:
            self.skipped += 1
            self._log_entry("Kept existing %s", target)
        else:
            self.written += 1
            self._log_entry("Saved %s (%s bytes)", target, len(data))

    def _log_entry(self, message: str, *args: object) -> None:
        log.log(logging.INFO if self.verbose else logging.DEBUG, message, *args)


def extract_archive(
    archive: bytes,
    destination: str,
    *,
    filesystem: FileSystem,
    overwrite: bool = True,
    on_progress: ProgressCallback | None = None,
    verbose: bool = False,
) -> ExtractionResult:
    """Write every file entry of ``archive`` below ``destination``."""

    job = ExtractionJob(
        archive=archive,
        destination=destination,
        overwrite=overwrite,
        verbose=verbose,
    )
    return job.run(filesystem, on_progress=on_progress)


def _open_archive(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data), "r")
    except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError, OSError, EOFError) as exc:
        raise ExtractionError(f"Not a valid zip archive: {exc}") from exc


def _notify(on_progress: ProgressCallback | None, done: int, total: int) -> None:
    if on_progress is not None:
        on_progress(done, total)
