"""Replace record images by matching record names against a folder of files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from imgmatch.domain.errors import (
    CollectionNotFoundError,
    EmptyCandidatePoolError,
    EmptyCollectionError,
    RecordUpdateError,
)
from imgmatch.domain.matching import RunReport, build_candidate_index, resolve_record
from imgmatch.domain.model import Folder

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from uuid import UUID

    from imgmatch.domain.matching import MatchResult
    from imgmatch.domain.model import Collection, Record
    from imgmatch.domain.ports.filesystem import FileSystem
    from imgmatch.domain.ports.unit_of_work import RecordRepositories, RecordUnitOfWork

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class ReplacementRequest:
    """Caller-supplied options for one replacement run."""

    collection_id: str
    folder: str
    extensions: tuple[str, ...]
    world_folder: str
    recursive: bool = True
    dry_run: bool = True
    import_first: bool = False


def replace_images(
    *,
    filesystem: FileSystem,
    unit_of_work_factory: Callable[[], RecordUnitOfWork],
    request: ReplacementRequest,
) -> RunReport:
    """Resolve every record in the collection against the folder and optionally apply.

    The collection is checked before the folder is scanned. Structural failures
    (unknown or empty collection, unbrowsable or empty folder) raise before any
    record is touched. A folder whose files are all filtered out by extension is
    not an error; its records simply do not match. Per-record persistence failures
    are logged and counted in ``RunReport.failed``.
    """

    report = RunReport(
        collection_id=request.collection_id,
        folder=request.folder,
        dry_run=request.dry_run,
        import_first=request.import_first,
    )

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        collection = repositories.collections.get(request.collection_id)
        if collection is None:
            raise CollectionNotFoundError(request.collection_id)
        records = repositories.records.fetch_all(request.collection_id)
        if not records:
            raise EmptyCollectionError(request.collection_id)

        index = build_candidate_index(
            filesystem,
            request.folder,
            recursive=request.recursive,
            allowed_extensions=request.extensions,
        )
        if not index.listed:
            raise EmptyCandidatePoolError(request.folder)

        report.results.extend(resolve_record(record, index) for record in records)
        log.info(
            "Resolved %s record(s) in %s: matched=%s, unchanged=%s, no_match=%s, skipped=%s",
            report.scanned,
            collection.id,
            report.matched,
            report.unchanged,
            report.no_match,
            report.skipped,
        )

        pending = [result for result in report.results if result.needs_update]
        if request.dry_run or not pending:
            return report

        by_id: Mapping[UUID, Record] = {record.id: record for record in records}
        updates = [(by_id[result.record_id], result) for result in pending]
        if request.import_first:
            _import_and_update(repositories, collection, updates, request.world_folder, report)
        else:
            _update_in_place(repositories, collection, updates, report)
        uow.commit()

    log.info("Updated %s of %s matched record(s)", report.updated, report.matched)
    return report


def _update_in_place(
    repositories: RecordRepositories,
    collection: Collection,
    updates: Sequence[tuple[Record, MatchResult]],
    report: RunReport,
) -> None:
    originally_locked = collection.locked
    if originally_locked:
        repositories.collections.set_locked(collection, locked=False)
    try:
        for record, result in updates:
            if _apply(repositories, record, result):
                report.updated += 1
            else:
                report.failed += 1
    finally:
        if originally_locked:
            repositories.collections.set_locked(collection, locked=True)


def _import_and_update(
    repositories: RecordRepositories,
    collection: Collection,
    updates: Sequence[tuple[Record, MatchResult]],
    folder_name: str,
    report: RunReport,
) -> None:
    folder = _ensure_folder(repositories, collection, folder_name)
    for record, result in updates:
        try:
            imported = repositories.records.import_record(record, folder=folder)
        except RecordUpdateError:
            log.exception("Failed to import %s", record.name)
            report.failed += 1
            continue
        if _apply(repositories, imported, result):
            report.updated += 1
        else:
            report.failed += 1


def _apply(repositories: RecordRepositories, record: Record, result: MatchResult) -> bool:
    if result.path is None:
        return False
    try:
        repositories.records.update_image(record, result.path)
    except RecordUpdateError:
        log.exception("Failed to update %s", record.name)
        return False
    log.debug("Set image of %s to %s", record.name, result.path)
    return True


def _ensure_folder(
    repositories: RecordRepositories,
    collection: Collection,
    name: str,
) -> Folder | None:
    folder = repositories.folders.find(name, collection.document_type)
    if folder is not None:
        return folder
    folder = Folder(name=name, document_type=collection.document_type)
    try:
        repositories.folders.add(folder)
    except RecordUpdateError:
        log.warning("Failed to ensure world folder %s; importing without one", name)
        return None
    return folder
