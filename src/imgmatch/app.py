"""Application orchestration entry points."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from imgmatch.adapters.compendium import load_compendium_export
from imgmatch.adapters.local_filesystem import LocalFileSystem
from imgmatch.adapters.settings_file import JsonSettingsStore
from imgmatch.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyRecordUnitOfWork,
    is_started,
    startup,
)
from imgmatch.config import get_matching_config, get_storage_config
from imgmatch.domain.extraction import extract_archive
from imgmatch.domain.replacement import ReplacementRequest, replace_images
from imgmatch.domain.ports.unit_of_work import RecordUnitOfWork

if TYPE_CHECKING:
    from pathlib import Path

    from imgmatch.domain.extraction import ExtractionResult, ProgressCallback
    from imgmatch.domain.matching import RunReport
    from imgmatch.domain.model import Collection
    from imgmatch.domain.ports.filesystem import FileSystem
    from imgmatch.domain.ports.settings import SettingsStore

UnitOfWorkFactory = Callable[[], RecordUnitOfWork]

log = logging.getLogger(__name__)


def build_filesystem() -> LocalFileSystem:
    root = get_storage_config().resolve_assets_root()
    root.mkdir(parents=True, exist_ok=True)
    return LocalFileSystem(root)


def build_settings_store() -> JsonSettingsStore:
    return JsonSettingsStore(get_storage_config().settings_path())


def _default_unit_of_work() -> UnitOfWorkFactory:
    if not is_started():
        startup()
    return SqlAlchemyRecordUnitOfWork


def default_image_folder(settings: SettingsStore | None = None) -> str:
    """Folder to scan when the caller names none: the last one used, if any."""

    effective_settings = settings or build_settings_store()
    return effective_settings.last_image_folder() or get_matching_config().default_image_folder


def replace_collection_images(
    *,
    collection_id: str,
    folder: str | None = None,
    recursive: bool = True,
    extensions: tuple[str, ...] | None = None,
    dry_run: bool = True,
    import_first: bool = False,
    world_folder: str | None = None,
    filesystem: FileSystem | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    settings: SettingsStore | None = None,
) -> RunReport:
    """Match images for one collection using the configured adapters."""

    config = get_matching_config()
    request = ReplacementRequest(
        collection_id=collection_id,
        folder=(folder or default_image_folder(settings)).strip(),
        recursive=recursive,
        extensions=extensions or config.extensions,
        dry_run=dry_run,
        import_first=import_first,
        world_folder=(world_folder or config.world_folder).strip(),
    )
    log.info(
        "Starting image replacement: collection=%s, folder=%s, recursive=%s, dry_run=%s, "
        "import_first=%s",
        request.collection_id,
        request.folder,
        request.recursive,
        request.dry_run,
        request.import_first,
    )
    return replace_images(
        filesystem=filesystem or build_filesystem(),
        unit_of_work_factory=unit_of_work_factory or _default_unit_of_work(),
        request=request,
    )


def upload_archive(
    archive_path: Path,
    destination: str,
    *,
    overwrite: bool = True,
    on_progress: ProgressCallback | None = None,
    verbose: bool = False,
    filesystem: FileSystem | None = None,
    settings: SettingsStore | None = None,
) -> ExtractionResult:
    """Unpack a zip file into ``destination`` and remember it as the image folder."""

    result = extract_archive(
        archive_path.read_bytes(),
        destination,
        filesystem=filesystem or build_filesystem(),
        overwrite=overwrite,
        on_progress=on_progress,
        verbose=verbose,
    )
    effective_settings = settings or build_settings_store()
    try:
        effective_settings.remember_image_folder(result.destination)
    except OSError:
        log.warning("Could not remember image folder %s", result.destination, exc_info=True)
    return result


def load_collection(
    export_path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Collection, int]:
    """Import a compendium export into the record store."""

    collection, records = load_compendium_export(export_path)
    effective_uow = unit_of_work_factory or _default_unit_of_work()
    with effective_uow() as uow:
        repositories = uow.repositories
        if repositories.collections.get(collection.id) is not None:
            raise ValueError(f"Collection already loaded: {collection.id}")
        repositories.collections.add(collection)
        for record in records:
            repositories.records.add(record)
        uow.commit()
    log.info("Loaded %s record(s) into %s", len(records), collection.id)
    return collection, len(records)


def list_collections(
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> tuple[Collection, ...]:
    effective_uow = unit_of_work_factory or _default_unit_of_work()
    with effective_uow() as uow:
        return tuple(uow.repositories.collections.list_all())
