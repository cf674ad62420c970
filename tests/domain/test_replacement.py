from __future__ import annotations

import pytest

from imgmatch.domain.errors import (
    BrowseError,
    CollectionNotFoundError,
    EmptyCandidatePoolError,
    EmptyCollectionError,
)
from imgmatch.domain.matching import MatchStatus
from imgmatch.domain.model import DocumentType
from imgmatch.domain.replacement import ReplacementRequest, replace_images
from tests.helpers.filesystem import InMemoryFileSystem
from tests.helpers.record_store import FakeRecordStore
from tests.helpers.records import DEFAULT_COLLECTION_ID, make_collection, make_record

EXTENSIONS = ("webp", "png", "jpg", "jpeg")


def _request(**overrides: object) -> ReplacementRequest:
    options: dict[str, object] = {
        "collection_id": DEFAULT_COLLECTION_ID,
        "folder": "art",
        "extensions": EXTENSIONS,
        "world_folder": "Daggerheart Imports",
    }
    options.update(overrides)
    return ReplacementRequest(**options)  # type: ignore[arg-type]


@pytest.fixture
def filesystem() -> InMemoryFileSystem:
    return InMemoryFileSystem.with_files(
        "art/goblin-warrior.webp",
        "art/bosses/thewitch.png",
        "art/Bear.png",
    )


def test_dry_run_reports_without_writing(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(
        make_collection(),
        [make_record("Goblin Warrior"), make_record("The Witch"), make_record("Unknown Beast")],
    )

    report = replace_images(filesystem=filesystem, unit_of_work_factory=store, request=_request())

    assert report.dry_run
    assert report.scanned == 3
    assert report.matched == 2
    assert report.no_match == 1
    assert report.updated == 0
    assert store.records.updates == []
    assert store.collections.lock_changes == []
    assert store.uow.commits == 0


def test_apply_updates_matched_records(filesystem: InMemoryFileSystem) -> None:
    goblin = make_record("Goblin Warrior")
    witch = make_record("The Witch", img="icons/svg/mystery-man.svg")
    store = FakeRecordStore.with_records(make_collection(), [goblin, witch])

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert report.updated == 2
    assert report.failed == 0
    assert goblin.img == "art/goblin-warrior.webp"
    assert witch.img == "art/bosses/thewitch.png"
    assert store.uow.commits == 1


def test_unchanged_records_are_not_written(filesystem: InMemoryFileSystem) -> None:
    bear = make_record("Bear", img="art/Bear.png")
    goblin = make_record("Goblin Warrior")
    store = FakeRecordStore.with_records(make_collection(), [bear, goblin])

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert [result.status for result in report.results] == [
        MatchStatus.MATCHED_UNCHANGED,
        MatchStatus.MATCHED_NEW,
    ]
    assert store.records.updates == [("Goblin Warrior", "art/goblin-warrior.webp")]
    assert report.updated == 1


def test_nothing_to_update_skips_unlock_and_commit(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(
        make_collection(locked=True),
        [make_record("Bear", img="art/Bear.png")],
    )

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert report.updated == 0
    assert store.collections.lock_changes == []
    assert store.uow.commits == 0


def test_locked_collection_is_unlocked_then_relocked(filesystem: InMemoryFileSystem) -> None:
    collection = make_collection(locked=True)
    store = FakeRecordStore.with_records(collection, [make_record("Goblin Warrior")])

    replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert store.collections.lock_changes == [False, True]
    assert collection.locked


def test_lock_is_restored_when_update_raises(filesystem: InMemoryFileSystem) -> None:
    collection = make_collection(locked=True)
    store = FakeRecordStore.with_records(collection, [make_record("Goblin Warrior")])

    def explode(*_args: object) -> None:
        raise RuntimeError("store offline")

    store.records.update_image = explode  # type: ignore[method-assign]

    with pytest.raises(RuntimeError, match="store offline"):
        replace_images(
            filesystem=filesystem,
            unit_of_work_factory=store,
            request=_request(dry_run=False),
        )

    assert store.collections.lock_changes == [False, True]
    assert collection.locked
    assert store.uow.rollbacks == 1


def test_unlocked_collection_lock_is_untouched(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(make_collection(), [make_record("Goblin Warrior")])

    replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert store.collections.lock_changes == []


def test_failed_record_does_not_stop_others(filesystem: InMemoryFileSystem) -> None:
    witch = make_record("The Witch")
    store = FakeRecordStore.with_records(
        make_collection(),
        [make_record("Goblin Warrior"), witch],
    )
    store.records.failing.add("Goblin Warrior")

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert report.updated == 1
    assert report.failed == 1
    assert witch.img == "art/bosses/thewitch.png"
    assert store.uow.commits == 1


def test_import_first_updates_world_copies(filesystem: InMemoryFileSystem) -> None:
    goblin = make_record("Goblin Warrior")
    store = FakeRecordStore.with_records(
        make_collection(locked=True),
        [goblin, make_record("Unknown Beast")],
    )

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False, import_first=True),
    )

    assert report.updated == 1
    assert goblin.img is None
    assert store.collections.lock_changes == []
    [imported] = store.records.imported
    assert imported.collection_id is None
    assert imported.img == "art/goblin-warrior.webp"
    [folder] = store.folders.folders
    assert folder.name == "Daggerheart Imports"
    assert folder.document_type is DocumentType.ACTOR
    assert imported.folder_id == folder.id


def test_import_first_reuses_existing_folder(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(
        make_collection(),
        [make_record("Goblin Warrior"), make_record("The Witch")],
    )

    for _ in range(2):
        replace_images(
            filesystem=filesystem,
            unit_of_work_factory=store,
            request=_request(dry_run=False, import_first=True),
        )

    assert len(store.folders.folders) == 1


def test_import_first_continues_without_folder(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(make_collection(), [make_record("Goblin Warrior")])
    store.folders.fail_on_add = True

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False, import_first=True),
    )

    assert report.updated == 1
    [imported] = store.records.imported
    assert imported.folder_id is None


def test_unsupported_records_are_skipped(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(
        make_collection(),
        [make_record("Goblin Warrior", document_type=DocumentType.JOURNAL_ENTRY)],
    )

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(dry_run=False),
    )

    assert report.skipped == 1
    assert store.records.updates == []


def test_non_recursive_scan_misses_subfolders(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(make_collection(), [make_record("The Witch")])

    report = replace_images(
        filesystem=filesystem,
        unit_of_work_factory=store,
        request=_request(recursive=False),
    )

    assert report.no_match == 1


def test_unknown_collection_raises_before_scanning(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore()

    with pytest.raises(CollectionNotFoundError):
        replace_images(
            filesystem=filesystem,
            unit_of_work_factory=store,
            request=_request(folder="nowhere"),
        )

    assert filesystem.browse_calls == []


def test_empty_collection_raises_before_scanning(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(make_collection(), [])

    with pytest.raises(EmptyCollectionError):
        replace_images(filesystem=filesystem, unit_of_work_factory=store, request=_request())

    assert filesystem.browse_calls == []


def test_empty_folder_raises() -> None:
    filesystem = InMemoryFileSystem()
    filesystem.dirs.add("art")
    store = FakeRecordStore.with_records(make_collection(), [make_record("Goblin")])

    with pytest.raises(EmptyCandidatePoolError):
        replace_images(filesystem=filesystem, unit_of_work_factory=store, request=_request())


def test_unbrowsable_folder_raises(filesystem: InMemoryFileSystem) -> None:
    store = FakeRecordStore.with_records(make_collection(), [make_record("Goblin")])

    with pytest.raises(BrowseError):
        replace_images(
            filesystem=filesystem,
            unit_of_work_factory=store,
            request=_request(folder="nowhere"),
        )


def test_folder_without_allowed_extensions_reports_no_match() -> None:
    filesystem = InMemoryFileSystem.with_files("art/goblin.txt", "art/readme.md")
    store = FakeRecordStore.with_records(make_collection(), [make_record("Goblin")])

    report = replace_images(filesystem=filesystem, unit_of_work_factory=store, request=_request())

    assert report.no_match == 1
    assert report.matched == 0
