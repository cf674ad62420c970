from __future__ import annotations

import json
from typing import TYPE_CHECKING

from imgmatch.adapters.settings_file import JsonSettingsStore
from imgmatch.domain.ports.settings import SettingsStore

if TYPE_CHECKING:
    from pathlib import Path


def test_missing_file_means_no_folder(tmp_path: Path) -> None:
    store = JsonSettingsStore(tmp_path / "settings.json")

    assert isinstance(store, SettingsStore)
    assert store.last_image_folder() is None


def test_remembered_folder_survives_new_store(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    JsonSettingsStore(path).remember_image_folder("assets/pack")

    assert JsonSettingsStore(path).last_image_folder() == "assets/pack"
    assert json.loads(path.read_text(encoding="utf-8")) == {"last_image_folder": "assets/pack"}


def test_corrupt_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonSettingsStore(path)

    assert store.last_image_folder() is None

    store.remember_image_folder("assets/pack")

    assert store.last_image_folder() == "assets/pack"


def test_unknown_keys_are_ignored(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"last_image_folder": "art", "theme": "dark"}),
        encoding="utf-8",
    )

    assert JsonSettingsStore(path).last_image_folder() == "art"
