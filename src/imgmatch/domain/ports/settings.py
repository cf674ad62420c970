"""Port for settings persisted between runs."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsStore(Protocol):
    def last_image_folder(self) -> str | None: ...

    def remember_image_folder(self, folder: str) -> None: ...
