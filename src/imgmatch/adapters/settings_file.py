"""Settings store persisted as a small JSON document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, ValidationError

if TYPE_CHECKING:
    from pathlib import Path

log = logging.getLogger(__name__)


class SettingsDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    last_image_folder: str | None = None


class JsonSettingsStore:
    """Remember settings between runs; a missing or corrupt file means defaults."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def last_image_folder(self) -> str | None:
        return self._load().last_image_folder

    def remember_image_folder(self, folder: str) -> None:
        document = self._load().model_copy(update={"last_image_folder": folder})
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(document.model_dump_json(indent=2), encoding="utf-8")
        log.debug("Remembered image folder %s in %s", folder, self.path)

    def _load(self) -> SettingsDocument:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return SettingsDocument()
        try:
            return SettingsDocument.model_validate_json(raw)
        except ValidationError:
            log.warning("Ignoring unreadable settings file %s", self.path)
            return SettingsDocument()
