"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "imgmatch"
DEFAULT_DB_FILENAME: Final[str] = "imgmatch.db"
SETTINGS_FILENAME: Final[str] = "settings.json"
ASSETS_DIR_NAME: Final[str] = "Data"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    database_filename: str = DEFAULT_DB_FILENAME
    settings_filename: str = SETTINGS_FILENAME
    assets_root: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def database_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.database_filename

    def settings_path(self, *, ensure: bool = True) -> Path:
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.settings_filename

    def resolve_assets_root(self) -> Path:
        """Root of the namespace that candidate and uploaded paths are relative to."""

        if self.assets_root is not None:
            return self.assets_root.expanduser().resolve()
        return self.resolve_data_dir() / ASSETS_DIR_NAME

    def database_uri(self) -> str:
        return f"sqlite+pysqlite:///{self.database_path()}"


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("IMGMATCH_DATA_DIR")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    env_assets = os.getenv("IMGMATCH_ASSETS_ROOT")
    assets_root = Path(env_assets) if env_assets else None
    return StorageConfig(data_dir=data_dir, assets_root=assets_root)


def get_database_config(*, storage: StorageConfig | None = None) -> DatabaseConfig:
    env_uri = os.getenv("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)
    storage_config = storage or get_storage_config()
    return DatabaseConfig(uri=storage_config.database_uri())
