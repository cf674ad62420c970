"""Defaults for image matching and archive uploads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

DEFAULT_IMAGE_EXTENSIONS: Final[tuple[str, ...]] = ("webp", "png", "jpg", "jpeg")
DEFAULT_WORLD_FOLDER: Final[str] = "Daggerheart Imports"
DEFAULT_IMAGE_FOLDER: Final[str] = "assets/dh-image-importer"


@dataclass(frozen=True, slots=True)
class MatchingConfig:
    extensions: tuple[str, ...] = DEFAULT_IMAGE_EXTENSIONS
    world_folder: str = DEFAULT_WORLD_FOLDER
    default_image_folder: str = DEFAULT_IMAGE_FOLDER


def parse_extensions(raw: str) -> tuple[str, ...]:
    """Split a comma separated extension list into lower-case, dot-less entries.

    Order is preserved and duplicates are dropped. ``"webp, .PNG,,png"`` becomes
    ``("webp", "png")``.
    """

    cleaned = (part.strip().lower().lstrip(".") for part in raw.split(","))
    extensions = tuple(dict.fromkeys(part for part in cleaned if part))
    if not extensions:
        raise ConfigurationError(f"No usable file extensions in: {raw!r}")
    return extensions


def get_matching_config() -> MatchingConfig:
    raw_extensions = optional_env_var("IMGMATCH_EXTENSIONS")
    world_folder = optional_env_var("IMGMATCH_WORLD_FOLDER")
    return MatchingConfig(
        extensions=parse_extensions(raw_extensions)
        if raw_extensions
        else DEFAULT_IMAGE_EXTENSIONS,
        world_folder=world_folder or DEFAULT_WORLD_FOLDER,
    )
