"""Error taxonomy shared by the matching and extraction workflows."""

from __future__ import annotations


class ImageMatchError(RuntimeError):
    """Base class for user-facing failures."""


class BrowseError(ImageMatchError):
    """Raised when a folder cannot be listed."""

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        message = f"Could not browse folder: {path or '/'}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class FileSystemError(ImageMatchError):
    """Raised by filesystem adapters when a write or mkdir fails."""


class ExtractionError(ImageMatchError):
    """Raised when archive bytes cannot be parsed as a zip archive."""


class RecordUpdateError(ImageMatchError):
    """Raised when a single record fails to persist."""

    def __init__(self, record_name: str, reason: str | None = None) -> None:
        self.record_name = record_name
        message = f"Failed to update record: {record_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CollectionNotFoundError(ImageMatchError):
    def __init__(self, collection_id: str) -> None:
        self.collection_id = collection_id
        super().__init__(f"Collection not found: {collection_id}")


class EmptyCollectionError(ImageMatchError):
    def __init__(self, collection_id: str) -> None:
        self.collection_id = collection_id
        super().__init__(f"No documents in collection: {collection_id}")


class EmptyCandidatePoolError(ImageMatchError):
    def __init__(self, folder: str) -> None:
        self.folder = folder
        super().__init__(f"No image files found in: {folder or '/'}")
