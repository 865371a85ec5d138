from __future__ import annotations

from pathlib import Path


class CatalogError(Exception):
    pass


class ProjectNotFoundError(CatalogError):
    def __init__(self, project_id: str):
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class DuplicateProjectError(CatalogError):
    def __init__(self, project_id: str):
        super().__init__(f"Project already exists: {project_id}")
        self.project_id = project_id


class CatalogStorageError(CatalogError):
    pass


class CatalogCorruptedError(CatalogStorageError):
    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Catalog document {path} is corrupt: {reason}")
        self.path = str(path)
        self.reason = reason


class CatalogWriteError(CatalogStorageError):
    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Failed to write catalog document {path}: {reason}")
        self.path = str(path)
        self.reason = reason


class StorageError(Exception):
    pass


class InvalidUploadError(StorageError):
    def __init__(self, reason: str = "Invalid or unsupported image file"):
        super().__init__(reason)
        self.reason = reason
