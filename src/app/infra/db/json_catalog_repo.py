from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from src.app.domain.errors import CatalogCorruptedError, CatalogWriteError
from src.app.domain.models import Project
from src.app.infra.db.base import CatalogRepository

logger = logging.getLogger(__name__)


def _parse_document(path: Path, raw: str) -> list[Project]:
    try:
        payload: Any = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogCorruptedError(path, f"invalid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(payload, list):
        raise CatalogCorruptedError(path, f"expected a JSON array, got {type(payload).__name__}")

    projects: list[Project] = []
    seen: set[str] = set()
    for index, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise CatalogCorruptedError(path, f"entry {index} is not an object")
        try:
            project = Project.from_dict(entry)
        except (KeyError, ValueError, TypeError) as e:
            raise CatalogCorruptedError(path, f"entry {index} is invalid: {e}") from e
        # ids são únicos no documento
        if project.id in seen:
            raise CatalogCorruptedError(path, f"entry {index} repeats id {project.id!r}")
        seen.add(project.id)
        projects.append(project)
    return projects


class JsonFileCatalogRepository(CatalogRepository):
    """Stores the catalog as a JSON array in a single file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load_all(self) -> list[Project]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise CatalogCorruptedError(self.path, f"unreadable: {e}") from e

        if not raw.strip():
            return []
        return _parse_document(self.path, raw)

    def save_all(self, projects: list[Project]) -> None:
        payload = [project.to_dict() for project in projects]
        temp_name: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=str(self.path.parent),
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                json.dump(payload, handle, indent=2, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            Path(temp_name).replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            if temp_name is not None:
                Path(temp_name).unlink(missing_ok=True)
            logger.error("Failed to persist catalog to %s: %s", self.path, e)
            raise CatalogWriteError(self.path, str(e)) from e

        logger.debug("Persisted %d projects to %s", len(projects), self.path)
