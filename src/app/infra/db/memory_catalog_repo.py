from __future__ import annotations

import copy

from src.app.domain.models import Project
from src.app.infra.db.base import CatalogRepository


class InMemoryCatalogRepository(CatalogRepository):
    """Keeps the catalog in process memory. Nothing survives a restart."""

    def __init__(self, projects: list[Project] | None = None) -> None:
        self._projects: list[Project] = copy.deepcopy(projects or [])
        self.save_count = 0

    def load_all(self) -> list[Project]:
        return copy.deepcopy(self._projects)

    def save_all(self, projects: list[Project]) -> None:
        self._projects = copy.deepcopy(projects)
        self.save_count += 1
