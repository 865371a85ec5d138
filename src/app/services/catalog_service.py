# src/app/services/catalog_service.py
"""
Project catalog service.
Owns the read-modify-write cycle over the persisted project collection.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import replace
from typing import Optional

from src.app.domain.errors import DuplicateProjectError, ProjectNotFoundError
from src.app.domain.models import Project
from src.app.infra.db.base import CatalogRepository
from src.services.ids import ProjectIdGenerator

logger = logging.getLogger(__name__)


def _index_of(projects: list[Project], project_id: str) -> int:
    for index, project in enumerate(projects):
        if project.id == project_id:
            return index
    return -1


class CatalogService:
    """
    Service for managing the portfolio catalog.

    Responsibilities:
    - List projects in display order
    - Create projects, generating ids when the caller supplies none
    - Replace a project in place by id
    - Delete a project by id

    Every mutation loads the full collection, changes it in memory and saves
    the full collection back exactly once. A per-instance lock serialises
    these cycles; separate processes are not coordinated.
    """

    def __init__(
        self,
        repository: CatalogRepository,
        id_generator: Optional[ProjectIdGenerator] = None,
    ):
        self._repo = repository
        self._ids = id_generator or ProjectIdGenerator()
        self._lock = threading.Lock()

    def list_projects(self) -> list[Project]:
        """
        Return every project in display order.

        Returns:
            The stored projects (empty when nothing was saved yet)

        Raises:
            CatalogCorruptedError: If the stored document cannot be read
        """
        with self._lock:
            return self._repo.load_all()

    def create_project(self, project: Project) -> Project:
        """
        Append a project to the catalog.

        Args:
            project: The project to store; an empty id asks for a generated one

        Returns:
            The stored project with its resolved id

        Raises:
            DuplicateProjectError: If the supplied id is already in use
        """
        with self._lock:
            projects = self._repo.load_all()
            taken = {p.id for p in projects}

            if project.id:
                if project.id in taken:
                    raise DuplicateProjectError(project.id)
                stored = replace(project, tags=list(project.tags))
            else:
                stored = replace(project, id=self._ids.next_id(taken), tags=list(project.tags))

            projects.append(stored)
            self._repo.save_all(projects)

        logger.info("Project created: id=%s, title=%r", stored.id, stored.title)
        return stored

    def update_project(self, project: Project) -> Project:
        """
        Replace the project with the same id, keeping its position.

        Args:
            project: The full new version of the project

        Returns:
            The stored project

        Raises:
            ProjectNotFoundError: If no project has that id
        """
        with self._lock:
            projects = self._repo.load_all()
            index = _index_of(projects, project.id)
            if index == -1:
                raise ProjectNotFoundError(project.id)

            stored = replace(project, tags=list(project.tags))
            projects[index] = stored
            self._repo.save_all(projects)

        logger.info("Project updated: id=%s, position=%d", stored.id, index)
        return stored

    def delete_project(self, project_id: str) -> None:
        """
        Remove a project permanently.

        Raises:
            ProjectNotFoundError: If no project has that id
        """
        with self._lock:
            projects = self._repo.load_all()
            index = _index_of(projects, project_id)
            if index == -1:
                raise ProjectNotFoundError(project_id)

            del projects[index]
            self._repo.save_all(projects)

        logger.info("Project deleted: id=%s", project_id)
