# src/app/infra/db/base.py
"""
Abstract base class for the project catalog repository.
This interface allows easy swapping between persistence backends.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from src.app.domain.models import Project


class CatalogRepository(ABC):
    """
    Abstract interface for loading and saving the whole project collection.

    The catalog is always read and written as one ordered document; there are
    no per-record operations at this level.

    Implementations:
    - JsonFileCatalogRepository: single JSON file on local disk
    - InMemoryCatalogRepository: process memory (tests, ephemeral deployments)
    """

    @abstractmethod
    def load_all(self) -> list[Project]:
        """
        Load the full collection in display order.

        Returns:
            The stored projects; an empty list when nothing was persisted yet

        Raises:
            CatalogCorruptedError: If stored data exists but cannot be parsed
        """
        pass

    @abstractmethod
    def save_all(self, projects: list[Project]) -> None:
        """
        Replace the stored collection with ``projects``.

        Args:
            projects: The complete collection, in display order

        Raises:
            CatalogWriteError: If the collection could not be persisted
        """
        pass
