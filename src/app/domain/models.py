# src/app/domain/models.py
"""
Domain models for the project catalog and the content-assist proxy.
These are pure data structures with no infrastructure dependencies.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    """Closed set of portfolio categories."""
    AI = "AI"
    BRAND_PROTECTION = "Brand Protection"
    SAAS = "SaaS"
    VIDEO_ANALYSIS = "Video Analysis"


class AssistIntent(str, Enum):
    """Content-assist actions offered to the admin dashboard."""
    GENERATE_DESCRIPTION = "generate_description"
    ENHANCE_DESCRIPTION = "enhance_description"
    SUGGEST_TAGS = "suggest_tags"
    IMPROVE_TITLE = "improve_title"


@dataclass
class Project:
    """
    One entry in the portfolio catalog.
    Serialized with the same keys the public site and the admin dashboard use.
    """
    id: str
    title: str
    category: Category
    description: str = ""
    image: str = ""
    tags: list[str] = field(default_factory=list)
    link: Optional[str] = None
    github: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "tags": list(self.tags),
            "category": self.category.value,
        }
        # Optional links are omitted rather than written as null
        if self.link is not None:
            data["link"] = self.link
        if self.github is not None:
            data["github"] = self.github
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """
        Build a project from a persisted mapping.

        Values are never coerced: a field of the wrong type is rejected so a
        damaged document is reported instead of being rewritten.

        Raises:
            KeyError: ``id`` or ``category`` missing
            ValueError: any field has the wrong type or an unknown category
        """
        project_id = data["id"]
        if not isinstance(project_id, str) or not project_id.strip():
            raise ValueError(f"id must be a non-empty string, got {project_id!r}")

        texts: dict[str, str] = {}
        for key in ("title", "description", "image"):
            value = data.get(key, "")
            if not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
            texts[key] = value

        tags = data.get("tags", [])
        if not isinstance(tags, list):
            raise ValueError(f"tags must be a list, got {type(tags).__name__}")
        for tag in tags:
            if not isinstance(tag, str):
                raise ValueError(f"tags must hold strings, got {type(tag).__name__}")

        links: dict[str, Optional[str]] = {}
        for key in ("link", "github"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{key} must be a string, got {type(value).__name__}")
            links[key] = value

        return cls(
            id=project_id,
            category=Category(data["category"]),
            tags=list(tags),
            **texts,
            **links,
        )


@dataclass
class AssistContext:
    """Fields of the record being edited that the prompt templates draw on."""
    title: str = ""
    description: str = ""
    tags: str = ""  # comma-separated, as typed in the dashboard


@dataclass
class StoredImage:
    """Result of an image upload."""
    path: str
    content_type: str
    size_bytes: int
