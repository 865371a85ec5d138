from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from src.app.domain.models import Category, Project


class ProjectPayload(BaseModel):
    id: Optional[str] = None
    title: str = ""
    description: str = ""
    image: str = ""
    tags: list[str] = Field(default_factory=list)
    category: Category
    link: Optional[str] = None
    github: Optional[str] = None

    @field_validator("id", "link", "github", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("id", "link", "github")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    def to_domain(self) -> Project:
        return Project(
            id=self.id or "",
            title=self.title,
            category=self.category,
            description=self.description,
            image=self.image,
            tags=list(self.tags),
            link=self.link,
            github=self.github,
        )

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectPayload":
        return cls(**project.to_dict())


class ProjectMutationResponse(BaseModel):
    success: bool = True
    project: ProjectPayload


class SuccessResponse(BaseModel):
    success: bool = True
