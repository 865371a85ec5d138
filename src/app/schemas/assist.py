from __future__ import annotations

from pydantic import BaseModel, Field

from src.app.domain.models import AssistContext, AssistIntent


class AssistContextPayload(BaseModel):
    title: str = ""
    description: str = ""
    tags: str = Field(default="", description="Comma-separated tags")

    def to_domain(self) -> AssistContext:
        return AssistContext(title=self.title, description=self.description, tags=self.tags)


class AssistRequest(BaseModel):
    action: AssistIntent
    context: AssistContextPayload = Field(default_factory=AssistContextPayload)


class AssistResponse(BaseModel):
    success: bool = True
    response: str
