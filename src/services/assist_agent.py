from __future__ import annotations

from typing import Mapping

from src.app.config import settings
from src.app.domain.models import AssistContext, AssistIntent
from src.services.errors import AssistDisabledError
from src.services.ollama_client import OllamaClient

_PORTFOLIO_WRITER = "You are a professional portfolio writer."

SYSTEM_PROMPTS: Mapping[AssistIntent, str] = {
    AssistIntent.GENERATE_DESCRIPTION: (
        f"{_PORTFOLIO_WRITER} Generate a compelling, concise project description "
        "(2-3 sentences) that highlights the key features and impact."
    ),
    AssistIntent.ENHANCE_DESCRIPTION: (
        f"{_PORTFOLIO_WRITER} Improve this project description to be more compelling "
        "and professional while keeping it concise (2-3 sentences)."
    ),
    AssistIntent.SUGGEST_TAGS: (
        "You are a tech expert. Suggest 5-7 relevant technology tags for this project. "
        "Return ONLY a comma-separated list, no explanations."
    ),
    AssistIntent.IMPROVE_TITLE: (
        "You are a branding expert. Suggest 3 improved, catchy project titles. "
        "Return ONLY the titles, one per line, no numbers or explanations."
    ),
}

USER_PROMPTS: Mapping[AssistIntent, str] = {
    AssistIntent.GENERATE_DESCRIPTION: (
        "Project title: {title}\nTechnologies: {tags}\nGenerate a professional description:"
    ),
    AssistIntent.ENHANCE_DESCRIPTION: "Current description: {description}\nImprove it:",
    AssistIntent.SUGGEST_TAGS: (
        "Project: {title}\nDescription: {description}\nSuggest tags:"
    ),
    AssistIntent.IMPROVE_TITLE: (
        "Current title: {title}\nDescription: {description}\nSuggest better titles:"
    ),
}


def build_prompt(intent: AssistIntent, context: AssistContext) -> str:
    """Fill the fixed templates for ``intent``; the same input always gives the same prompt."""
    system_prompt = SYSTEM_PROMPTS[intent]
    user_prompt = USER_PROMPTS[intent].format(
        title=context.title,
        description=context.description,
        tags=context.tags,
    )
    return f"{system_prompt}\n\n{user_prompt}"


def get_assist_client() -> OllamaClient:
    base_url = settings.assist_backend_url()
    if base_url is None:
        raise AssistDisabledError()
    return OllamaClient(
        base_url=base_url,
        model_name=settings.OLLAMA_MODEL,
        timeout=settings.OLLAMA_TIMEOUT_SECONDS,
    )


def run_assist(
    intent: AssistIntent,
    context: AssistContext,
    client: OllamaClient | None = None,
) -> str:
    client = client or get_assist_client()
    response = client.generate(build_prompt(intent, context))
    return response.strip()
