from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import AnyUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_OLLAMA_URL = "http://localhost:11434"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    APP_ENV: str = "local"
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
    )

    PROJECTS_DATA_PATH: Path = Path("data/projects.json")

    SUPABASE_URL: Optional[AnyUrl] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[SecretStr] = None
    ADMIN_EMAILS: list[str] = Field(default_factory=list)

    OLLAMA_URL: Optional[str] = None
    OLLAMA_MODEL: str = "llama3.2"
    OLLAMA_TIMEOUT_SECONDS: float = 60.0

    UPLOAD_BACKEND: Literal["local", "r2"] = "local"
    UPLOAD_DIR: Path = Path("public/uploads")
    UPLOAD_PUBLIC_PREFIX: str = "/uploads"

    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[SecretStr] = None
    SMTP_USE_TLS: bool = True
    FROM_EMAIL: Optional[str] = None
    CONTACT_SIGNATURE: str = "The Portfolio Team"

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.strip().lower() == "production"

    @property
    def supabase_configured(self) -> bool:
        return self.SUPABASE_URL is not None and self.SUPABASE_SERVICE_ROLE_KEY is not None

    def assist_backend_url(self) -> Optional[str]:
        """Base URL of the completion backend, or None when assist is switched off."""
        if self.OLLAMA_URL:
            return self.OLLAMA_URL.rstrip("/")
        if self.is_production:
            return None
        return DEFAULT_OLLAMA_URL


settings = Settings()
