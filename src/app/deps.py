# src/app/deps.py (singletons do processo, expostos como dependências)

from __future__ import annotations
from typing import TypeVar

from supabase import create_client, Client
from src.app.config import settings
from fastapi import Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel, ValidationError

from src.app.infra.db.json_catalog_repo import JsonFileCatalogRepository
from src.app.infra.storage.base import ImageStorageProvider
from src.app.services.catalog_service import CatalogService

_client: Client | None = None
_catalog: CatalogService | None = None
_image_storage: ImageStorageProvider | None = None


def get_supabase() -> Client:
    global _client
    if not settings.supabase_configured:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication is not configured",
        )
    if _client is None:
        _client = create_client(str(settings.SUPABASE_URL),
                                settings.SUPABASE_SERVICE_ROLE_KEY.get_secret_value())
    return _client


def get_catalog_service() -> CatalogService:
    global _catalog
    if _catalog is None:
        _catalog = CatalogService(JsonFileCatalogRepository(settings.PROJECTS_DATA_PATH))
    return _catalog


def get_image_storage() -> ImageStorageProvider:
    global _image_storage
    if _image_storage is None:
        if settings.UPLOAD_BACKEND == "r2":
            from src.app.infra.storage.r2_provider import R2ImageStorage
            _image_storage = R2ImageStorage()
        else:
            from src.app.infra.storage.local_provider import LocalImageStorage
            _image_storage = LocalImageStorage(settings.UPLOAD_DIR, settings.UPLOAD_PUBLIC_PREFIX)
    return _image_storage


auth_scheme = HTTPBearer(auto_error=False)

class CurrentUser(BaseModel):
    id: str
    email: str | None = None
    name: str | None = None


def is_admin_email(email: str | None) -> bool:
    allowed = {e.strip().lower() for e in settings.ADMIN_EMAILS if e.strip()}
    if not allowed:
        return True
    return bool(email) and email.strip().lower() in allowed


async def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(auth_scheme),
    supa: Client = Depends(get_supabase),
) -> CurrentUser:
    """
    Recebe Authorization: Bearer <access_token> do Supabase,
    valida no GoTrue e retorna dados mínimos do usuário.
    """
    if cred is None or cred.scheme.lower() != "bearer":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")

    token = cred.credentials
    try:
        res = supa.auth.get_user(token)
        user = res.user if res else None
        if not user:
            raise HTTPException(status_code=401, detail="Invalid token")

        # metadados podem conter 'name'
        name = None
        meta = getattr(user, "user_metadata", None) or {}
        if isinstance(meta, dict):
            name = meta.get("name")

        return CurrentUser(id=str(user.id), email=user.email, name=name)
    except HTTPException:
        raise
    except Exception:
        raise HTTPException(status_code=401, detail="Invalid/expired token")


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Portão do painel admin: usuário autenticado e presente em ADMIN_EMAILS."""
    if not is_admin_email(user.email):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user


BodyModel = TypeVar("BodyModel", bound=BaseModel)


async def read_json_body(request: Request, model: type[BodyModel]) -> BodyModel:
    """
    Valida o corpo JSON dentro do handler, depois do portão de auth.
    Erros viram 422 no mesmo formato que o FastAPI usa.
    """
    raw = await request.body()
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        errors = [
            {**err, "loc": ("body", *err["loc"])}
            for err in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors)
