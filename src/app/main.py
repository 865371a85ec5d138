# src/app/main.py
from __future__ import annotations
import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src.app.config import settings
from src.app.deps import get_catalog_service
from src.app.routers.assist import router as assist_router
from src.app.routers.auth import router as auth_router
from src.app.routers.contact import router as contact_router
from src.app.routers.projects import router as projects_router
from src.app.routers.uploads import router as uploads_router

# Logging simples no stdout (bom para dev e containers)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_catalog_service()
    logger.info("Catalog ready: %s", settings.PROJECTS_DATA_PATH)
    yield


app = FastAPI(title="Portfolio API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(projects_router)
app.include_router(assist_router)
app.include_router(auth_router)
app.include_router(uploads_router)
app.include_router(contact_router)

# Uploads locais servidos como arquivos estáticos
if settings.UPLOAD_BACKEND == "local" and settings.UPLOAD_PUBLIC_PREFIX.strip("/"):
    app.mount(
        "/" + settings.UPLOAD_PUBLIC_PREFIX.strip("/"),
        StaticFiles(directory=str(settings.UPLOAD_DIR), check_dir=False),
        name="uploads",
    )


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


@app.get("/health")
def health():
    return {"ok": True}
