from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import employees, objectives, projects
from app.core.config import settings
from app.core.errors import DomainError
from app.core.logging import configure_logging, get_logger
from app.db.session import init_db

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    if settings.db_auto_create:
        init_db()
    logger.info("app.startup environment=%s", settings.environment)
    yield


app = FastAPI(title="Project Manager API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info(
        "request.rejected path=%s status=%s detail=%s", request.url.path, exc.status_code, exc.detail
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


api_router = APIRouter(prefix="/api")
api_router.include_router(employees.router)
api_router.include_router(projects.router)
api_router.include_router(objectives.router)
app.include_router(api_router)
