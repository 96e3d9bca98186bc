"""FastAPI application factory.

Main entry point for the reading tracker Web API.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from readtrack.config.app_config import AppConfig, load_app_config
from readtrack.core.record_store import RecordStore, UserNotFound
from readtrack.core.storage import JsonFileStorage, StorageUnavailable
from readtrack.web.routes import (
    auth_router,
    books_router,
    health_router,
    leaderboard_router,
    users_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    store: RecordStore = app.state.store
    try:
        document = store.load_all()
    except StorageUnavailable as e:
        logger.error("api_startup_storage_unavailable", error=str(e))
    else:
        logger.info(
            "api_startup",
            users=len(document["users"]),
            books=len(document["books"]),
        )
    yield


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        # Unrouted paths and wrong methods are both reported as a plain 404
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND,
            status.HTTP_405_METHOD_NOT_ALLOWED,
        ) and exc.detail in ("Not Found", "Method Not Allowed"):
            return _error(status.HTTP_404_NOT_FOUND, "Not Found")
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("bad_request", path=request.url.path, errors=len(exc.errors()))
        return _error(status.HTTP_400_BAD_REQUEST, "invalid request body")

    @app.exception_handler(UserNotFound)
    async def user_not_found_handler(
        request: Request, exc: UserNotFound
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, "not found")

    @app.exception_handler(StorageUnavailable)
    async def storage_unavailable_handler(
        request: Request, exc: StorageUnavailable
    ) -> JSONResponse:
        logger.error("storage_unavailable", path=request.url.path, error=str(exc))
        return _error(status.HTTP_503_SERVICE_UNAVAILABLE, "storage unavailable")


def create_app(
    store: RecordStore | None = None,
    config: AppConfig | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        store: Record store to serve. Defaults to a JSON file store at
            the configured db path.
        config: Application config. Defaults to load_app_config().

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()
    if store is None:
        store = RecordStore(
            JsonFileStorage(config.storage.db_path),
            default_name=config.defaults.student_name,
        )

    app = FastAPI(
        title="Reading Tracker API",
        description="Students, reading progress and the book catalog",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response

    _register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(books_router)
    app.include_router(leaderboard_router)

    return app
