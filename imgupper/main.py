import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from imgupper.auth.router import router as auth_router
from imgupper.config import Settings, get_settings
from imgupper.core.exceptions import AppError
from imgupper.db.session import build_engine, build_session_factory
from imgupper.files.router import router as files_router
from imgupper.health.router import router as health_router
from imgupper.logging_config import setup_logging
from imgupper.storage.client import ObjectStorage
from imgupper.users.router import router as users_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_file)
    logger.info("starting imgupper bucket=%s", settings.r2_bucket_name)
    yield
    await app.state.engine.dispose()
    logger.info("shutdown complete")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        detail = getattr(exc, "detail", "") or exc.message
        logger.error("%s %s failed: %s", request.method, request.url.path, detail, exc_info=exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": "invalid request payload"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around one settings object."""
    settings = settings or get_settings()

    app = FastAPI(
        title="imgupper",
        version="1.0.0",
        description="User accounts, JWT authentication and image upload to object storage.",
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.storage = ObjectStorage.from_settings(settings)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(auth_router, prefix=settings.api_prefix)
    app.include_router(users_router, prefix=settings.api_prefix)
    app.include_router(files_router, prefix=settings.api_prefix)
    return app


app = create_app()
