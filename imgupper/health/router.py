import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from imgupper.core.dependencies import DbSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: DbSession) -> JSONResponse:
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.error("health check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content={"status": "error", "message": "Database connection failed"},
        )
    return JSONResponse(content={"status": "ok", "message": "Service is healthy"})
