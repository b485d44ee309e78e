"""SmartWiFi Portal - lightweight health and readiness endpoints."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from smartwifi.config import settings
from smartwifi.database import Database, get_database
from smartwifi.schemas.response import ErrorCodes, error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness."""
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@router.get("/ready")
async def readiness_check(database: Database = Depends(get_database)):
    """Readiness requires the store to answer."""
    try:
        await database.ping()
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=503,
            content=error_response(ErrorCodes.STORE_UNAVAILABLE),
        )
    return {"status": "ready"}
