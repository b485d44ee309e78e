"""
SmartWiFi Portal - FastAPI application entry

Run with ``uvicorn smartwifi.main:app``.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartwifi.api import api_router
from smartwifi.config import settings
from smartwifi.core.errors import AuthError
from smartwifi.database import Database
from smartwifi.schemas.response import ErrorCodes, error_response
from smartwifi.services.bootstrap import ensure_admin

logger = logging.getLogger(__name__)

_STATUS_CODES = {
    401: ErrorCodes.UNAUTHORIZED,
    403: ErrorCodes.FORBIDDEN,
    404: ErrorCodes.NOT_FOUND,
    405: ErrorCodes.METHOD_NOT_ALLOWED,
}


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    # ==================== startup ====================
    database: Database = app.state.database
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    await database.create_all()
    logger.info("Database schema ready")

    # seed the default admin once per process, not per request
    async with database.session() as db:
        await ensure_admin(db, settings.ADMIN_USER, settings.ADMIN_PASS)

    yield

    # ==================== shutdown ====================
    logger.info(f"Stopping {settings.APP_NAME}")
    await database.dispose()


def register_error_handlers(app: FastAPI) -> None:
    """Translate exceptions into ``{"error": code}`` bodies."""

    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, e: AuthError):
        headers = {"WWW-Authenticate": "Bearer"} if e.status == 401 else None
        return JSONResponse(
            status_code=int(e.status),
            content=error_response(e.code),
            headers=headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, e: StarletteHTTPException):
        return JSONResponse(
            status_code=e.status_code,
            content=error_response(_STATUS_CODES.get(e.status_code, ErrorCodes.INVALID)),
            headers=getattr(e, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, e: SQLAlchemyError):
        logger.error(f"Database error: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_response(ErrorCodes.STORE_UNAVAILABLE),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, e: Exception):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_response(ErrorCodes.INTERNAL),
        )


def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Build the application

    Args:
        database: store to use; defaults to one built from DATABASE_URL
    """
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Captive-portal Wi-Fi voucher backend",
        lifespan=lifespan,
    )
    app.state.database = database or Database(settings.async_database_url, echo=settings.DEBUG)

    # ==================== middleware ====================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # ==================== routes ====================
    app.include_router(api_router)

    return app


app = create_app()
