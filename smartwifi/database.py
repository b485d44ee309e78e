"""
SmartWiFi Portal - Database connection

SQLAlchemy 2.0 style. The engine is a process-wide resource owned by a
``Database`` instance: created lazily on first use, reused for the lifetime of
the process and disposed on shutdown. Requests receive an ``AsyncSession``
through ``get_async_db``.
"""
import logging
import os
import uuid
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""
    pass


def ensure_db_directory(url: str) -> None:
    """Create the parent directory of a sqlite database file."""
    for prefix in ("sqlite+aiosqlite:///", "sqlite:///"):
        if url.startswith(prefix):
            db_path = url[len(prefix):]
            db_dir = os.path.dirname(db_path)
            if db_dir and not os.path.exists(db_dir):
                os.makedirs(db_dir, exist_ok=True)
            return


class Database:
    """Lazily-connected async engine plus its session factory."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._connect()
        return self._engine

    def _connect(self) -> None:
        ensure_db_directory(self.url)
        self._engine = create_async_engine(
            self.url,
            connect_args={"check_same_thread": False} if "sqlite" in self.url else {},
            echo=self.echo,
        )
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    def session(self) -> AsyncSession:
        """Open a new session; use as ``async with db.session() as s``."""
        if self._session_factory is None:
            self._connect()
        return self._session_factory()

    async def create_all(self) -> None:
        """Create every table registered on ``Base.metadata``."""
        # register models on the metadata
        from smartwifi.models import user, cafe, plan, card, design  # noqa

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_async_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Per-request session bound to the application's database."""
    async with get_database(request).session() as session:
        yield session


def new_id() -> str:
    """Opaque document-style primary key."""
    return uuid.uuid4().hex
