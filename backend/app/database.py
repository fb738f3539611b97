"""
DevConnector Backend - Database Handle & Session Management
===========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   `Database` bundles an engine and its session factory. `create_app()`
       constructs one explicitly and stores it on `app.state.database`;
       the `get_db_session` dependency pulls it from there per request.
Who:   Route handlers receive sessions via FastAPI's dependency injection.

Connection Pooling (PostgreSQL):
    pool_size=20, max_overflow=10, pool_pre_ping, pool_recycle=3600.
    SQLite (tests, local runs) uses a single shared StaticPool connection so an
    in-memory database survives across sessions.
"""

import logging
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from tenacity import (
    before_sleep_log,
    retry,
    stop_after_attempt,
    wait_exponential,
)

from app.config import Settings
from app.exceptions import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Registers every model with one shared metadata object (used by Alembic
    and by `Database.create_all`).
    """
    pass


class Database:
    """
    Explicitly constructed store handle: one engine plus its session factory.

    Lifecycle:
        create_app()  → Database(settings)     (no connection opened yet)
        lifespan      → await ping(), optional create_all()
        shutdown      → await dispose()
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.engine: AsyncEngine = _build_engine(settings)
        # expire_on_commit=False: attributes stay readable after the
        # dependency commits, while the response is being serialized
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def ping(self) -> None:
        """
        Verify the database answers `SELECT 1`, retrying with backoff.

        Raises:
            The last connection error once all attempts are exhausted.
        """
        attempts = retry(
            stop=stop_after_attempt(self.settings.db_connect_attempts),
            wait=wait_exponential(multiplier=1, min=1, max=self.settings.db_connect_wait),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        await attempts(self.check_connection)()

    async def check_connection(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        """Create any missing tables from the model metadata."""
        # Models register themselves with Base on import
        from app.models import post, profile, user  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Gracefully close all pooled connections."""
        await self.engine.dispose()


def _build_engine(settings: Settings) -> AsyncEngine:
    echo = settings.log_level == "DEBUG"
    if settings.database_url.startswith("sqlite"):
        return create_async_engine(
            settings.database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=echo,
        )
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        echo=echo,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a session from the app's `Database` handle
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back and re-raises for the global error handler
        5. A failed commit is rolled back and surfaces as StoreError (500)
        6. Always: closes the session (returns connection to pool)

    Services commit their own unit of work before returning: code after
    `yield` runs once the response is already on its way, too late to turn a
    failed write into an error response. The commit here only catches what a
    handler left pending.
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error("Commit failed for %s %s: %s",
                             request.method, request.url.path, str(e), exc_info=True)
                raise StoreError(context={"operation": "commit"}) from e
        finally:
            await session.close()
