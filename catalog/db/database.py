"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from catalog.configs import file_logger, settings
from catalog.errors.database import TransactionError

logger = file_logger(getLogger(__name__))

STATEMENT_TIMEOUT_MS = 30000


def engine_options(url: str) -> dict[str, Any]:
    """Pool and timeout options; PostgreSQL gets a server-side statement timeout."""
    options: dict[str, Any] = {"echo": settings.DATABASE_ECHO, "pool_pre_ping": True}
    if url.startswith("postgresql"):
        options.update(
            pool_size=settings.POOL_SIZE,
            max_overflow=settings.MAX_OVERFLOW,
            pool_timeout=settings.POOL_TIMEOUT,
            pool_recycle=settings.POOL_RECYCLE,
            connect_args={
                "command_timeout": STATEMENT_TIMEOUT_MS / 1000,
                "server_settings": {
                    "statement_timeout": str(STATEMENT_TIMEOUT_MS),
                    "lock_timeout": str(STATEMENT_TIMEOUT_MS),
                },
            },
        )
    return options


engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Open a session that commits on success and rolls back on any error.

    Yields:
        AsyncSession: Database session within a transaction.

    Raises:
        TransactionError: If the commit itself fails.
    """
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        try:
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception("Commit failed")
            raise TransactionError(f"Failed to commit transaction: {e}") from e


async def get_session() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency yielding one transactional session per request."""
    async with transaction() as session:
        yield session


async def init_db() -> None:
    """Create the catalog tables that do not exist yet (Alembic owns later changes)."""
    from catalog.models import CategoryDB, ProductDB  # noqa: F401, PLC0415

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info(f"Catalog tables ready on {engine.url.render_as_string(hide_password=True)}")


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database pool disposed")
