"""
Alembic environment for the catalog schema.

Runs against the same ``DATABASE_URL`` the API uses. PostgreSQL goes through
asyncpg; a SQLite URL is migrated in batch mode so column alterations work.
Only the catalog tables registered on ``SQLModel.metadata`` are compared
during autogenerate.
"""

from asyncio import run as asyncio_run
from logging.config import fileConfig
from typing import Any

from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel import SQLModel

from alembic import context
from catalog.configs import settings
from catalog.models import CategoryDB, ProductDB

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

# No alembic.ini when configured from pyproject.toml
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = SQLModel.metadata

CATALOG_TABLES = frozenset({CategoryDB.__tablename__, ProductDB.__tablename__})


def include_object(
    obj: object,
    name: str | None,
    type_: str,
    reflected: bool,
    compare_to: object,
) -> bool:
    """Ignore tables that do not belong to the catalog."""
    if type_ == "table":
        return name in CATALOG_TABLES
    return True


def _options(url: str) -> dict[str, Any]:
    return {
        "target_metadata": target_metadata,
        "include_object": include_object,
        "compare_type": True,
        "compare_server_default": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    context.configure(
        url=settings.DATABASE_URL,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(settings.DATABASE_URL),
    )
    with context.begin_transaction():
        context.run_migrations()


def _migrate(connection: Connection) -> None:
    context.configure(connection=connection, **_options(settings.DATABASE_URL))
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    engine = create_async_engine(settings.DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(_migrate)
    finally:
        await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio_run(run_migrations_online())
