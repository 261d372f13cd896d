"""Tests for the request-scoped transaction."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pytest_mock.plugin import MockerFixture
from sqlalchemy.exc import OperationalError

from catalog.db import database
from catalog.errors import TransactionError


@pytest.fixture
def session(mocker: MockerFixture) -> AsyncMock:
    session = AsyncMock()
    maker = mocker.patch.object(database, "async_session_maker", MagicMock())
    maker.return_value.__aenter__.return_value = session
    return session


@pytest.mark.asyncio
async def test_commits_on_success(session: AsyncMock) -> None:
    async with database.transaction() as active:
        assert active is session

    session.commit.assert_awaited_once()
    session.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_rolls_back_on_error(session: AsyncMock) -> None:
    with pytest.raises(ValueError, match="boom"):
        async with database.transaction():
            raise ValueError("boom")

    session.rollback.assert_awaited_once()
    session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_commit_raises_transaction_error(session: AsyncMock) -> None:
    session.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))

    with pytest.raises(TransactionError, match="Failed to commit transaction"):
        async with database.transaction():
            pass

    session.rollback.assert_awaited_once()


def test_postgres_gets_pool_and_statement_timeout() -> None:
    options = database.engine_options("postgresql+asyncpg://u:p@db/catalog")

    assert options["connect_args"]["server_settings"]["statement_timeout"] == "30000"
    assert "pool_size" in options


def test_sqlite_keeps_default_pool() -> None:
    assert "pool_size" not in database.engine_options("sqlite+aiosqlite://")
