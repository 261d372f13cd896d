"""Base repository for database operations."""

from typing import Any
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from catalog.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    TransactionError,
)


class BaseRepository[ModelT: SQLModel]:
    """
    Generic CRUD over a single SQLModel table.

    Writes only flush. Handlers call ``commit`` once a unit of work is
    complete, before the cache is told about it; the surrounding
    ``transaction()`` rolls back anything left uncommitted on error.

    Attributes:
        model: The SQLModel table model.
        order_by: Column names used for stable ordering of ``get_all``.
    """

    model: type[ModelT]
    order_by: tuple[str, ...] = ("created_at", "id")

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        return await self.session.get(self.model, record_id)

    async def get_all(self) -> list[ModelT]:
        statement = select(self.model).order_by(*self._ordering())
        return list((await self.session.execute(statement)).scalars().all())

    async def add(self, record: ModelT) -> ModelT:
        return await self._flush_and_refresh(record)

    async def update(self, record: ModelT) -> ModelT:
        return await self._flush_and_refresh(record)

    async def delete(self, record: ModelT) -> None:
        try:
            await self.session.delete(record)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to delete record: {e}") from e

    async def commit(self) -> None:
        """
        Make every flushed write of this session durable.

        Raises:
            TransactionError: If the commit fails; the session is rolled back.
        """
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransactionError(detail=f"Failed to commit transaction: {e}") from e

    async def count(self) -> int:
        statement = select(func.count()).select_from(self.model)
        return (await self.session.execute(statement)).scalar() or 0

    def _ordering(self) -> list[Any]:
        return [getattr(self.model, name) for name in self.order_by]

    async def _flush_and_refresh(self, record: ModelT) -> ModelT:
        """
        Flush ``record`` and reload server-side state.

        Raises:
            DuplicateEntryError: If a unique constraint is violated.
            DatabaseError: For other integrity violations.
            DatabaseConnectionError: When the statement could not run.
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(detail=error_msg) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e
        return record
