"""
Generic async CRUD operations.

Model-specific CRUD classes inherit the primary-key operations here and add
their own queries. Nothing in this layer commits; the adapter calling it
owns the transaction.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Primary-key CRUD over one mapped model.

    Attributes:
        model: Mapped class every statement targets
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    def _id_matches(self, id: Any) -> ColumnElement[bool]:
        return self.model.id == id

    async def create(self, session: AsyncSession, **kwargs) -> ModelT:
        """
        Add a row and flush it so server and default values are loaded.

        Args:
            session: Async database session
            **kwargs: Column values

        Returns:
            The flushed, refreshed instance
        """
        instance = self.model(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    async def get_by_id(self, session: AsyncSession, id: Any) -> ModelT | None:
        result = await session.execute(select(self.model).where(self._id_matches(id)))
        return result.scalar_one_or_none()

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        result = await session.execute(select(self.model.id).where(self._id_matches(id)))
        return result.first() is not None

    async def delete_by_id(self, session: AsyncSession, id: Any) -> bool:
        """
        Delete one row by primary key.

        Returns:
            bool: False when no row had that key
        """
        result = await session.execute(delete(self.model).where(self._id_matches(id)))
        return result.rowcount > 0
