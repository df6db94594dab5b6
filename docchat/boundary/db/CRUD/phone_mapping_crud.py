"""
Phone mapping CRUD operations.

Dependencies: sqlalchemy, docchat.boundary.db.models
System role: Phone number to source mapping persistence
"""

import uuid
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.phone_mapping_model import PhoneMappingModel


class PhoneMappingCRUD(BaseCRUD[PhoneMappingModel]):
    """
    CRUD operations for PhoneMappingModel.

    Adds filtering by phone number/source and prompt updates across every
    mapping of a number.
    """

    def __init__(self) -> None:
        super().__init__(PhoneMappingModel)

    async def list_filtered(
        self,
        session: AsyncSession,
        phone_number: str | None = None,
        source_id: uuid.UUID | None = None,
    ) -> Sequence[PhoneMappingModel]:
        """
        List mappings, newest first.

        Args:
            session: Async database session
            phone_number: Only mappings of this number
            source_id: Only mappings of this source

        Returns:
            Sequence of matching mappings
        """
        stmt = select(PhoneMappingModel).order_by(PhoneMappingModel.created_at.desc())
        if phone_number:
            stmt = stmt.where(PhoneMappingModel.phone_number == phone_number)
        if source_id is not None:
            stmt = stmt.where(PhoneMappingModel.source_id == source_id)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_source_ids(self, session: AsyncSession, phone_number: str) -> list[uuid.UUID]:
        """Source ids mapped to a number, oldest mapping first; placeholders skipped."""
        stmt = (
            select(PhoneMappingModel.source_id)
            .where(
                PhoneMappingModel.phone_number == phone_number,
                PhoneMappingModel.source_id.is_not(None),
            )
            .order_by(PhoneMappingModel.created_at)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def get_system_prompt(self, session: AsyncSession, phone_number: str) -> str | None:
        """Most recent non-empty system prompt stored for a number."""
        stmt = (
            select(PhoneMappingModel.system_prompt)
            .where(
                PhoneMappingModel.phone_number == phone_number,
                PhoneMappingModel.system_prompt.is_not(None),
            )
            .order_by(PhoneMappingModel.updated_at.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def update_by_phone(self, session: AsyncSession, phone_number: str, **kwargs) -> int:
        """
        Update every mapping of a number.

        Returns:
            int: Number of rows updated
        """
        stmt = (
            update(PhoneMappingModel)
            .where(PhoneMappingModel.phone_number == phone_number)
            .values(**kwargs)
        )
        result = await session.execute(stmt)
        return result.rowcount


phone_mapping_crud = PhoneMappingCRUD()
