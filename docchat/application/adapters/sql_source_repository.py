"""
SQL source repository.

Implements `SourceRepository` on top of the CRUD singletons. Each write
commits on its own: the ingestion coordinator relies on the source row
existing before chunks are inserted, and on a later delete undoing it.

Dependencies: sqlalchemy, docchat.boundary.db.CRUD
System role: Source and phone mapping adapter for the core
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD import phone_mapping_crud, source_crud
from docchat.boundary.db.models import PhoneMappingModel
from docchat.core.exceptions import InvalidArgumentError, MappingConflictError, StoreError
from docchat.core.interfaces import SourceRepository
from docchat.models.ingestion import SourceCreate
from docchat.models.mapping import PhoneMapping

logger = logging.getLogger(__name__)


def parse_uuid(value: str, field: str) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid {field}", field=field, details={"value": value}) from e


def to_phone_mapping(row: PhoneMappingModel) -> PhoneMapping:
    return PhoneMapping(
        id=str(row.id),
        key=row.phone_number,
        source_id=str(row.source_id) if row.source_id else None,
        intent=row.intent,
        system_prompt=row.system_prompt,
        created_at=row.created_at,
    )


class SqlSourceRepository(SourceRepository):
    """SourceRepository over the request's AsyncSession."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, meta: SourceCreate) -> str:
        try:
            source = await source_crud.create(
                self.db,
                name=meta.name,
                auth_token=meta.auth_token,
                origin=meta.origin,
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Failed to create source", operation="create_source", details={"reason": str(e)}) from e
        return str(source.id)

    async def delete(self, source_id: str) -> None:
        """Delete a source; chunks and mappings go with it by cascade."""
        # Discard anything a failed step left pending
        await self.db.rollback()
        try:
            deleted = await source_crud.delete_by_id(self.db, parse_uuid(source_id, "source_id"))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(
                "Failed to delete source",
                operation="delete_source",
                details={"source_id": source_id, "reason": str(e)},
            ) from e
        logger.info(
            f"{__name__}:delete - Source deleted",
            extra={"source_id": source_id, "deleted": deleted},
        )

    async def list_mappings(self, key: str) -> list[str]:
        try:
            source_ids = await phone_mapping_crud.get_source_ids(self.db, key)
        except SQLAlchemyError as e:
            raise StoreError("Failed to list mappings", operation="list_mappings", details={"reason": str(e)}) from e
        return [str(source_id) for source_id in source_ids]

    async def add_mapping(self, key: str, source_id: str) -> PhoneMapping:
        try:
            row = await phone_mapping_crud.create(
                self.db,
                phone_number=key,
                source_id=parse_uuid(source_id, "file_id"),
            )
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if await source_crud.exists(self.db, parse_uuid(source_id, "file_id")):
                raise MappingConflictError(key, source_id) from e
            raise InvalidArgumentError(
                "Source does not exist",
                field="file_id",
                details={"value": source_id},
            ) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError("Failed to create mapping", operation="add_mapping", details={"reason": str(e)}) from e
        return to_phone_mapping(row)

    async def get_system_prompt(self, key: str) -> str | None:
        try:
            return await phone_mapping_crud.get_system_prompt(self.db, key)
        except SQLAlchemyError as e:
            raise StoreError(
                "Failed to load system prompt",
                operation="get_system_prompt",
                details={"reason": str(e)},
            ) from e
