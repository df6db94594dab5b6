"""
Phone mapping service.

Manages phone number to source mappings and generates the per-number
chatbot system prompt used in place of the default instructions.

Dependencies: docchat.boundary.db.CRUD, docchat.core.prompts, docchat.application.adapters
System role: Phone mapping use case orchestration
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.sql_source_repository import (
    SqlSourceRepository,
    parse_uuid,
    to_phone_mapping,
)
from docchat.boundary.db.CRUD import phone_mapping_crud
from docchat.core.exceptions import InvalidArgumentError, ProviderError, StoreError
from docchat.core.interfaces import CompletionProvider
from docchat.core.prompts import SYSTEM_PROMPT_GENERATOR
from docchat.models.conversation import ConversationTurn, TurnRole
from docchat.models.mapping import PhoneMapping

logger = logging.getLogger(__name__)

_ROLE_BY_MESSAGE_TYPE = {"system": TurnRole.SYSTEM, "human": TurnRole.USER, "ai": TurnRole.ASSISTANT}


class MappingService:
    """Phone mapping orchestrator."""

    def __init__(
        self,
        db: AsyncSession,
        completion: CompletionProvider | None = None,
        temperature: float = 0.7,
        max_tokens: int = 500,
    ) -> None:
        """
        Initialize mapping service.

        Args:
            db: Async SQLAlchemy session
            completion: Model used for system prompt generation
            temperature: Generation temperature
            max_tokens: Generation token cap
        """
        self.db = db
        self.sources = SqlSourceRepository(db)
        self.completion = completion
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def list_mappings(
        self,
        phone_number: str | None = None,
        file_id: str | None = None,
    ) -> list[PhoneMapping]:
        """List mappings newest first, optionally filtered by number and/or source."""
        source_id = parse_uuid(file_id, "file_id") if file_id else None
        rows = await phone_mapping_crud.list_filtered(self.db, phone_number=phone_number, source_id=source_id)
        return [to_phone_mapping(row) for row in rows]

    async def create_mapping(self, phone_number: str, file_id: str) -> PhoneMapping:
        """
        Map a phone number to a source.

        Raises:
            InvalidArgumentError: Missing phone number or file id
            MappingConflictError: The pair already exists
        """
        if not phone_number or not file_id:
            raise InvalidArgumentError(
                "phone_number and file_id are required",
                field="phone_number" if not phone_number else "file_id",
            )
        mapping = await self.sources.add_mapping(phone_number, file_id)
        logger.info(
            f"{__name__}:create_mapping - Mapping created",
            extra={"mapping_id": mapping.id, "source_id": file_id},
        )
        return mapping

    async def delete_mapping(self, mapping_id: str) -> bool:
        """
        Delete one mapping by id.

        Returns:
            bool: True if a mapping was deleted
        """
        deleted = await phone_mapping_crud.delete_by_id(self.db, parse_uuid(mapping_id, "id"))
        await self.db.commit()
        return deleted

    async def generate_system_prompt(self, intent: str, phone_number: str) -> str:
        """
        Generate and store a chatbot system prompt for a phone number.

        The prompt is written to every mapping of the number; a number with
        no mappings gets a placeholder mapping holding only the prompt.

        Args:
            intent: Business purpose of the chatbot
            phone_number: Number the prompt applies to

        Returns:
            str: Generated system prompt

        Raises:
            InvalidArgumentError: Missing intent or phone number
            ProviderError: Generation failed or returned nothing
        """
        if not intent or not phone_number:
            raise InvalidArgumentError(
                "Intent and phone_number are required",
                field="intent" if not intent else "phone_number",
            )
        if self.completion is None:
            raise ProviderError("Completion provider is not configured", provider="completion")

        messages = SYSTEM_PROMPT_GENERATOR.format_messages(intent=intent)
        turns = [ConversationTurn(role=_ROLE_BY_MESSAGE_TYPE[m.type], content=m.content) for m in messages]
        system_prompt = await self.completion.complete(
            turns,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not system_prompt:
            raise ProviderError("Failed to generate system prompt", provider="completion", operation="complete")

        try:
            updated = await phone_mapping_crud.update_by_phone(
                self.db,
                phone_number,
                intent=intent,
                system_prompt=system_prompt,
            )
            if not updated:
                await phone_mapping_crud.create(
                    self.db,
                    phone_number=phone_number,
                    source_id=None,
                    intent=intent,
                    system_prompt=system_prompt,
                )
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(
                "Failed to store system prompt",
                operation="store_system_prompt",
                details={"reason": str(e)},
            ) from e

        logger.info(
            f"{__name__}:generate_system_prompt - System prompt stored",
            extra={"updated_mappings": updated, "prompt_len": len(system_prompt)},
        )
        return system_prompt
