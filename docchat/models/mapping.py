"""
Phone mapping models and schemas.

A mapping links a caller identity (phone number) to a source. The same
number may map to many sources and carry a generated system prompt.

Dependencies: pydantic
System role: Phone mapping API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class PhoneMapping(BaseModel):
    """Stored phone number to source link."""

    id: str
    key: str = Field(description="Phone number")
    source_id: str | None = Field(default=None, description="Mapped source; None for prompt placeholders")
    intent: str | None = None
    system_prompt: str | None = None
    created_at: datetime | None = None


class PhoneMappingCreate(BaseModel):
    """Request schema for creating a mapping."""

    phone_number: str = Field(default="", description="Caller phone number")
    file_id: str = Field(default="", description="Source identifier to map")


class PhoneMappingResponse(BaseModel):
    """Single mapping returned to clients."""

    id: str
    phone_number: str
    file_id: str | None
    intent: str | None = None
    system_prompt: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_mapping(cls, mapping: PhoneMapping) -> "PhoneMappingResponse":
        return cls(
            id=mapping.id,
            phone_number=mapping.key,
            file_id=mapping.source_id,
            intent=mapping.intent,
            system_prompt=mapping.system_prompt,
            created_at=mapping.created_at,
        )


class PhoneMappingListResponse(BaseModel):
    mappings: list[PhoneMappingResponse]


class SystemPromptRequest(BaseModel):
    """Request schema for system prompt generation."""

    intent: str = Field(default="", description="What the chatbot should do for this number")
    phone_number: str = Field(default="", description="Number whose mappings receive the prompt")


class SystemPromptResponse(BaseModel):
    success: bool = True
    system_prompt: str
    intent: str
