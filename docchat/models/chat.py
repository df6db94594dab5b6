"""
Chat request schemas.

Dependencies: pydantic
System role: Chat API contracts
"""

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request schema for a streamed chat answer."""

    session_id: str = Field(default="", description="Conversation identifier for history")
    message: str = Field(default="", description="User question")
    source_id: str | None = Field(default=None, description="Restrict retrieval to one source")
    phone_number: str | None = Field(
        default=None,
        description="Resolve sources (and system prompt) through phone mappings",
    )


class AutoRespondRequest(BaseModel):
    """Request to answer one inbound message."""

    from_number: str = ""
    to_number: str = ""
    message: str = ""


class AutoRespondResponse(BaseModel):
    success: bool = True
    response: str
