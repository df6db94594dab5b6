"""
Conversation turn models.

Dependencies: pydantic
System role: Prompt and history message structure
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TurnRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ConversationTurn(BaseModel):
    """One role-tagged message fed to the language model."""

    model_config = ConfigDict(frozen=True)

    role: TurnRole
    content: str
