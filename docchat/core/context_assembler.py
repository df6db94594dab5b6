"""
Conversation context assembly.

Builds the ordered turn list handed to the completion provider: one system
turn (instructions, grounding rules, retrieved context), the session history
unchanged, then the user's message.

Dependencies: langchain_core, docchat.core.prompts
System role: Prompt construction for grounded answers
"""

from collections.abc import Sequence

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from docchat.core.exceptions import InvalidArgumentError
from docchat.core.prompts import CONTEXT_SEPARATOR, GROUNDING_RULES, SYSTEM_TURN_TEMPLATE
from docchat.models.conversation import ConversationTurn, TurnRole
from docchat.models.retrieval import RetrievalMatch


def assemble(
    instructions: str,
    matches: Sequence[RetrievalMatch],
    history: Sequence[ConversationTurn],
    user_message: str,
) -> list[ConversationTurn]:
    """
    Assemble the prompt turns for one answer.

    Match texts are joined by a blank line in the order given (the
    retriever's similarity order). No history turn is dropped or reordered.

    Args:
        instructions: Assistant persona / caller system prompt
        matches: Retrieved chunks, most similar first
        history: Prior turns in chronological order
        user_message: The question being asked

    Returns:
        list[ConversationTurn]: system turn, history..., user turn

    Raises:
        InvalidArgumentError: When user_message is empty
    """
    if not user_message or not user_message.strip():
        raise InvalidArgumentError("Message is required", field="message")

    system_content = SYSTEM_TURN_TEMPLATE.format(
        instructions=instructions,
        grounding_rules=GROUNDING_RULES,
        context=CONTEXT_SEPARATOR.join(match.text for match in matches),
    )

    return [
        ConversationTurn(role=TurnRole.SYSTEM, content=system_content),
        *history,
        ConversationTurn(role=TurnRole.USER, content=user_message),
    ]


_MESSAGE_TYPES: dict[TurnRole, type[BaseMessage]] = {
    TurnRole.SYSTEM: SystemMessage,
    TurnRole.USER: HumanMessage,
    TurnRole.ASSISTANT: AIMessage,
}


def to_langchain_messages(turns: Sequence[ConversationTurn]) -> list[BaseMessage]:
    """Convert turns to LangChain chat messages, preserving order."""
    return [_MESSAGE_TYPES[turn.role](content=turn.content) for turn in turns]
