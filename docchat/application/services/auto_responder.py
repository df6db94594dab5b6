"""
Messaging auto-responder.

Answers an inbound message to a business number from the documents mapped
to that number. The conversation with each sender is its own session.
Delivering the reply back to the messaging provider is the caller's job.

Dependencies: docchat.application.services.chat_service
System role: Inbound message auto-response
"""

import logging

from docchat.application.services.chat_service import ChatService
from docchat.core.exceptions import InvalidArgumentError
from docchat.models.retrieval import SourceSelector

logger = logging.getLogger(__name__)


def session_key(to_number: str, from_number: str) -> str:
    return f"{to_number}:{from_number}"


class AutoResponder:
    """Generates document-grounded replies for inbound messages."""

    def __init__(self, chat_service: ChatService) -> None:
        self.chat_service = chat_service

    async def respond(self, from_number: str, to_number: str, message: str) -> str:
        """
        Produce a reply to one inbound message.

        Args:
            from_number: Sender
            to_number: Business number the documents are mapped to
            message: Inbound text

        Returns:
            str: Full reply text

        Raises:
            InvalidArgumentError: Missing field
            NoDocumentsError: No documents are mapped to to_number
        """
        if not from_number or not to_number or not message:
            raise InvalidArgumentError("from_number, to_number, and message are required")

        reply = await self.chat_service.answer_text(
            session_key(to_number, from_number),
            SourceSelector(mapping_key=to_number),
            message,
        )
        logger.info(
            f"{__name__}:respond - Reply generated",
            extra={"to_number": to_number, "reply_len": len(reply)},
        )
        return reply
