"""
Google Gemini chat completion provider.

Streams answers with `ChatGoogleGenerativeAI.astream` and runs one-shot
completions (system prompt generation) with `ainvoke`.

Dependencies: langchain_google_genai, langchain_core
System role: CompletionProvider adapter
"""

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

from langchain_google_genai import ChatGoogleGenerativeAI

from docchat.core.context_assembler import to_langchain_messages
from docchat.core.exceptions import ProviderError
from docchat.core.interfaces import CompletionProvider
from docchat.models.conversation import ConversationTurn

logger = logging.getLogger(__name__)


def content_text(content: Any) -> str:
    """
    Flatten message content to plain text.

    Gemini may return a string or a list of parts (strings or dicts with a
    `text` key); non-text parts are ignored.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


class GeminiChatProvider(CompletionProvider):
    """Gemini chat model behind the CompletionProvider interface."""

    def __init__(
        self,
        model: str = "gemini-2.5-flash",
        temperature: float = 0.2,
        api_key: str | None = None,
        client: ChatGoogleGenerativeAI | None = None,
    ) -> None:
        if client is None:
            kwargs = {"google_api_key": api_key} if api_key else {}
            client = ChatGoogleGenerativeAI(model=model, temperature=temperature, **kwargs)
        self._client = client

    async def stream_complete(self, turns: Sequence[ConversationTurn]) -> AsyncIterator[str]:
        messages = to_langchain_messages(turns)
        try:
            async for chunk in self._client.astream(messages):
                text = content_text(chunk.content)
                if text:
                    yield text
        except Exception as e:
            raise ProviderError(
                "Completion stream failed",
                provider="completion",
                operation="astream",
                details={"reason": str(e)},
            ) from e

    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """
        Run one completion and return its text.

        Args:
            turns: Prompt turns
            temperature: Override the configured temperature
            max_tokens: Output token cap

        Returns:
            str: Completion text (may be empty)
        """
        overrides: dict[str, Any] = {}
        if temperature is not None:
            overrides["temperature"] = temperature
        if max_tokens is not None:
            overrides["max_output_tokens"] = max_tokens
        client = self._client.model_copy(update=overrides) if overrides else self._client

        try:
            response = await client.ainvoke(to_langchain_messages(turns))
        except Exception as e:
            raise ProviderError(
                "Completion request failed",
                provider="completion",
                operation="ainvoke",
                details={"reason": str(e)},
            ) from e
        return content_text(response.content).strip()
