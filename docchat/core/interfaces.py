"""
Capability interfaces consumed by the core pipeline.

The core never talks to an SDK, HTTP API or database directly; it is handed
instances of these interfaces at construction time. Production adapters live
under `docchat.boundary` and `docchat.application.adapters`; tests substitute
in-memory fakes.

Dependencies: docchat.models
System role: Ports between the core pipeline and external services
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from docchat.models import (
    ConversationTurn,
    EmbeddedChunk,
    PhoneMapping,
    SourceCreate,
    VectorSearchHit,
)


class EmbeddingProvider(ABC):
    """Turns text into a fixed-length vector."""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """
        Embed one text.

        Raises:
            ProviderError: If the provider call fails
        """


class CompletionProvider(ABC):
    """Language model used to answer questions."""

    @abstractmethod
    def stream_complete(self, turns: Sequence[ConversationTurn]) -> AsyncIterator[str]:
        """
        Stream the answer for `turns` as text deltas.

        Implementations are async generators; nothing is sent to the model
        until the first delta is requested.

        Raises:
            ProviderError: While iterating, if the model call fails
        """

    @abstractmethod
    async def complete(
        self,
        turns: Sequence[ConversationTurn],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Return the whole completion for `turns` in one call."""


class VectorStore(ABC):
    """Similarity search over embedded chunks."""

    @abstractmethod
    async def similarity_search(
        self,
        vector: Sequence[float],
        source_id: str | None,
        k: int,
    ) -> list[VectorSearchHit]:
        """
        Return up to `k` hits ordered by descending similarity.

        Args:
            vector: Query embedding
            source_id: Restrict to one source; None searches every chunk
            k: Maximum number of hits

        Raises:
            StoreError: If the search fails
        """

    @abstractmethod
    async def insert_chunks(self, rows: Sequence[EmbeddedChunk]) -> None:
        """
        Persist all rows or none of them.

        Raises:
            StoreError: If the insert fails (nothing is left behind)
        """


class SourceRepository(ABC):
    """Parent source records and the phone mappings that point at them."""

    @abstractmethod
    async def create(self, meta: SourceCreate) -> str:
        """Create a source record and return its id."""

    @abstractmethod
    async def delete(self, source_id: str) -> None:
        """Delete a source and, by cascade, its chunks and mappings."""

    @abstractmethod
    async def list_mappings(self, key: str) -> list[str]:
        """Return the source ids mapped to `key`, oldest mapping first."""

    @abstractmethod
    async def add_mapping(self, key: str, source_id: str) -> PhoneMapping:
        """
        Link `key` to `source_id`.

        Raises:
            MappingConflictError: If the pair already exists
        """

    @abstractmethod
    async def get_system_prompt(self, key: str) -> str | None:
        """Return the stored system prompt for `key`, if any."""


class MessageHistory(ABC):
    """Durable conversation log."""

    @abstractmethod
    async def load(self, session_id: str) -> list[ConversationTurn]:
        """Return the session's turns in chronological order."""

    @abstractmethod
    async def append(self, session_id: str, turn: ConversationTurn) -> None:
        """Record one turn at the end of the session."""


class OcrProvider(ABC):
    """Extracts text from an image."""

    model_name: str = ""

    @abstractmethod
    async def extract_text(self, image: bytes, mime_type: str) -> str:
        """
        Run OCR over one image.

        Raises:
            ProviderError: If the OCR call fails
        """
