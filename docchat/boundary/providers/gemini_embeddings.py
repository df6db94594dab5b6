"""
Google Generative AI embedding provider.

Wraps `GoogleGenerativeAIEmbeddings` so every query uses the configured
output dimensionality; the client ignores it when set only on the
constructor.

Dependencies: langchain_google_genai
System role: EmbeddingProvider adapter
"""

import logging

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from docchat.core.exceptions import ProviderError
from docchat.core.interfaces import EmbeddingProvider

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(EmbeddingProvider):
    """Gemini embeddings with a fixed vector length."""

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        dimension: int = 1024,
        api_key: str | None = None,
        client: GoogleGenerativeAIEmbeddings | None = None,
    ) -> None:
        """
        Initialize embedding provider.

        Args:
            model: Google embedding model ID
            dimension: Output dimensionality requested on every call
            api_key: Google API key (falls back to GOOGLE_API_KEY)
            client: Pre-built client, used by tests
        """
        if client is None:
            kwargs = {"google_api_key": api_key} if api_key else {}
            client = GoogleGenerativeAIEmbeddings(model=model, **kwargs)
        self._client = client
        self._dimension = dimension
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, output_dimensionality={dimension}"
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    async def embed(self, text: str) -> list[float]:
        try:
            vector = await self._client.aembed_query(text, output_dimensionality=self._dimension)
        except Exception as e:
            raise ProviderError(
                "Embedding request failed",
                provider="embedding",
                operation="aembed_query",
                details={"reason": str(e)},
            ) from e
        return list(vector)
