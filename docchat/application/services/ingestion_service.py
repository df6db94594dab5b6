"""
Ingestion service.

Entry points for turning uploads (raw text, PDFs, images) into searchable
sources. Text extraction happens here; chunking, embedding and persistence
are delegated to the core `IngestionCoordinator`.

Dependencies: docchat.core, docchat.boundary.providers, docchat.configs
System role: Document ingestion use case orchestration
"""

import logging
from collections.abc import Sequence

from docchat.boundary.providers.pdf_text import extract_pdf_text
from docchat.configs.ingestion import IngestionSettings
from docchat.core.exceptions import InvalidArgumentError
from docchat.core.ingestion_coordinator import IngestionCoordinator
from docchat.core.interfaces import OcrProvider
from docchat.models.document import OcrResponse
from docchat.models.ingestion import IngestionResult, SourceCreate

logger = logging.getLogger(__name__)


class IngestionService:
    """Document ingestion orchestrator."""

    def __init__(
        self,
        coordinator: IngestionCoordinator,
        settings: IngestionSettings,
        ocr: OcrProvider | None = None,
    ) -> None:
        """
        Initialize ingestion service.

        Args:
            coordinator: Core ingestion saga
            settings: Chunk sizes and embedding schedule
            ocr: OCR provider, required only for image uploads
        """
        self.coordinator = coordinator
        self.settings = settings
        self.ocr = ocr

    async def ingest_text(
        self,
        name: str,
        text: str,
        mapping_keys: Sequence[str] = (),
        chunk_size: int | None = None,
        auth_token: str | None = None,
        origin: str | None = None,
    ) -> IngestionResult:
        """
        Ingest raw text as a new source.

        Args:
            name: Source display name
            text: Document text
            mapping_keys: Phone numbers to map to the new source
            chunk_size: Override the configured chunk size

        Returns:
            IngestionResult: Committed source id and chunk count
        """
        if not name or not name.strip():
            raise InvalidArgumentError("Source name is required", field="name")

        return await self.coordinator.ingest(
            SourceCreate(name=name, auth_token=auth_token, origin=origin),
            text,
            chunk_size=chunk_size or self.settings.chunk_size,
            batch_size=self.settings.batch_size,
            inter_batch_delay=self.settings.inter_batch_delay_seconds,
            mapping_keys=mapping_keys,
        )

    async def extract_pdf(self, filename: str, data: bytes) -> str:
        return await extract_pdf_text(data, filename)

    async def ingest_pdf(
        self,
        filename: str,
        data: bytes,
        mapping_keys: Sequence[str] = (),
    ) -> tuple[str, IngestionResult]:
        """
        Extract a PDF's text and ingest it.

        Returns:
            tuple: (extracted text, ingestion result)
        """
        text = await self.extract_pdf(filename, data)
        result = await self.ingest_text(filename, text, mapping_keys)
        return text, result

    async def ingest_image(
        self,
        filename: str,
        data: bytes,
        mime_type: str | None = None,
        store: bool = False,
        mapping_keys: Sequence[str] = (),
        auth_token: str | None = None,
        origin: str | None = None,
    ) -> OcrResponse:
        """
        OCR an image and optionally store the text as a source.

        Storing requires the caller's auth token and origin, which are
        recorded on the source. Empty OCR text is never stored.

        Args:
            filename: Original image filename
            data: Image bytes
            mime_type: Image MIME type (defaults to image/png)
            store: Persist the OCR text as a searchable source
            mapping_keys: Phone numbers to map when storing
            auth_token: Caller token, required when storing
            origin: Caller origin, required when storing

        Returns:
            OcrResponse: Extracted text plus storage outcome

        Raises:
            InvalidArgumentError: Missing image, or missing auth_token/origin when storing
            ProviderError: OCR failed
        """
        if not data:
            raise InvalidArgumentError("No image file provided", field="image")
        if store and (not auth_token or not origin):
            raise InvalidArgumentError(
                "auth_token and origin are required when storing OCR results",
                field="auth_token" if not auth_token else "origin",
            )
        if self.ocr is None:
            raise InvalidArgumentError("OCR provider is not configured", field="image")

        text = await self.ocr.extract_text(data, mime_type or "image/png")
        response = OcrResponse(text=text, model=self.ocr.model_name)

        if store and text.strip():
            result = await self.ingest_text(
                f"OCR_{filename}",
                text,
                mapping_keys,
                chunk_size=self.settings.ocr_chunk_size,
                auth_token=auth_token,
                origin=origin,
            )
            response.stored = True
            response.source_id = result.source_id
            response.chunks = result.chunk_count
            response.phone_numbers_mapped = result.mapped_count
            logger.info(
                f"{__name__}:ingest_image - OCR text stored",
                extra={"source_id": result.source_id, "chunk_count": result.chunk_count},
            )

        return response
