"""
Document ingestion API endpoints.

Routes:
- POST /documents/text - Ingest raw text
- POST /documents/pdf - Extract PDF text, optionally ingest it

Dependencies: docchat.api.deps, docchat.application.services.ingestion_service
System role: Document upload HTTP API
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from docchat.api.deps import get_ingestion_service
from docchat.api.routers.form_utils import split_phone_numbers
from docchat.application.services import IngestionService
from docchat.models.document import IngestResponse, PdfExtractResponse, TextIngestRequest

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/text", response_model=IngestResponse)
async def ingest_text(
    request: TextIngestRequest,
    service: IngestionService = Depends(get_ingestion_service),
) -> IngestResponse:
    """Chunk, embed and store raw text as a new source."""
    result = await service.ingest_text(request.name, request.text, request.phone_numbers)
    return IngestResponse(source_id=result.source_id, chunks=result.chunk_count)


@router.post("/pdf", response_model=PdfExtractResponse)
async def upload_pdf(
    file: UploadFile = File(...),
    store: bool = Form(False),
    phone_numbers: str | None = Form(None),
    service: IngestionService = Depends(get_ingestion_service),
) -> PdfExtractResponse:
    """
    Extract a PDF's text.

    Args:
        file: PDF upload
        store: Also ingest the text as a searchable source
        phone_numbers: Comma-separated numbers to map when storing
        service: Injected IngestionService

    Returns:
        PdfExtractResponse: Extracted text, plus source id and chunk count when stored
    """
    data = await file.read()
    filename = file.filename or "upload.pdf"
    if not store:
        return PdfExtractResponse(text=await service.extract_pdf(filename, data))

    text, result = await service.ingest_pdf(filename, data, split_phone_numbers(phone_numbers))
    return PdfExtractResponse(text=text, source_id=result.source_id, chunks=result.chunk_count)
