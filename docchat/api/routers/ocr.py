"""
OCR API endpoints.

Routes:
- POST /ocr - Extract text from an image, optionally store it as a source

Dependencies: docchat.api.deps, docchat.application.services.ingestion_service
System role: Image OCR HTTP API
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile

from docchat.api.deps import get_ingestion_service
from docchat.api.routers.form_utils import split_phone_numbers
from docchat.application.services import IngestionService
from docchat.models.document import OcrResponse

router = APIRouter(tags=["ocr"])


@router.post("/ocr", response_model=OcrResponse)
async def ocr_image(
    image: UploadFile = File(...),
    store: bool = Form(False),
    phone_numbers: str | None = Form(None),
    auth_token: str | None = Form(None),
    origin: str | None = Form(None),
    service: IngestionService = Depends(get_ingestion_service),
) -> OcrResponse:
    """
    Run OCR over an uploaded image.

    With `store=true` the text is chunked (OCR chunk size), embedded and
    saved as `OCR_<filename>`; `auth_token` and `origin` are then required.
    """
    data = await image.read()
    return await service.ingest_image(
        filename=image.filename or "image",
        data=data,
        mime_type=image.content_type,
        store=store,
        mapping_keys=split_phone_numbers(phone_numbers),
        auth_token=auth_token,
        origin=origin,
    )
