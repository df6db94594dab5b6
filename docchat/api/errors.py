"""
HTTP error mapping.

Translates typed core errors into JSON error responses. Bodies carry the
message, a machine-readable `code` and the exception's details.

Dependencies: fastapi, docchat.core.exceptions
System role: Error boundary between the core and HTTP clients
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from docchat.core.exceptions import (
    DocChatException,
    EmbeddingFailure,
    InvalidArgumentError,
    MappingConflictError,
    NoDocumentsError,
    ProviderError,
    RetrievalFailure,
    StoreError,
    StreamAborted,
)
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

# Checked in order; first match wins
ERROR_STATUS: list[tuple[type[DocChatException], int, str]] = [
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST, "INVALID_ARGUMENT"),
    (NoDocumentsError, status.HTTP_404_NOT_FOUND, "NO_DOCUMENTS"),
    (MappingConflictError, status.HTTP_409_CONFLICT, "MAPPING_CONFLICT"),
    (EmbeddingFailure, status.HTTP_502_BAD_GATEWAY, "EMBEDDING_FAILED"),
    (RetrievalFailure, status.HTTP_502_BAD_GATEWAY, "RETRIEVAL_FAILED"),
    (ProviderError, status.HTTP_502_BAD_GATEWAY, "PROVIDER_ERROR"),
    (StoreError, status.HTTP_502_BAD_GATEWAY, "STORE_ERROR"),
    (StreamAborted, status.HTTP_502_BAD_GATEWAY, "STREAM_ABORTED"),
]


def status_for(exc: DocChatException) -> tuple[int, str]:
    for exc_type, status_code, code in ERROR_STATUS:
        if isinstance(exc, exc_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"


async def docchat_exception_handler(request: Request, exc: DocChatException) -> JSONResponse:
    status_code, code = status_for(exc)
    message = f"{request.method} {request.url.path} - {code}"
    if status_code < 500:
        log_with_context(logger, logging.WARNING, message, status_code=status_code, error_code=code, error=exc.message)
    else:
        log_exception_with_context(logger, message, exc, status_code=status_code, error_code=code)

    body = {"error": exc.message, "code": code, "details": exc.details}
    if isinstance(exc, NoDocumentsError):
        body["success"] = False
        body["no_documents"] = True
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DocChatException, docchat_exception_handler)
