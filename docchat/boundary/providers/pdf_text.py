"""
PDF text extraction.

`PyPDFLoader` reads from a path, so the upload is written to a temporary
directory that is removed afterwards. Pages are joined by a blank line.

Dependencies: langchain_community (pypdf)
System role: PDF to text for ingestion
"""

import asyncio
import logging
import tempfile
from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from docchat.core.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)


def _load_pdf_text(data: bytes, filename: str) -> str:
    with tempfile.TemporaryDirectory(prefix="docchat-pdf-") as tmp_dir:
        path = Path(tmp_dir) / (Path(filename).name or "upload.pdf")
        path.write_bytes(data)
        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise InvalidArgumentError(
                "Could not read PDF",
                field="file",
                details={"filename": filename, "reason": str(e)},
            ) from e
    return "\n\n".join(page.page_content for page in pages if page.page_content)


async def extract_pdf_text(data: bytes, filename: str = "upload.pdf") -> str:
    """
    Extract the text of a PDF upload.

    Parsing runs in a worker thread.

    Args:
        data: Raw PDF bytes
        filename: Original filename

    Returns:
        str: Page texts joined by blank lines

    Raises:
        InvalidArgumentError: When the upload is empty or not a readable PDF
    """
    if not data:
        raise InvalidArgumentError("No file uploaded", field="file")
    text = await asyncio.to_thread(_load_pdf_text, data, filename)
    logger.info(
        f"{__name__}:extract_pdf_text - PDF parsed",
        extra={"pdf_filename": filename, "pdf_bytes": len(data), "text_len": len(text)},
    )
    return text
