"""
Mistral OCR provider.

Posts the image as a base64 data URL to the Mistral OCR REST endpoint and
pulls text out of whichever response shape comes back. The shape handling
lives in `extract_text_from_response` so it can be tested with fixtures.

Dependencies: httpx
System role: OcrProvider adapter
"""

import base64
import logging
from typing import Any

import httpx

from docchat.core.exceptions import ProviderError
from docchat.core.interfaces import OcrProvider

logger = logging.getLogger(__name__)


def _join_text_items(items: list[Any], separator: str) -> str:
    return separator.join(item.get("text") or "" for item in items if isinstance(item, dict))


def _page_text(page: Any) -> str:
    if not isinstance(page, dict):
        return ""
    if page.get("markdown"):
        return page["markdown"]
    if isinstance(page.get("lines"), list):
        return _join_text_items(page["lines"], "\n")
    if isinstance(page.get("paragraphs"), list):
        return _join_text_items(page["paragraphs"], "\n")
    return ""


def extract_text_from_response(payload: Any) -> str:
    """
    Extract plain text from an OCR response body.

    Recognised shapes, in order of precedence:
      - top-level non-empty `text` string
      - `pages[]`, each with `markdown`, else `lines[].text`, else
        `paragraphs[].text`; pages joined by a blank line
      - `blocks[].text`, joined by newlines

    Args:
        payload: Decoded JSON response

    Returns:
        str: Extracted text, empty when no shape matches
    """
    if not isinstance(payload, dict):
        return ""

    text = payload.get("text")
    if isinstance(text, str) and text:
        return text

    if isinstance(payload.get("pages"), list):
        return "\n\n".join(t for t in (_page_text(p) for p in payload["pages"]) if t)

    if isinstance(payload.get("blocks"), list):
        return "\n".join(
            b["text"] for b in payload["blocks"] if isinstance(b, dict) and b.get("text")
        )

    logger.warning(
        f"{__name__}:extract_text_from_response - No recognized text structure",
        extra={"response_keys": sorted(payload)},
    )
    return ""


class MistralOcrProvider(OcrProvider):
    """OCR over the Mistral REST API."""

    def __init__(
        self,
        api_key: str,
        model: str = "mistral-ocr-latest",
        base_url: str = "https://api.mistral.ai/v1",
        timeout: float = 120.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize OCR provider.

        Args:
            api_key: Mistral API key
            model: OCR model name
            base_url: API base URL
            timeout: Request timeout in seconds
            client: Pre-built HTTP client (tests pass one with a mock transport)
        """
        self.model_name = model
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def extract_text(self, image: bytes, mime_type: str) -> str:
        """
        Run OCR over one image.

        Raises:
            ProviderError: When the key is missing, the request fails or the
                response is not JSON
        """
        if not self._api_key:
            raise ProviderError("Mistral API key is not configured", provider="ocr", operation="ocr")

        data_url = f"data:{mime_type or 'image/png'};base64,{base64.b64encode(image).decode('ascii')}"
        body = {
            "model": self.model_name,
            "document": {"type": "image_url", "image_url": data_url},
        }

        try:
            response = await self._client.post(
                "/ocr",
                json=body,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                "OCR request rejected",
                provider="ocr",
                operation="ocr",
                details={"status_code": e.response.status_code},
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise ProviderError(
                "OCR request failed",
                provider="ocr",
                operation="ocr",
                details={"reason": str(e)},
            ) from e

        text = extract_text_from_response(payload)
        logger.info(
            f"{__name__}:extract_text - OCR completed",
            extra={"image_bytes": len(image), "mime_type": mime_type, "text_len": len(text)},
        )
        return text

    async def aclose(self) -> None:
        await self._client.aclose()
