"""
Fixed-window text chunker.

Splits raw text into consecutive, non-overlapping windows of at most
`size` characters, trims each window and drops the empty ones. Characters
are Python `str` code points, so a window never splits a code point.

Dependencies: docchat.models.chunk
System role: First stage of document ingestion
"""

from docchat.core.exceptions import InvalidArgumentError
from docchat.models.chunk import Chunk


def chunk_text(text: str, size: int, source_id: str = "") -> list[Chunk]:
    """
    Split text into trimmed fixed-size chunks.

    Ordinals are assigned after empty windows are dropped, so they always
    run 0..n-1.

    Args:
        text: Raw document text
        size: Maximum window length in characters
        source_id: Source the chunks belong to

    Returns:
        list[Chunk]: Chunks in document order

    Raises:
        InvalidArgumentError: When size is not a positive integer
    """
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise InvalidArgumentError(
            "Chunk size must be a positive integer",
            field="chunk_size",
            details={"value": size},
        )

    windows = (text[start:start + size].strip() for start in range(0, len(text), size))
    return [
        Chunk(source_id=source_id, ordinal=ordinal, text=window)
        for ordinal, window in enumerate(w for w in windows if w)
    ]
