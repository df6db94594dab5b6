"""
Token stream relay.

Forwards model text deltas to the caller as encoded bytes, one delta at a
time. Nothing is read ahead: the upstream is only advanced when the
consumer asks for the next item, so a slow client suspends the model
stream. An upstream error surfaces as `StreamAborted` after everything
received so far has been yielded, which lets callers tell an aborted answer
from a complete one.

Dependencies: docchat.core.exceptions
System role: Outbound answer streaming
"""

import logging
from collections.abc import AsyncIterator

from docchat.core.exceptions import StreamAborted

logger = logging.getLogger(__name__)


async def relay_stream(
    deltas: AsyncIterator[str],
    encoding: str = "utf-8",
) -> AsyncIterator[bytes]:
    """
    Relay non-empty deltas in arrival order.

    The upstream iterator is closed when the relay finishes, fails, or is
    closed/cancelled by its consumer.

    Args:
        deltas: Upstream text deltas (typically a completion stream)
        encoding: Output byte encoding

    Yields:
        bytes: One encoded delta per non-empty upstream delta

    Raises:
        StreamAborted: When the upstream raises before completing
    """
    forwarded = 0
    try:
        try:
            async for delta in deltas:
                if not delta:
                    continue
                forwarded += 1
                yield delta.encode(encoding)
        except Exception as e:
            logger.error(
                f"{__name__}:relay_stream - Upstream failed after {forwarded} deltas",
                extra={"forwarded_deltas": forwarded, "error_type": type(e).__name__},
            )
            raise StreamAborted(
                "Answer stream aborted",
                details={"forwarded_deltas": forwarded, "reason": str(e)},
            ) from e
    finally:
        aclose = getattr(deltas, "aclose", None)
        if aclose is not None:
            await aclose()
