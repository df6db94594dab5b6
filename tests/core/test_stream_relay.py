"""
Test suite for relay_stream().

System role: Verification of outbound answer streaming
"""

import pytest

from docchat.core.exceptions import ProviderError, StreamAborted
from docchat.core.stream_relay import relay_stream


class Upstream:
    """Async generator wrapper that records how far it was pulled and whether it was closed."""

    def __init__(self, deltas, fail_after: int | None = None) -> None:
        self.deltas = list(deltas)
        self.fail_after = fail_after
        self.pulled = 0
        self.closed = False

    async def stream(self):
        try:
            for index, delta in enumerate(self.deltas):
                if index == self.fail_after:
                    raise ProviderError("upstream reset", provider="completion")
                self.pulled += 1
                yield delta
        finally:
            self.closed = True


class TestRelayStream:
    """Test suite for relay_stream()."""

    async def test_forwards_deltas_in_order(self) -> None:
        # Arrange
        upstream = Upstream(["Hel", "lo"])

        # Act
        parts = [part async for part in relay_stream(upstream.stream())]

        # Assert
        assert parts == [b"Hel", b"lo"]
        assert upstream.closed

    async def test_empty_deltas_are_skipped(self) -> None:
        upstream = Upstream(["", "a", "", "b"])

        parts = [part async for part in relay_stream(upstream.stream())]

        assert parts == [b"a", b"b"]

    async def test_encodes_utf8(self) -> None:
        upstream = Upstream(["naïve ", "✓"])

        parts = [part async for part in relay_stream(upstream.stream())]

        assert b"".join(parts).decode("utf-8") == "naïve ✓"

    async def test_upstream_error_after_partial_output(self) -> None:
        """Test 'Hel' is delivered before the abort surfaces."""
        # Arrange
        upstream = Upstream(["Hel", "lo"], fail_after=1)
        received: list[bytes] = []

        # Act
        with pytest.raises(StreamAborted) as exc_info:
            async for part in relay_stream(upstream.stream()):
                received.append(part)

        # Assert
        assert received == [b"Hel"]
        assert exc_info.value.details["forwarded_deltas"] == 1
        assert isinstance(exc_info.value.__cause__, ProviderError)

    async def test_does_not_read_ahead(self) -> None:
        upstream = Upstream(["a", "b", "c"])
        relay = relay_stream(upstream.stream())

        first = await relay.__anext__()

        assert first == b"a"
        assert upstream.pulled == 1
        await relay.aclose()

    async def test_consumer_close_closes_upstream(self) -> None:
        # Arrange
        upstream = Upstream(["a", "b", "c"])
        relay = relay_stream(upstream.stream())
        await relay.__anext__()

        # Act
        await relay.aclose()

        # Assert
        assert upstream.closed
        assert upstream.pulled == 1

    async def test_empty_upstream_yields_nothing(self) -> None:
        upstream = Upstream([])

        assert [part async for part in relay_stream(upstream.stream())] == []
        assert upstream.closed
