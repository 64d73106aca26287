"""Per-connection outbound frame queue."""

import asyncio

from clickhub.exceptions import SinkClosedError


class OutboundQueue:
    """
    Unbounded FIFO of serialized frames waiting to be written to one client.

    Producers (the session itself and the broadcast dispatcher) enqueue with
    `put_nowait`, which never blocks: a slow client makes its own queue grow
    instead of stalling the sender. The session's outbound duty is the only
    consumer.
    """

    def __init__(self) -> None:
        # None is the end-of-stream marker pushed by close()
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def qsize(self) -> int:
        """Number of frames (and end marker, if closed) still queued."""
        return self._queue.qsize()

    def put_nowait(self, frame: str) -> None:
        """
        Enqueue a frame without waiting.

        Args:
            frame: Serialized text frame.

        Raises:
            SinkClosedError: If the queue was already closed.
        """
        if self._closed:
            raise SinkClosedError("Outbound queue is closed")
        self._queue.put_nowait(frame)

    def close(self) -> None:
        """Stop accepting frames. Frames already queued are still delivered."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(None)

    async def get(self) -> str | None:
        """
        Wait for the next frame.

        Returns:
            The next frame, or None once the queue is closed and drained.
        """
        frame = await self._queue.get()
        if frame is None:
            # Keep the marker so later calls also see end-of-stream
            self._queue.put_nowait(None)
        return frame
