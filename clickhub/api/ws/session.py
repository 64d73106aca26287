"""
Lifecycle of one click counter connection.

A session registers its outbound queue, greets the client with the current
total, then runs two duties side by side:

- inbound: read frames, apply clicks, answer pings
- outbound: drain the queue onto the socket

The duties share one task group. Whichever finishes first (peer closed, read
or write failure, queue closed) cancels the other, and teardown removes the
connection from the registry and the counters exactly once.
"""

import asyncio
import uuid
from enum import StrEnum

from clickhub.api.ws.channel import MessageChannel
from clickhub.api.ws.outbound import OutboundQueue
from clickhub.constants import DROPPED_FRAME_LOG_PREVIEW
from clickhub.exceptions import ChannelClosedError, MessageDecodeError
from clickhub.logging import logger, set_log_context
from clickhub.managers.broadcaster import Broadcaster
from clickhub.managers.connection_registry import (
    ConnectionId,
    ConnectionRegistry,
)
from clickhub.managers.counter_state import CounterState
from clickhub.schemas.messages import (
    ClickMessage,
    ClickResponseMessage,
    GlobalUpdateMessage,
    InitMessage,
    PingMessage,
    PongMessage,
    WsMessage,
    decode_message,
)
from clickhub.utils.metrics import (
    clicks_total,
    ws_connections_active,
    ws_messages_dropped_total,
    ws_messages_received_total,
    ws_messages_sent_total,
)


class _DutyFinished(Exception):
    """Raised by a duty that ended normally, to stop its sibling."""


class SessionState(StrEnum):
    CONNECTING = "connecting"
    ESTABLISHED = "established"
    CLOSING = "closing"
    CLOSED = "closed"


class ClickSession:
    """
    One connection's click counter session.

    The session holds only its connection id as a key into the shared
    registry and counters; it never keeps a private copy of shared data.
    """

    def __init__(
        self,
        channel: MessageChannel,
        registry: ConnectionRegistry,
        counters: CounterState,
        broadcaster: Broadcaster,
        connection_id: ConnectionId | None = None,
        peer: str = "unknown",
    ) -> None:
        self.channel = channel
        self.registry = registry
        self.counters = counters
        self.broadcaster = broadcaster
        self.connection_id: ConnectionId = connection_id or str(uuid.uuid4())
        self.peer = peer
        self.outbound = OutboundQueue()
        self.state = SessionState.CONNECTING

    async def run(self) -> None:
        """
        Run the session until either duty ends, then tear it down.

        The handshake must already be complete. Returns once the session is
        CLOSED; cancelling the calling task also ends in CLOSED.
        """
        set_log_context(connection_id=self.connection_id, peer=self.peer)
        self.establish()

        try:
            async with asyncio.TaskGroup() as duties:
                duties.create_task(
                    self._inbound_duty(), name=f"inbound:{self.connection_id}"
                )
                duties.create_task(
                    self._outbound_duty(),
                    name=f"outbound:{self.connection_id}",
                )
        except* _DutyFinished:
            pass
        except* Exception as group:
            for error in group.exceptions:
                logger.warning(
                    f"Session ended with transport error: {error!r}"
                )
        finally:
            if self.state is SessionState.ESTABLISHED:
                self.state = SessionState.CLOSING
            self.close()

    def establish(self) -> None:
        """Register the outbound queue and enqueue the init message."""
        self.registry.register(self.connection_id, self.outbound)
        self.state = SessionState.ESTABLISHED
        ws_connections_active.inc()

        self.broadcaster.send_to(
            self.connection_id,
            InitMessage(total_clicks=self.counters.current_total()),
        )
        logger.info(f"WebSocket connection established: {self.peer}")

    def handle_message(self, message: WsMessage) -> None:
        """
        Apply one decoded inbound message.

        Only `click` and `ping` have an effect; the server-to-client kinds
        are ignored when a client sends them.
        """
        match message:
            case ClickMessage():
                self._handle_click()
            case PingMessage():
                self.broadcaster.send_to(self.connection_id, PongMessage())
            case _:
                ws_messages_dropped_total.labels(reason="ignored").inc()
                logger.debug(f"Ignoring inbound {message.type} message")

    def _handle_click(self) -> None:
        # Counter lock is released before the registry lock is taken
        client_clicks, total_clicks = self.counters.record_click(
            self.connection_id
        )
        clicks_total.inc()

        self.broadcaster.send_to(
            self.connection_id,
            ClickResponseMessage.now(client_clicks, total_clicks),
        )
        self.broadcaster.broadcast_except(
            self.connection_id, GlobalUpdateMessage(total_clicks=total_clicks)
        )

    async def _inbound_duty(self) -> None:
        while True:
            try:
                raw = await self.channel.receive()
            except ChannelClosedError as e:
                logger.debug(f"Inbound stream ended: {e}")
                raise _DutyFinished from e

            ws_messages_received_total.inc()
            try:
                message = decode_message(raw)
            except MessageDecodeError:
                ws_messages_dropped_total.labels(reason="malformed").inc()
                logger.debug(
                    f"Dropping malformed frame: {raw[:DROPPED_FRAME_LOG_PREVIEW]!r}"
                )
                continue

            self.handle_message(message)

    async def _outbound_duty(self) -> None:
        while True:
            frame = await self.outbound.get()
            if frame is None:
                logger.debug("Outbound queue closed")
                raise _DutyFinished
            await self.channel.send(frame)
            ws_messages_sent_total.inc()

    def close(self) -> None:
        """Enter CLOSED: stop the queue and purge shared state. Idempotent."""
        if self.state is SessionState.CLOSED:
            return
        was_registered = self.state is not SessionState.CONNECTING
        self.state = SessionState.CLOSED

        self.outbound.close()
        self.registry.deregister(self.connection_id)
        self.counters.forget(self.connection_id)
        if was_registered:
            ws_connections_active.dec()

        logger.info(f"{self.peer} disconnected")
