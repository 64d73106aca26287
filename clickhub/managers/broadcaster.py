from clickhub.exceptions import SinkClosedError
from clickhub.logging import logger
from clickhub.managers.connection_registry import (
    ConnectionId,
    ConnectionRegistry,
    Sink,
    connection_registry,
)
from clickhub.schemas.messages import WsMessage, encode_message
from clickhub.utils.metrics import broadcast_delivery_failures_total


class Broadcaster:
    """
    Delivers server messages to connections found in the registry.

    Delivery means enqueueing on the recipient's outbound queue; the
    recipient's own session writes it to the socket. Enqueueing never
    blocks, so one slow client cannot hold up the others.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    def send_to(self, connection_id: ConnectionId, message: WsMessage) -> bool:
        """
        Enqueue a personal message for one connection.

        Args:
            connection_id: Recipient.
            message: Message to deliver.

        Returns:
            True if enqueued, False if the recipient is gone or closing.
        """
        sink = self.registry.lookup(connection_id)
        if sink is None:
            logger.debug(
                f"Dropping {message.type} for unregistered connection {connection_id}"
            )
            return False

        try:
            sink.put_nowait(encode_message(message))
        except SinkClosedError:
            logger.debug(
                f"Dropping {message.type} for closing connection {connection_id}"
            )
            return False
        return True

    def broadcast_except(
        self, excluded_id: ConnectionId | None, message: WsMessage
    ) -> int:
        """
        Enqueue a message for every registered connection but one.

        The message is serialized once. A recipient whose queue is already
        closed is skipped; its own session removes it from the registry.

        Args:
            excluded_id: Connection that must not receive the message, or
                None to reach everyone.
            message: Message to deliver.

        Returns:
            Number of connections the message was enqueued for.
        """
        frame = encode_message(message)
        delivered = 0

        def deliver(connection_id: ConnectionId, sink: Sink) -> None:
            nonlocal delivered
            if connection_id == excluded_id:
                return
            try:
                sink.put_nowait(frame)
            except SinkClosedError as e:
                logger.warning(
                    f"Failed to enqueue {message.type} for connection "
                    f"{connection_id}: {e}"
                )
                broadcast_delivery_failures_total.inc()
                return
            delivered += 1

        self.registry.for_each(deliver)
        return delivered


broadcaster = Broadcaster(connection_registry)
