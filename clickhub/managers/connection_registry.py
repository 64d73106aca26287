import threading
from typing import Callable, Protocol

from clickhub.exceptions import DuplicateConnectionError
from clickhub.logging import logger

ConnectionId = str


class Sink(Protocol):
    """Non-blocking, ordered write endpoint into a connection's outbound queue."""

    def put_nowait(self, frame: str) -> None: ...


class ConnectionRegistry:
    """
    Registry of live WebSocket connections.

    Maps connection ids to the sink feeding each connection's outbound queue.
    An entry exists exactly while its session is registered and not yet torn
    down. Every operation runs under one lock that is only held for
    dictionary work, so no caller ever waits on network I/O here.
    """

    def __init__(self) -> None:
        """
        Initializes a new instance of the `ConnectionRegistry` class.

        The `connections` attribute is a dict mapping connection ids to sinks.
        """
        self._lock = threading.Lock()
        self.connections: dict[ConnectionId, Sink] = {}

    def register(self, connection_id: ConnectionId, sink: Sink) -> None:
        """
        Adds a connection. It is visible to broadcasts immediately.

        Args:
            connection_id: Unique identifier for this connection.
            sink: Outbound queue of the connection.

        Raises:
            DuplicateConnectionError: If the id is already registered.
        """
        with self._lock:
            if connection_id in self.connections:
                raise DuplicateConnectionError(
                    f"Connection {connection_id} is already registered"
                )
            self.connections[connection_id] = sink

        logger.debug(f"Connection {connection_id} registered")

    def deregister(self, connection_id: ConnectionId) -> Sink | None:
        """
        Removes a connection. Unknown ids are ignored.

        Args:
            connection_id: The id of the connection to remove.

        Returns:
            The removed sink, or None if the id was not registered.
        """
        with self._lock:
            sink = self.connections.pop(connection_id, None)

        if sink is not None:
            logger.debug(f"Connection {connection_id} deregistered")
        return sink

    def lookup(self, connection_id: ConnectionId) -> Sink | None:
        """
        Get the sink of a registered connection.

        Args:
            connection_id: The id to look up.

        Returns:
            Sink if registered, None otherwise.
        """
        with self._lock:
            return self.connections.get(connection_id)

    def for_each(self, visitor: Callable[[ConnectionId, Sink], None]) -> None:
        """
        Calls `visitor` for every registered connection.

        Iterates over a snapshot taken under the lock, so the visitor may run
        while other sessions register or deregister. Order is unspecified.

        Args:
            visitor: Callable receiving (connection_id, sink).
        """
        with self._lock:
            snapshot = list(self.connections.items())

        for connection_id, sink in snapshot:
            visitor(connection_id, sink)

    def connection_ids(self) -> list[ConnectionId]:
        with self._lock:
            return list(self.connections)

    def __len__(self) -> int:
        with self._lock:
            return len(self.connections)

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self.connections


connection_registry = ConnectionRegistry()
