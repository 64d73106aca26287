import threading
from dataclasses import dataclass, field

from clickhub.managers.connection_registry import ConnectionId


@dataclass(frozen=True)
class CounterSnapshot:
    total_clicks: int
    client_clicks: dict[ConnectionId, int] = field(default_factory=dict)


class CounterState:
    """
    Click counters shared by every session.

    `total_clicks` only ever grows during the process lifetime.
    `client_clicks` holds a count per connection, created on its first
    click and dropped when it disconnects, so the total is generally larger
    than the sum of the per-client counts.

    Each public method is one critical section; callers never see a click
    half applied.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_clicks = 0
        self._client_clicks: dict[ConnectionId, int] = {}

    def record_click(self, connection_id: ConnectionId) -> tuple[int, int]:
        """
        Count one click for a connection.

        Args:
            connection_id: The clicking connection.

        Returns:
            (client_clicks, total_clicks) after the increment.
        """
        with self._lock:
            self._total_clicks += 1
            client_clicks = self._client_clicks.get(connection_id, 0) + 1
            self._client_clicks[connection_id] = client_clicks
            return client_clicks, self._total_clicks

    def current_total(self) -> int:
        with self._lock:
            return self._total_clicks

    def client_count(self, connection_id: ConnectionId) -> int:
        with self._lock:
            return self._client_clicks.get(connection_id, 0)

    def forget(self, connection_id: ConnectionId) -> None:
        """Drop a connection's count; the total is left untouched."""
        with self._lock:
            self._client_clicks.pop(connection_id, None)

    def snapshot(self) -> CounterSnapshot:
        with self._lock:
            return CounterSnapshot(
                total_clicks=self._total_clicks,
                client_clicks=dict(self._client_clicks),
            )


counter_state = CounterState()
