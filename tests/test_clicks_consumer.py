"""Tests for the click counter WebSocket endpoint."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client import REGISTRY
from starlette.datastructures import Address
from starlette.websockets import WebSocketDisconnect

from clickhub.api.ws.consumers.clicks import clicks, format_peer


def handshake_failures() -> float:
    return (
        REGISTRY.get_sample_value(
            "ws_connections_total", {"status": "handshake_failed"}
        )
        or 0.0
    )


def make_websocket(accept_error=None):
    websocket = MagicMock()
    websocket.client = Address("10.0.0.5", 50312)
    websocket.accept = AsyncMock(side_effect=accept_error)
    websocket.receive = AsyncMock()
    websocket.send_text = AsyncMock()
    return websocket


class TestHandshakeFailure:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            RuntimeError("handshake rejected"),
            OSError("connection reset"),
            WebSocketDisconnect(code=1006),
        ],
    )
    async def test_failed_accept_registers_nothing(self, hub, error):
        websocket = make_websocket(accept_error=error)
        before = handshake_failures()

        await clicks(websocket)

        assert len(hub.registry) == 0
        assert hub.counters.snapshot().client_clicks == {}
        assert handshake_failures() == before + 1
        websocket.receive.assert_not_awaited()
        websocket.send_text.assert_not_awaited()


class TestFormatPeer:
    def test_host_and_port(self):
        assert format_peer(make_websocket()) == "10.0.0.5:50312"

    def test_unknown_client(self):
        websocket = make_websocket()
        websocket.client = None

        assert format_peer(websocket) == "unknown"
