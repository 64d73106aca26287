from fastapi import APIRouter, WebSocket
from starlette.websockets import WebSocketDisconnect

from clickhub.api.ws.channel import StarletteChannel
from clickhub.api.ws.session import ClickSession
from clickhub.constants import WS_CLICKS_PATH
from clickhub.logging import logger
from clickhub.managers.broadcaster import broadcaster
from clickhub.managers.connection_registry import connection_registry
from clickhub.managers.counter_state import counter_state
from clickhub.utils.metrics import ws_connections_total

router = APIRouter()


def format_peer(websocket: WebSocket) -> str:
    """Remote address of the connection as host:port."""
    client = websocket.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"


@router.websocket(WS_CLICKS_PATH)
async def clicks(websocket: WebSocket) -> None:
    """
    WebSocket endpoint for the shared click counter.

    Completes the handshake, then hands the connection to a `ClickSession`
    bound to the process-wide registry, counters and broadcaster. The
    session owns reading and writing from there on.

    A failed handshake abandons this connection attempt only; nothing is
    registered for it.
    """
    peer = format_peer(websocket)
    logger.info(f"Incoming connection from: {peer}")

    try:
        await websocket.accept()
    except (WebSocketDisconnect, RuntimeError, OSError) as exc:
        logger.warning(f"WebSocket handshake with {peer} failed: {exc!r}")
        ws_connections_total.labels(status="handshake_failed").inc()
        return

    ws_connections_total.labels(status="accepted").inc()
    session = ClickSession(
        StarletteChannel(websocket),
        registry=connection_registry,
        counters=counter_state,
        broadcaster=broadcaster,
        peer=peer,
    )
    await session.run()
