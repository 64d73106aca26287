"""Message-framed duplex channel seen by a click session."""

from typing import Protocol

from starlette.websockets import WebSocket

from clickhub.exceptions import ChannelClosedError


class MessageChannel(Protocol):
    """
    Upgraded connection as the session uses it.

    `receive` returns the payload of the next data frame and raises
    `ChannelClosedError` once the peer is gone. `send` writes one text frame.
    Any other exception from either method is a transport failure.
    """

    async def receive(self) -> str | bytes: ...

    async def send(self, frame: str) -> None: ...


class StarletteChannel:
    """Adapts a Starlette WebSocket (already accepted) to `MessageChannel`."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    async def receive(self) -> str | bytes:
        while True:
            message = await self.websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise ChannelClosedError(
                    f"Peer closed with code {message.get('code')}"
                )
            if message["type"] != "websocket.receive":
                continue
            if message.get("text") is not None:
                return message["text"]
            if message.get("bytes") is not None:
                return message["bytes"]

    async def send(self, frame: str) -> None:
        await self.websocket.send_text(frame)
