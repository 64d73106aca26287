"""
Wire protocol for the click counter WebSocket.

Every frame is a JSON object tagged on its `type` field. The six message
kinds form a closed union; `decode_message` turns anything outside it into
a recoverable `MessageDecodeError`.
"""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, NonNegativeInt, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from clickhub.exceptions import MessageDecodeError


class MessageType(StrEnum):
    """
    Values of the `type` tag.

    Attributes:
        INIT: server → client, sent once after the handshake
        CLICK_RESPONSE: server → client, personal reply to a click
        GLOBAL_UPDATE: server → client, broadcast after someone else's click
        CLICK: client → server
        PING: client → server
        PONG: server → client, reply to ping
    """

    INIT = "init"
    CLICK_RESPONSE = "click_response"
    GLOBAL_UPDATE = "global_update"
    CLICK = "click"
    PING = "ping"
    PONG = "pong"


class InitMessage(BaseModel):
    type: Literal["init"] = "init"
    total_clicks: NonNegativeInt


class ClickResponseMessage(BaseModel):
    type: Literal["click_response"] = "click_response"
    client_clicks: NonNegativeInt
    total_clicks: NonNegativeInt
    timestamp: str

    @classmethod
    def now(
        cls, client_clicks: int, total_clicks: int
    ) -> "ClickResponseMessage":
        """Build a response stamped with the current UTC time (RFC 3339)."""
        return cls(
            client_clicks=client_clicks,
            total_clicks=total_clicks,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )


class GlobalUpdateMessage(BaseModel):
    type: Literal["global_update"] = "global_update"
    total_clicks: NonNegativeInt


class ClickMessage(BaseModel):
    type: Literal["click"] = "click"


class PingMessage(BaseModel):
    type: Literal["ping"] = "ping"


class PongMessage(BaseModel):
    type: Literal["pong"] = "pong"


WsMessage = Annotated[
    InitMessage
    | ClickResponseMessage
    | GlobalUpdateMessage
    | ClickMessage
    | PingMessage
    | PongMessage,
    Field(discriminator="type"),
]

ws_message_adapter: TypeAdapter[WsMessage] = TypeAdapter(WsMessage)

# Direction of each message kind, used by the CLI protocol table
CLIENT_MESSAGES = frozenset({MessageType.CLICK, MessageType.PING})
SERVER_MESSAGES = frozenset(MessageType) - CLIENT_MESSAGES


def decode_message(raw: str | bytes) -> WsMessage:
    """
    Parse one inbound frame.

    Args:
        raw: Text frame, or binary frame expected to hold UTF-8 JSON.

    Returns:
        The decoded message.

    Raises:
        MessageDecodeError: If the payload is not JSON, has no known `type`
            tag or fails field validation.
    """
    try:
        return ws_message_adapter.validate_json(raw)
    except (PydanticValidationError, UnicodeDecodeError, ValueError) as exc:
        raise MessageDecodeError(f"Undecodable frame: {exc}") from exc


def encode_message(message: WsMessage) -> str:
    """Serialize a message to its compact JSON text frame."""
    return message.model_dump_json()
