"""Message definitions and framing (client side).

Each frame is a 4-byte length in network byte order (big-endian)
followed by a UTF-8 JSON object with a "type" field.

Sent: PLAY_CARD {suit, rank}, PASS {}, RESTART_REQUEST {}
Received: GAME_STATE {state}, GAME_OVER {state}, RESTART {}
"""

import struct
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from sevens_client.game.state import GameView

HEADER_BYTES = 4
MAX_FRAME_BYTES = 1 << 20


class ProtocolError(Exception):
    """Raised for frames or messages that cannot be decoded."""


class PlayCardMessage(BaseModel):
    type: Literal["PLAY_CARD"] = "PLAY_CARD"
    suit: str
    rank: int


class PassMessage(BaseModel):
    type: Literal["PASS"] = "PASS"


class RestartRequestMessage(BaseModel):
    type: Literal["RESTART_REQUEST"] = "RESTART_REQUEST"


class GameStateMessage(BaseModel):
    type: Literal["GAME_STATE"] = "GAME_STATE"
    state: GameView


class GameOverMessage(BaseModel):
    type: Literal["GAME_OVER"] = "GAME_OVER"
    state: GameView


class RestartMessage(BaseModel):
    type: Literal["RESTART"] = "RESTART"


HostMessage = Annotated[
    Union[GameStateMessage, GameOverMessage, RestartMessage],
    Field(discriminator="type"),
]

_host_adapter: TypeAdapter = TypeAdapter(HostMessage)


def encode_frame(message: BaseModel) -> bytes:
    """Serialize a message into a length-prefixed frame."""
    body = message.model_dump_json().encode("utf-8")
    return struct.pack("!I", len(body)) + body


def frame_length(header: bytes) -> int:
    """Read the body length from a frame header."""
    length = struct.unpack("!I", header)[0]
    if length > MAX_FRAME_BYTES:
        raise ProtocolError(f"Frame too large: {length} bytes")
    return length


def decode_host_message(body: bytes):
    """Parse a message from the host.

    Raises:
        ProtocolError: If the body is not a known host message
    """
    try:
        return _host_adapter.validate_json(body)
    except ValidationError as e:
        raise ProtocolError(f"Invalid host message: {e.error_count()} error(s)") from e
