"""Message definitions and framing.

Messages are JSON objects discriminated by their "type" field.

Client -> host:
- PLAY_CARD {suit, rank}
- PASS {}
- RESTART_REQUEST {}

Host -> client:
- GAME_STATE {state}: after every mutation that does not end the match
- GAME_OVER {state}: once, for the mutation that ends the match
- RESTART {}: a new match has been dealt

On the wire each message is a frame: 4-byte length in network byte
order (big-endian) followed by the UTF-8 encoded JSON body.
"""

import struct
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from sevens_server.models.card import MAX_RANK, MIN_RANK, Suit
from sevens_server.models.game_state import PlayerView

HEADER_BYTES = 4
MAX_FRAME_BYTES = 1 << 20


class ProtocolError(Exception):
    """Raised for frames or messages that cannot be decoded."""


# --- Client -> host ---


class PlayCardMessage(BaseModel):
    type: Literal["PLAY_CARD"] = "PLAY_CARD"
    suit: Suit
    rank: int = Field(ge=MIN_RANK, le=MAX_RANK)


class PassMessage(BaseModel):
    type: Literal["PASS"] = "PASS"


class RestartRequestMessage(BaseModel):
    type: Literal["RESTART_REQUEST"] = "RESTART_REQUEST"


ClientMessage = Annotated[
    Union[PlayCardMessage, PassMessage, RestartRequestMessage],
    Field(discriminator="type"),
]


# --- Host -> client ---


class GameStateMessage(BaseModel):
    type: Literal["GAME_STATE"] = "GAME_STATE"
    state: PlayerView


class GameOverMessage(BaseModel):
    type: Literal["GAME_OVER"] = "GAME_OVER"
    state: PlayerView


class RestartMessage(BaseModel):
    type: Literal["RESTART"] = "RESTART"


HostMessage = Annotated[
    Union[GameStateMessage, GameOverMessage, RestartMessage],
    Field(discriminator="type"),
]

_client_adapter: TypeAdapter = TypeAdapter(ClientMessage)
_host_adapter: TypeAdapter = TypeAdapter(HostMessage)


def state_message(view: PlayerView) -> GameStateMessage | GameOverMessage:
    """Wrap a view in GAME_OVER once the match has ended, else GAME_STATE."""
    if view.game_over:
        return GameOverMessage(state=view)
    return GameStateMessage(state=view)


def encode_message(message: BaseModel) -> bytes:
    """Serialize a message to a JSON body (no frame header)."""
    return message.model_dump_json().encode("utf-8")


def decode_client_message(data: bytes):
    """Parse a message sent by the client.

    Raises:
        ProtocolError: If the body is not a known client message
    """
    try:
        return _client_adapter.validate_json(data)
    except ValidationError as e:
        raise ProtocolError(f"Invalid client message: {e.error_count()} error(s)") from e


def decode_host_message(data: bytes):
    """Parse a message sent by the host.

    Raises:
        ProtocolError: If the body is not a known host message
    """
    try:
        return _host_adapter.validate_json(data)
    except ValidationError as e:
        raise ProtocolError(f"Invalid host message: {e.error_count()} error(s)") from e


def frame(body: bytes) -> bytes:
    """Prefix a body with its length header."""
    if len(body) > MAX_FRAME_BYTES:
        raise ProtocolError(f"Frame too large: {len(body)} bytes")
    return struct.pack("!I", len(body)) + body


def frame_length(header: bytes) -> int:
    """Read the body length from a frame header.

    Raises:
        ProtocolError: If the header is malformed or announces an oversized body
    """
    if len(header) != HEADER_BYTES:
        raise ProtocolError(f"Expected {HEADER_BYTES} header bytes, got {len(header)}")
    length = struct.unpack("!I", header)[0]
    if length > MAX_FRAME_BYTES:
        raise ProtocolError(f"Frame too large: {length} bytes")
    return length
