"""Network communication."""

from .connection import GameConnection
from .protocol import ProtocolError

__all__ = [
    "GameConnection",
    "ProtocolError",
]
