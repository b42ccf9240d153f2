"""Network communication."""

from .events import InputEvent, InputSource
from .protocol import ProtocolError
from .server import HostServer

__all__ = [
    "InputEvent",
    "InputSource",
    "ProtocolError",
    "HostServer",
]
