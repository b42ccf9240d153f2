"""Input events consumed by the turn coordinator."""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel


class InputSource(str, Enum):
    """Where an input event came from."""

    LOCAL = "local"  # Host console
    REMOTE = "remote"  # Client over the network
    CLOSED = "closed"  # Transport is gone


@dataclass(frozen=True)
class InputEvent:
    """One item on the coordinator's inbox."""

    source: InputSource
    message: BaseModel | None = None
    reason: str = ""

    @classmethod
    def local(cls, message: BaseModel) -> "InputEvent":
        return cls(InputSource.LOCAL, message)

    @classmethod
    def remote(cls, message: BaseModel) -> "InputEvent":
        return cls(InputSource.REMOTE, message)

    @classmethod
    def closed(cls, reason: str = "") -> "InputEvent":
        return cls(InputSource.CLOSED, reason=reason)
