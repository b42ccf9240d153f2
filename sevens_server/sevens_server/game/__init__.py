"""Game logic."""

from .coordinator import SessionAborted, TurnCoordinator
from .cpu import choose_card
from .engine import SevensGame

__all__ = [
    "SessionAborted",
    "SevensGame",
    "TurnCoordinator",
    "choose_card",
]
