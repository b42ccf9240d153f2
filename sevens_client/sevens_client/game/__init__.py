"""Client-side match view."""

from .state import CardView, GameView, PlayerInfo

__all__ = ["CardView", "GameView", "PlayerInfo"]
