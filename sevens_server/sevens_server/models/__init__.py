"""Game models."""

from .card import Board, Card, Suit, create_full_deck, sort_hand
from .game_state import (
    EliminateAction,
    GameState,
    LastAction,
    PassAction,
    PlayAction,
    PlayerView,
    PublicPlayer,
    describe_action,
)
from .player import Player, PlayerKind, PlayerSetup

__all__ = [
    "Board",
    "Card",
    "Suit",
    "create_full_deck",
    "sort_hand",
    "Player",
    "PlayerKind",
    "PlayerSetup",
    "GameState",
    "LastAction",
    "PlayAction",
    "PassAction",
    "EliminateAction",
    "PlayerView",
    "PublicPlayer",
    "describe_action",
]
