"""Game state models."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .card import Board, Card, Suit
from .player import Player, PlayerKind


class PlayAction(BaseModel):
    """A card was placed by a seat."""

    kind: Literal["play"] = "play"
    seat: int
    suit: Suit
    rank: int


class PassAction(BaseModel):
    """A seat passed."""

    kind: Literal["pass"] = "pass"
    seat: int


class EliminateAction(BaseModel):
    """A seat was eliminated after running out of passes."""

    kind: Literal["eliminate"] = "eliminate"
    seat: int


LastAction = Annotated[
    Union[PlayAction, PassAction, EliminateAction],
    Field(discriminator="kind"),
]


class GameState(BaseModel):
    """Canonical state of one match (host only)."""

    model_config = {"arbitrary_types_allowed": True}

    board: Board = Field(default_factory=Board)
    players: list[Player] = Field(default_factory=list)

    current_seat: int = -1
    rankings: list[int] = Field(default_factory=list)  # Best finish first
    eliminated_order: list[int] = Field(default_factory=list)
    game_over: bool = False
    last_action: LastAction | None = None

    def active_seats(self) -> list[int]:
        """Get seats that still take turns."""
        return [p.player_id for p in self.players if p.is_active]

    def hand_total(self) -> int:
        """Get number of cards still held across all hands."""
        return sum(len(p.hand) for p in self.players)

    def __str__(self) -> str:
        if self.game_over:
            return f"Game over, rankings {self.rankings}"
        return f"Seat {self.current_seat}'s turn, {self.board.placed_count()} cards placed"


class PublicPlayer(BaseModel):
    """What every seat may know about a player."""

    id: int
    name: str
    kind: PlayerKind
    hand_count: int
    pass_count: int
    eliminated: bool
    rank: int | None


class PlayerView(BaseModel):
    """Read-only projection of GameState for one seat.

    Other players' hands are reduced to counts.
    """

    board: dict[Suit, list[bool]]
    players: list[PublicPlayer]
    your_seat: int
    your_hand: list[Card]
    playable_cards: list[Card]
    current_seat: int
    is_your_turn: bool
    game_over: bool
    rankings: list[int]
    max_passes: int
    can_pass: bool  # Your turn, match running, passes left
    last_action: LastAction | None = None


def describe_action(action: LastAction | None, players: list) -> str:
    """Describe an action for display, e.g. "CPU 1 played ♠8".

    Args:
        action: Action to describe (None gives an empty string)
        players: Players or PublicPlayers indexed by seat
    """
    if action is None:
        return ""
    name = players[action.seat].name
    if isinstance(action, PlayAction):
        return f"{name} played {Card(suit=action.suit, rank=action.rank)}"
    if isinstance(action, PassAction):
        return f"{name} passed"
    return f"{name} was eliminated"
