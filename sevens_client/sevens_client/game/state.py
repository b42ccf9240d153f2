"""Client-side view of the match.

Mirrors the host's PlayerView. The client replaces its copy wholesale
on every state message and never edits it.
"""

from typing import Literal

from pydantic import BaseModel

SUITS = ["spades", "hearts", "diamonds", "clubs"]
SUIT_SYMBOLS = {"spades": "♠", "hearts": "♥", "diamonds": "♦", "clubs": "♣"}
RANK_NAMES = {1: "A", 11: "J", 12: "Q", 13: "K"}


class CardView(BaseModel, frozen=True):
    """A card as sent by the host."""

    suit: str
    rank: int

    def __str__(self) -> str:
        return f"{SUIT_SYMBOLS.get(self.suit, '?')}{RANK_NAMES.get(self.rank, str(self.rank))}"


class PlayerInfo(BaseModel):
    """Public info about one seat."""

    id: int
    name: str
    kind: str
    hand_count: int
    pass_count: int
    eliminated: bool
    rank: int | None = None


class ActionView(BaseModel):
    """Last action on the table."""

    kind: Literal["play", "pass", "eliminate"]
    seat: int
    suit: str | None = None
    rank: int | None = None

    def describe(self, players: list[PlayerInfo]) -> str:
        name = players[self.seat].name
        if self.kind == "play":
            return f"{name} played {CardView(suit=self.suit, rank=self.rank)}"
        if self.kind == "pass":
            return f"{name} passed"
        return f"{name} was eliminated"


class GameView(BaseModel):
    """The client's seat-scoped snapshot of the match."""

    board: dict[str, list[bool]]
    players: list[PlayerInfo]
    your_seat: int
    your_hand: list[CardView]
    playable_cards: list[CardView]
    current_seat: int
    is_your_turn: bool
    game_over: bool
    rankings: list[int]
    max_passes: int
    can_pass: bool  # Computed by the host from its pass limit
    last_action: ActionView | None = None

    @property
    def me(self) -> PlayerInfo:
        return self.players[self.your_seat]

    def can_play(self, suit: str, rank: int) -> bool:
        """Check if the host offered this card."""
        return CardView(suit=suit, rank=rank) in self.playable_cards
