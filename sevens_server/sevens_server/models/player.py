"""Player model."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import Card, Suit


class PlayerKind(str, Enum):
    """Who controls a seat."""

    HUMAN = "human"
    COMPUTER = "computer"


class PlayerSetup(BaseModel):
    """Seat configuration supplied when a match starts."""

    name: str
    kind: PlayerKind = PlayerKind.COMPUTER


class Player(BaseModel):
    """Player state."""

    player_id: int = Field(ge=0, le=3)  # Seat, also the turn order
    name: str = "Player"
    kind: PlayerKind = PlayerKind.COMPUTER

    hand: list[Card] = Field(default_factory=list)
    pass_count: int = 0
    eliminated: bool = False
    rank: int | None = None  # Final rank 1..4, None while playing

    @property
    def is_active(self) -> bool:
        """Check if the player still takes turns."""
        return not self.eliminated and self.rank is None

    @property
    def is_computer(self) -> bool:
        return self.kind == PlayerKind.COMPUTER

    def has_card(self, suit: Suit, rank: int) -> bool:
        """Check if the card is in hand."""
        return any(c.suit == suit and c.rank == rank for c in self.hand)

    def take_card(self, suit: Suit, rank: int) -> Card | None:
        """Remove and return a card from hand, or None if not held."""
        for i, card in enumerate(self.hand):
            if card.suit == suit and card.rank == rank:
                return self.hand.pop(i)
        return None

    def cards_of_suit(self, suit: Suit) -> int:
        """Count cards of a suit in hand."""
        return sum(1 for c in self.hand if c.suit == suit)

    def __str__(self) -> str:
        status = ""
        if self.rank is not None:
            status = f" (#{self.rank})"
        elif self.eliminated:
            status = " (out)"
        elif self.pass_count:
            status = f" (pass {self.pass_count})"
        return f"Player{self.player_id}[{self.name}]{status}"

    def __repr__(self) -> str:
        return (
            f"Player(id={self.player_id}, name={self.name!r}, "
            f"kind={self.kind.value}, cards={len(self.hand)}, rank={self.rank})"
        )
