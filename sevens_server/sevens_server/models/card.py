"""Card and Board models."""

from enum import Enum

from pydantic import BaseModel, Field

SEVEN = 7
MIN_RANK = 1
MAX_RANK = 13


class Suit(str, Enum):
    """Card suit (definition order is the hand/board order)."""

    SPADES = "spades"
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"


SUIT_ORDER: dict[Suit, int] = {suit: i for i, suit in enumerate(Suit)}

SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

# Rank 1 is the ace
RANK_NAMES = {
    1: "A",
    11: "J",
    12: "Q",
    13: "K",
}


def rank_name(rank: int) -> str:
    """Get display string for a rank (A, 2..10, J, Q, K)."""
    return RANK_NAMES.get(rank, str(rank))


class Card(BaseModel, frozen=True):
    """Single card representation."""

    suit: Suit
    rank: int = Field(ge=MIN_RANK, le=MAX_RANK)

    @property
    def is_seven(self) -> bool:
        """Check if this card opens its suit."""
        return self.rank == SEVEN

    def sort_key(self) -> tuple[int, int]:
        """Key for ordering cards by (suit order, rank ascending)."""
        return (SUIT_ORDER[self.suit], self.rank)

    def __str__(self) -> str:
        return f"{SUIT_SYMBOLS[self.suit]}{rank_name(self.rank)}"

    def __repr__(self) -> str:
        return str(self)


def sort_hand(cards: list[Card]) -> list[Card]:
    """Return cards sorted by suit order, then rank ascending."""
    return sorted(cards, key=Card.sort_key)


def create_full_deck() -> list[Card]:
    """Create the 52-card deck in suit/rank order."""
    return [
        Card(suit=suit, rank=rank)
        for suit in Suit
        for rank in range(MIN_RANK, MAX_RANK + 1)
    ]


class Board:
    """Placed-card indicators, one row per suit.

    Each row has 14 slots so ranks index directly; slot 0 is unused.
    Placement is monotonic within a match.
    """

    def __init__(self):
        """Initialize an empty board."""
        self._placed: dict[Suit, list[bool]] = {
            suit: [False] * (MAX_RANK + 1) for suit in Suit
        }

    def is_placed(self, suit: Suit, rank: int) -> bool:
        """Check if a card is on the board."""
        if not MIN_RANK <= rank <= MAX_RANK:
            return False
        return self._placed[suit][rank]

    def place(self, suit: Suit, rank: int) -> None:
        """Mark a card as placed."""
        if not MIN_RANK <= rank <= MAX_RANK:
            raise ValueError(f"Rank out of range: {rank}")
        self._placed[suit][rank] = True

    def placed_ranks(self, suit: Suit) -> list[int]:
        """Get the placed ranks of a suit in ascending order."""
        return [r for r in range(MIN_RANK, MAX_RANK + 1) if self._placed[suit][r]]

    def placed_count(self) -> int:
        """Get number of placed cards across all suits."""
        return sum(len(self.placed_ranks(suit)) for suit in Suit)

    def to_dict(self) -> dict[Suit, list[bool]]:
        """Get a copy of the board as suit -> flags for ranks 1..13."""
        return {suit: list(self._placed[suit][1:]) for suit in Suit}

    def __str__(self) -> str:
        rows = []
        for suit in Suit:
            cells = " ".join(
                f"{rank_name(r):>2}" if self._placed[suit][r] else " ."
                for r in range(MIN_RANK, MAX_RANK + 1)
            )
            rows.append(f"{SUIT_SYMBOLS[suit]} {cells}")
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"Board(placed={self.placed_count()})"
