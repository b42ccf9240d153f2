"""Formatters for game log output."""

from sevens_server.models.card import Board, Card, Suit, rank_name

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}


def format_card(card: Card) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.

    Returns:
        Formatted string (e.g., "D7" for the 7 of diamonds, "SQ" for the
        queen of spades).
    """
    return f"{SUIT_CODES[card.suit]}{rank_name(card.rank)}"


def format_cards(cards: list[Card]) -> str:
    """Format cards to a comma-separated string.

    Returns:
        Comma-separated card codes (e.g., "S3,S4,H7"). Empty string if
        no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_hands(hands: list[list[Card]]) -> dict[str, str]:
    """Format all players' hands to dict.

    Args:
        hands: List of hands indexed by seat.

    Returns:
        Dict mapping seat (as string) to formatted hand string.
    """
    return {str(i): format_cards(h) for i, h in enumerate(hands)}


def format_board(board: Board) -> dict[str, str]:
    """Format the board as suit code -> placed rank names."""
    return {
        SUIT_CODES[suit]: ",".join(rank_name(r) for r in board.placed_ranks(suit))
        for suit in Suit
    }
