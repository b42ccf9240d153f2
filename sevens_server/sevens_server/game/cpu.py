"""Computer player heuristic.

Priority:
- Open a new suit with a 7 whenever possible
- With one pass left before elimination, play the card nearest 7
- Otherwise score each card: stay near 7, favour suits with many cards
  still in hand
"""

from sevens_server.models.card import SEVEN, Card
from sevens_server.models.player import Player

# Pass count at which the computer stops holding cards back
DANGER_PASS_COUNT = 2

DISTANCE_WEIGHT = 2


def distance_from_seven(card: Card) -> int:
    return abs(card.rank - SEVEN)


def score_card(card: Card, player: Player) -> int:
    """Score a playable card; higher is better."""
    return -DISTANCE_WEIGHT * distance_from_seven(card) + player.cards_of_suit(card.suit)


def choose_card(playable: list[Card], player: Player) -> Card | None:
    """Choose a card from the playable list.

    Ties keep the order of `playable`.

    Args:
        playable: Cards the player can place now, in hand order
        player: The computer player (for pass count and hand)

    Returns:
        Card to play, or None when nothing is playable
    """
    if not playable:
        return None

    for card in playable:
        if card.is_seven:
            return card

    if player.pass_count >= DANGER_PASS_COUNT:
        return min(playable, key=distance_from_seven)

    return max(playable, key=lambda c: score_card(c, player))
