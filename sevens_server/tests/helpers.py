"""Shared test helpers: card shorthands and fake coordinator I/O."""

from sevens_server.config import TimingConfig
from sevens_server.models.card import Card, Suit

SUIT_CODES = {"S": Suit.SPADES, "H": Suit.HEARTS, "D": Suit.DIAMONDS, "C": Suit.CLUBS}
RANK_CODES = {"A": 1, "J": 11, "Q": 12, "K": 13}


def card(code: str) -> Card:
    """Build a card from a code like "S7", "H10", "DQ"."""
    rank_text = code[1:]
    rank = RANK_CODES.get(rank_text) or int(rank_text)
    return Card(suit=SUIT_CODES[code[0]], rank=rank)


def cards(codes: str) -> list[Card]:
    """Build cards from a space-separated list of codes."""
    return [card(c) for c in codes.split()]


NO_DELAYS = TimingConfig(
    start_delay=0,
    auto_pass_delay=0,
    cpu_think_min=0,
    cpu_think_jitter=0,
    after_pass=0,
    after_eliminate=0,
    after_play=0,
    after_human_play=0,
)


class FakeTransport:
    """Collects sent messages; optionally fails like a dropped socket."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    def send(self, message):
        if self.fail:
            raise ConnectionError("peer gone")
        self.sent.append(message)

    def of_type(self, cls):
        return [m for m in self.sent if isinstance(m, cls)]


class FakeRenderer:
    """Records what the host display was asked to show."""

    def __init__(self):
        self.views = []
        self.messages = []
        self.results = []

    def render(self, view):
        self.views.append(view)

    def show_message(self, text):
        self.messages.append(text)

    def show_results(self, view):
        self.results.append(view)
