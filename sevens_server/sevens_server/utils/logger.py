"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

from sevens_server.models.card import SUIT_SYMBOLS, Suit, rank_name
from sevens_server.models.game_state import describe_action

if TYPE_CHECKING:
    from sevens_server.models.game_state import PlayerView

RANK_LABELS = ["1st", "2nd", "3rd", "4th"]


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display a player's view of the game to stdout."""

    def __init__(self, show_hands: bool = False):
        """Initialize display.

        Args:
            show_hands: Whether to list the viewer's hand on every update
        """
        self.show_hands = show_hands

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def render(self, view: "PlayerView") -> None:
        """Print board, players and the viewer's hand."""
        self.print_separator()
        self.print_board(view)
        print()
        self.print_players(view)

        text = describe_action(view.last_action, view.players)
        if text:
            print(f"\nLast: {text}")

        if view.is_your_turn or self.show_hands:
            self.print_hand(view)

    def print_board(self, view: "PlayerView") -> None:
        """Print one row per suit, placed ranks shown, gaps as dots."""
        for suit in Suit:
            flags = view.board[suit]
            cells = " ".join(
                f"{rank_name(r):>2}" if flags[r - 1] else " ."
                for r in range(1, len(flags) + 1)
            )
            print(f"  {SUIT_SYMBOLS[suit]} {cells}")

    def print_players(self, view: "PlayerView") -> None:
        """Print public info for every seat."""
        for p in view.players:
            marker = " <<<" if p.id == view.current_seat and not view.game_over else ""
            you = " (you)" if p.id == view.your_seat else ""
            if p.rank is not None:
                status = f"#{p.rank}"
            elif p.eliminated:
                status = "OUT"
            else:
                status = f"{p.hand_count} cards, passes {p.pass_count}/{view.max_passes}"
            print(f"  P{p.id} {p.name}{you} [{p.kind.value}] {status}{marker}")

    def print_hand(self, view: "PlayerView") -> None:
        """Print the viewer's hand with playable cards in brackets."""
        playable = set(view.playable_cards)
        cards = " ".join(
            f"[{c}]" if c in playable else str(c) for c in view.your_hand
        )
        print(f"\nHand: {cards or '(empty)'}")
        if view.can_pass:
            print("Enter a card (e.g. S8, HQ, D10) or 'pass'")
        elif view.is_your_turn and not view.game_over:
            print("Enter a card (e.g. S8, HQ, D10); no passes left")

    def show_message(self, text: str) -> None:
        """Print a status line."""
        print(f"-- {text}")

    def show_results(self, view: "PlayerView") -> None:
        """Print final rankings."""
        self.print_separator()
        print("RESULTS")
        self.print_separator()
        for position, seat in enumerate(view.rankings):
            player = view.players[seat]
            out = " (eliminated)" if player.eliminated else ""
            print(f"  {RANK_LABELS[position]}: P{seat} {player.name}{out}")
        print("\nType 'restart' for a new match.")

    def print_waiting_for_client(self, port: int) -> None:
        """Print waiting message."""
        print(f"Waiting for the other player to connect on port {port}...")

    def print_client_connected(self, addr: tuple[str, int]) -> None:
        """Print client connection message."""
        print(f"Player connected from {addr[0]}:{addr[1]}")
