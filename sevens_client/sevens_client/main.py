"""Main entry point for the Sevens client."""

import argparse
import logging
import sys

from pydantic import BaseModel

from sevens_client.game.state import RANK_NAMES, SUIT_SYMBOLS, SUITS, GameView
from sevens_client.network.connection import GameConnection
from sevens_client.network.protocol import (
    GameOverMessage,
    PassMessage,
    PlayCardMessage,
    ProtocolError,
    RestartMessage,
    RestartRequestMessage,
)

logger = logging.getLogger(__name__)

SUIT_LETTERS = {"S": "spades", "H": "hearts", "D": "diamonds", "C": "clubs"}
RANK_LETTERS = {"A": 1, "T": 10, "J": 11, "Q": 12, "K": 13}


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Sevens (七並べ) client")
    parser.add_argument(
        "-H", "--host",
        default="127.0.0.1",
        help="Host address (default: 127.0.0.1)"
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=42486,
        help="Host port number (default: 42486)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser.parse_args()


def setup_logging(verbose: bool) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def parse_card(text: str) -> tuple[str, int] | None:
    """Parse card notation like S7, h10, DQ into (suit, rank)."""
    text = text.strip().upper()
    if len(text) < 2 or text[0] not in SUIT_LETTERS:
        return None
    rank_text = text[1:]
    if rank_text in RANK_LETTERS:
        rank = RANK_LETTERS[rank_text]
    elif rank_text.isdigit():
        rank = int(rank_text)
    else:
        return None
    return SUIT_LETTERS[text[0]], rank


def render(view: GameView) -> None:
    """Print the board, players and own hand."""
    print("=" * 60)
    for suit in SUITS:
        flags = view.board.get(suit, [])
        cells = " ".join(
            f"{RANK_NAMES.get(r, str(r)):>2}" if placed else " ."
            for r, placed in enumerate(flags, start=1)
        )
        print(f"  {SUIT_SYMBOLS[suit]} {cells}")
    print()
    for p in view.players:
        marker = " <<<" if p.id == view.current_seat and not view.game_over else ""
        you = " (you)" if p.id == view.your_seat else ""
        if p.rank is not None:
            status = f"#{p.rank}"
        elif p.eliminated:
            status = "OUT"
        else:
            status = f"{p.hand_count} cards, passes {p.pass_count}/{view.max_passes}"
        print(f"  P{p.id} {p.name}{you} {status}{marker}")

    if view.last_action is not None:
        print(f"\nLast: {view.last_action.describe(view.players)}")

    playable = set(view.playable_cards)
    hand = " ".join(f"[{c}]" if c in playable else str(c) for c in view.your_hand)
    print(f"\nHand: {hand or '(empty)'}")


def show_results(view: GameView) -> None:
    """Print final rankings."""
    print("=" * 60)
    print("RESULTS")
    for position, seat in enumerate(view.rankings, start=1):
        player = view.players[seat]
        print(f"  #{position}: P{seat} {player.name}")


def prompt_move(view: GameView) -> BaseModel:
    """Ask for a move until the user picks one the host offered."""
    prompt = "Your move (card like S8, or 'pass'): " if view.can_pass else "Your move (card like S8): "
    while True:
        text = input(prompt).strip()
        if text.lower() in ("pass", "p"):
            if view.can_pass:
                return PassMessage()
            print("No passes left, you must play a card.")
            continue

        card = parse_card(text)
        if card is None:
            print(f"Not a card: {text!r}")
            continue
        if not view.can_play(*card):
            print("That card cannot be played now.")
            continue
        return PlayCardMessage(suit=card[0], rank=card[1])


def ask_restart() -> bool:
    """Ask whether to request another match."""
    answer = input("Play again? [y/N]: ").strip().lower()
    return answer in ("y", "yes")


def run_client_loop(conn: GameConnection) -> None:
    """Render host states and answer when it is our turn.

    Returns when the user declines a new match.
    """
    while True:
        message = conn.receive_message()

        if isinstance(message, RestartMessage):
            print("\nStarting a new match...")
            continue

        view = message.state
        render(view)

        if isinstance(message, GameOverMessage):
            show_results(view)
            if not ask_restart():
                return
            conn.send_message(RestartRequestMessage())
            print("Waiting for the host...")
            continue

        if view.is_your_turn and view.playable_cards:
            conn.send_message(prompt_move(view))
        elif view.is_your_turn:
            print("No playable cards this turn.")


def main() -> None:
    """Main entry point."""
    args = parse_args()
    setup_logging(args.verbose)

    print(f"Connecting to {args.host}:{args.port}...")

    try:
        with GameConnection(args.host, args.port) as conn:
            print("Connected. Waiting for the match to start...")
            run_client_loop(conn)

    except ConnectionRefusedError:
        logger.error(f"Could not connect to host at {args.host}:{args.port}")
        sys.exit(1)
    except (ConnectionError, OSError) as e:
        print("\nConnection to the host was lost.")
        logger.info(f"Connection error: {e}")
        sys.exit(1)
    except ProtocolError as e:
        logger.error(f"Protocol error: {e}")
        sys.exit(1)
    except (KeyboardInterrupt, EOFError):
        print("\nBye")
        sys.exit(0)


if __name__ == "__main__":
    main()
