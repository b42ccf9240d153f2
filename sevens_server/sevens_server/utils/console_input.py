"""Line-based console input for the host's human seat."""

import logging
import queue
import sys
import threading
from typing import TextIO

from pydantic import BaseModel

from sevens_server.models.card import MAX_RANK, MIN_RANK, Suit
from sevens_server.network.events import InputEvent
from sevens_server.network.protocol import (
    PassMessage,
    PlayCardMessage,
    RestartRequestMessage,
)

logger = logging.getLogger(__name__)

SUIT_LETTERS = {
    "S": Suit.SPADES,
    "H": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "C": Suit.CLUBS,
}

RANK_LETTERS = {"A": 1, "T": 10, "J": 11, "Q": 12, "K": 13}


def parse_command(text: str) -> BaseModel | None:
    """Parse a console command.

    Accepts card notation (S7, h10, DQ, CT), "pass" and "restart".

    Returns:
        The corresponding move message, or None if not understood
    """
    text = text.strip().upper()
    if not text:
        return None
    if text in ("PASS", "P"):
        return PassMessage()
    if text in ("RESTART", "R"):
        return RestartRequestMessage()

    suit = SUIT_LETTERS.get(text[0])
    rank_text = text[1:]
    if suit is None or not rank_text:
        return None

    if rank_text in RANK_LETTERS:
        rank = RANK_LETTERS[rank_text]
    elif rank_text.isdigit():
        rank = int(rank_text)
    else:
        return None

    if not MIN_RANK <= rank <= MAX_RANK:
        return None
    return PlayCardMessage(suit=suit, rank=rank)


class ConsoleInput:
    """Reads commands from a stream on a daemon thread.

    Parsed commands become LOCAL events on the attached inbox. The inbox
    can be swapped between sessions.
    """

    def __init__(self, stream: TextIO | None = None):
        """Initialize console reader.

        Args:
            stream: Input stream (defaults to stdin)
        """
        self.stream = stream or sys.stdin
        self.inbox: queue.Queue[InputEvent] | None = None
        self._thread: threading.Thread | None = None

    def attach(self, inbox: queue.Queue[InputEvent] | None) -> None:
        """Route commands to a new inbox (None drops them)."""
        self.inbox = inbox

    def start(self) -> None:
        """Start reading in the background."""
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._read_loop, name="sevens-console", daemon=True
        )
        self._thread.start()

    def _read_loop(self) -> None:
        for line in self.stream:
            self.handle_line(line)
        logger.debug("Console input closed")

    def handle_line(self, line: str) -> bool:
        """Parse one line and enqueue it.

        Returns:
            True if the line was understood and delivered
        """
        message = parse_command(line)
        if message is None:
            if line.strip():
                print(f"Unknown command: {line.strip()!r}")
            return False
        if self.inbox is None:
            return False
        self.inbox.put(InputEvent.local(message))
        return True
