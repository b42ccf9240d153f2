"""Tests for host console input."""

import io
import queue

import pytest

from sevens_server.models.card import Suit
from sevens_server.network.events import InputSource
from sevens_server.network.protocol import (
    PassMessage,
    PlayCardMessage,
    RestartRequestMessage,
)
from sevens_server.utils.console_input import ConsoleInput, parse_command


class TestParseCommand:
    """Tests for parse_command."""

    @pytest.mark.parametrize(
        "text, suit, rank",
        [
            ("S7", Suit.SPADES, 7),
            ("h10", Suit.HEARTS, 10),
            ("DQ", Suit.DIAMONDS, 12),
            ("ct", Suit.CLUBS, 10),
            (" sa ", Suit.SPADES, 1),
            ("HK", Suit.HEARTS, 13),
        ],
    )
    def test_cards(self, text, suit, rank):
        assert parse_command(text) == PlayCardMessage(suit=suit, rank=rank)

    def test_pass_and_restart(self):
        assert isinstance(parse_command("pass"), PassMessage)
        assert isinstance(parse_command("P"), PassMessage)
        assert isinstance(parse_command("restart"), RestartRequestMessage)
        assert isinstance(parse_command("r"), RestartRequestMessage)

    @pytest.mark.parametrize("text", ["", "   ", "X7", "S", "S0", "S14", "SZ", "7S"])
    def test_invalid(self, text):
        assert parse_command(text) is None


class TestConsoleInput:
    """Tests for ConsoleInput."""

    def test_handle_line(self):
        console = ConsoleInput(stream=io.StringIO())
        inbox = queue.Queue()
        console.attach(inbox)

        assert console.handle_line("S8\n")
        event = inbox.get_nowait()
        assert event.source == InputSource.LOCAL
        assert event.message == PlayCardMessage(suit=Suit.SPADES, rank=8)

    def test_unknown_command(self, capsys):
        console = ConsoleInput(stream=io.StringIO())
        inbox = queue.Queue()
        console.attach(inbox)

        assert not console.handle_line("shuffle\n")
        assert inbox.empty()
        assert "Unknown command" in capsys.readouterr().out

    def test_detached(self):
        """Test commands are dropped when no inbox is attached."""
        console = ConsoleInput(stream=io.StringIO())
        assert not console.handle_line("pass")

    def test_read_loop(self):
        console = ConsoleInput(stream=io.StringIO("S8\n\nbogus\npass\n"))
        inbox = queue.Queue()
        console.attach(inbox)

        console._read_loop()

        messages = [inbox.get_nowait().message for _ in range(inbox.qsize())]
        assert messages == [PlayCardMessage(suit=Suit.SPADES, rank=8), PassMessage()]
