"""Tests for the JSONL game logger and its formatters."""

import json

from sevens_server.logging import (
    GameLogConfig,
    GameLogger,
    format_board,
    format_card,
    format_cards,
    format_hands,
)
from sevens_server.models.card import Board, Suit, create_full_deck
from sevens_server.models.player import Player, PlayerKind

from helpers import card, cards


def read_events(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


class TestFormatters:
    """Tests for log formatters."""

    def test_format_card(self):
        assert format_card(card("D7")) == "D7"
        assert format_card(card("SQ")) == "SQ"
        assert format_card(card("HA")) == "HA"
        assert format_card(card("C10")) == "C10"

    def test_format_cards(self):
        assert format_cards(cards("S3 S4 H7")) == "S3,S4,H7"
        assert format_cards([]) == ""

    def test_format_hands(self):
        assert format_hands([cards("S3"), [], cards("CK")]) == {"0": "S3", "1": "", "2": "CK"}

    def test_format_board(self):
        board = Board()
        for rank in (6, 7, 8):
            board.place(Suit.HEARTS, rank)
        board.place(Suit.CLUBS, 1)
        assert format_board(board) == {"S": "", "H": "6,7,8", "D": "", "C": "A"}


class TestGameLogger:
    """Tests for GameLogger."""

    def test_disabled_writes_nothing(self, tmp_path):
        path = tmp_path / "off.jsonl"
        with GameLogger(GameLogConfig(enabled=False, output_path=str(path))) as gl:
            gl.log_session_end(0, "done")
        assert not path.exists()

    def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "log.jsonl"
        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as gl:
            gl.log_session_end(0, "done")
        assert read_events(path) == [{"type": "session_end", "total_games": 0, "reason": "done"}]

    def test_match_events(self, tmp_path, game, player_setup):
        """Test game start, turn, finish and end records."""
        path = tmp_path / "log.jsonl"
        game.init_game(player_setup, deck=create_full_deck())

        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as gl:
            gl.log_session_start(
                [Player(player_id=0, name="Host", kind=PlayerKind.HUMAN)]
            )
            gl.log_game_start(1, game.state, 2)
            game.play_card(3, Suit.CLUBS, 7)
            gl.log_turn(1, 1, game.state)
            game.pass_turn(0)
            gl.log_turn(1, 2, game.state)
            gl.log_player_finish(1, 2, 1, 1)
            gl.log_game_end(1, game.state)

        start, game_start, play, pass_, finish, end = read_events(path)

        assert start["type"] == "session_start"
        assert "timestamp" in start
        assert start["players"] == [{"id": 0, "name": "Host", "kind": "human"}]

        assert game_start["first_player"] == 2
        assert game_start["current_player"] == 3
        assert game_start["board"]["D"] == "7"
        assert game_start["hands"]["3"].startswith("CA,C2")

        assert play["player"] == 3
        assert play["action"] == "play"
        assert play["card"] == "C7"
        assert play["board"]["C"] == "7"
        assert play["current_player"] == 0

        assert pass_["action"] == "pass"
        assert pass_["card"] == ""
        assert pass_["pass_count"] == 1

        assert finish == {"type": "player_finish", "game": 1, "turn": 2, "player": 1, "position": 1}
        assert end == {"type": "game_end", "game": 1, "rankings": [], "eliminated": []}

    def test_appends(self, tmp_path):
        """Test a second session appends to the same file."""
        path = tmp_path / "log.jsonl"
        config = GameLogConfig(enabled=True, output_path=str(path))
        for reason in ("first", "second"):
            with GameLogger(config) as gl:
                gl.log_session_end(1, reason)
        assert [e["reason"] for e in read_events(path)] == ["first", "second"]
