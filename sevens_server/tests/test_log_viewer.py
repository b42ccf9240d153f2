"""Tests for the game log viewer's replay."""

import queue
import random

import pytest

from log_viewer import board_row, frame_lines, locate, read_log, replay
from sevens_server.game.coordinator import SessionAborted, TurnCoordinator
from sevens_server.game.engine import SevensGame
from sevens_server.logging import GameLogConfig, GameLogger
from sevens_server.network.events import InputEvent

from helpers import NO_DELAYS, FakeRenderer, FakeTransport

EVENTS = [
    {
        "type": "session_start",
        "players": [
            {"id": 0, "name": "Host", "kind": "human"},
            {"id": 1, "name": "CPU 1", "kind": "computer"},
        ],
    },
    {
        "type": "game_start",
        "game": 1,
        "hands": {"0": "S6,S8", "1": "HA"},
        "board": {"S": "", "H": "", "D": "7", "C": ""},
        "first_player": 1,
        "current_player": 0,
    },
    {
        "type": "turn",
        "game": 1,
        "turn": 1,
        "player": 0,
        "action": "pass",
        "card": "",
        "pass_count": 1,
        "current_player": 1,
    },
    {
        "type": "turn",
        "game": 1,
        "turn": 2,
        "player": 1,
        "action": "eliminate",
        "card": "",
        "pass_count": 3,
        "board": {"S": "", "H": "A", "D": "7", "C": ""},
        "hands": {"0": "S6,S8", "1": ""},
        "current_player": 0,
    },
    {"type": "game_end", "game": 1, "rankings": [0, 1], "eliminated": [1]},
    {"type": "unknown"},
    {"type": "session_end", "total_games": 1, "reason": "disconnected"},
]


class TestReplay:
    """Tests for replay()."""

    def test_one_frame_per_known_event(self):
        frames = replay(EVENTS)
        assert len(frames) == 6
        assert frames[0].caption == "Session started"
        assert frames[1].caption == "Match 1 dealt, CPU 1 opened with D7"
        assert frames[2].caption == "Host passed (1)"
        assert frames[3].caption == "CPU 1 was eliminated"
        assert frames[4].caption == "Final order: Host, CPU 1"
        assert "disconnected" in frames[5].caption

    def test_frames_are_independent(self):
        """Test later events do not leak into earlier frames."""
        frames = replay(EVENTS)
        assert frames[2].passes == {0: 1}
        assert 1 not in frames[2].out
        assert frames[3].out == {1}
        assert frames[4].positions == {0: 1, 1: 2}
        assert frames[3].positions == {}

    def test_lines(self):
        frames = replay(EVENTS)
        text = "\n".join(frame_lines(frames[3], 3, len(frames)))
        assert "4/6" in text
        assert "P1 CPU 1 (computer) [OUT]" in text
        assert "P0 Host (human) [passes 1]  <- to move" in text
        assert " 2: S6,S8" in text

    def test_board_row(self):
        row = board_row("6,7,8")
        assert row.split() == [".", ".", ".", ".", ".", "6", "7", "8", ".", ".", ".", ".", "."]
        assert board_row("").count(".") == 13

    def test_locate(self):
        frames = replay(EVENTS)
        assert locate(frames, 1, 2) == 3
        assert locate(frames, 2) is None


class TestReplayOfRealLog:
    """Replay a log written by the host."""

    def test_host_log(self, tmp_path, computer_setup):
        path = tmp_path / "session.jsonl"
        inbox = queue.Queue()
        inbox.put(InputEvent.closed("disconnected"))

        with GameLogger(GameLogConfig(enabled=True, output_path=str(path))) as game_logger:
            coord = TurnCoordinator(
                SevensGame(rng=random.Random(11)),
                FakeTransport(),
                FakeRenderer(),
                inbox,
                player_setup=computer_setup,
                timing=NO_DELAYS,
                game_logger=game_logger,
            )
            with pytest.raises(SessionAborted):
                coord.run()

        frames = replay(read_log(path))

        assert frames[-2].to_move == -1
        assert sorted(frames[-2].positions.values()) == [1, 2, 3, 4]
        assert frames[-2].turn == coord.turn_number
        assert frames[-1].caption.endswith("disconnected")
