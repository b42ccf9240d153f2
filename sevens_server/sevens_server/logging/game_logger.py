"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from sevens_server.models.card import Card
from sevens_server.models.game_state import GameState, PlayAction
from sevens_server.models.player import Player

from .formatters import format_board, format_card, format_hands


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, players: list[Player]) -> None:
        """Log session start with player information."""
        self._write({
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "players": [
                {"id": p.player_id, "name": p.name, "kind": p.kind.value}
                for p in players
            ],
        })

    def log_game_start(self, game_num: int, state: GameState, first_seat: int) -> None:
        """Log game start with the dealt hands.

        Hands are logged after the opening 7♦ has been played.

        Args:
            game_num: Match number within the session.
            state: Game state right after dealing.
            first_seat: Seat that held 7♦.
        """
        self._write({
            "type": "game_start",
            "game": game_num,
            "hands": format_hands([p.hand for p in state.players]),
            "board": format_board(state.board),
            "first_player": first_seat,
            "current_player": state.current_seat,
        })

    def log_turn(self, game_num: int, turn_num: int, state: GameState) -> None:
        """Log the action recorded in state.last_action.

        Args:
            game_num: Match number within the session.
            turn_num: Turn number within the match.
            state: Game state after the action.
        """
        action = state.last_action
        if action is None:
            return

        seat = action.seat
        record: dict[str, Any] = {
            "type": "turn",
            "game": game_num,
            "turn": turn_num,
            "player": seat,
            "action": action.kind,
            "card": "",
            "pass_count": state.players[seat].pass_count,
            "board": format_board(state.board),
            "hands": format_hands([p.hand for p in state.players]),
            "current_player": state.current_seat,
        }
        if isinstance(action, PlayAction):
            record["card"] = format_card(Card(suit=action.suit, rank=action.rank))
        self._write(record)

    def log_player_finish(self, game_num: int, turn_num: int, seat: int, position: int) -> None:
        """Log a seat emptying its hand."""
        self._write({
            "type": "player_finish",
            "game": game_num,
            "turn": turn_num,
            "player": seat,
            "position": position,
        })

    def log_game_end(self, game_num: int, state: GameState) -> None:
        """Log game end with final rankings.

        Args:
            game_num: Match number within the session.
            state: Final game state.
        """
        self._write({
            "type": "game_end",
            "game": game_num,
            "rankings": list(state.rankings),
            "eliminated": list(state.eliminated_order),
        })

    def log_session_end(self, total_games: int, reason: str) -> None:
        """Log session end.

        Args:
            total_games: Number of matches started in the session.
            reason: Why the session ended (e.g. "disconnected").
        """
        self._write({
            "type": "session_end",
            "total_games": total_games,
            "reason": reason,
        })
