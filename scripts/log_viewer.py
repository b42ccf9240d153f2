#!/usr/bin/env python3
"""Step through a Sevens JSONL game log in the terminal.

Usage:
    python scripts/log_viewer.py logs/20260101T120000_Player1_CPU1_Player2_CPU2.jsonl

Keys:
    n / right: next event
    p / left: previous event
    space: autoplay (one event per second), any key stops
    g: go to match number
    t: go to turn number in the current match
    q: quit
"""

import argparse
import copy
import curses
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

SUIT_ROWS = [("S", "♠"), ("H", "♥"), ("D", "♦"), ("C", "♣")]
RANK_ORDER = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
WIDTH = 72


@dataclass
class ReplayFrame:
    """Table as it looked after one logged event."""

    match: int = 0
    turn: int = 0
    seats: list[dict] = field(default_factory=list)
    hands: dict[str, str] = field(default_factory=dict)
    board: dict[str, str] = field(default_factory=dict)
    passes: dict[int, int] = field(default_factory=dict)
    positions: dict[int, int] = field(default_factory=dict)
    out: set[int] = field(default_factory=set)
    to_move: int = -1
    caption: str = ""

    def name(self, seat: int) -> str:
        for s in self.seats:
            if s.get("id") == seat:
                return s.get("name", f"Seat {seat}")
        return f"Seat {seat}"


def read_log(path: Path) -> list[dict]:
    """Parse one JSON object per non-blank line."""
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def _session_start(frame: ReplayFrame, event: dict) -> None:
    frame.seats = event.get("players", [])
    frame.caption = "Session started"


def _game_start(frame: ReplayFrame, event: dict) -> None:
    opener = event.get("first_player", 0)
    frame.match = event.get("game", frame.match + 1)
    frame.turn = 0
    frame.hands = event.get("hands", {})
    frame.board = event.get("board", {})
    frame.passes.clear()
    frame.positions.clear()
    frame.out.clear()
    frame.to_move = event.get("current_player", opener)
    frame.caption = f"Match {frame.match} dealt, {frame.name(opener)} opened with D7"


def _turn(frame: ReplayFrame, event: dict) -> None:
    seat = event.get("player", 0)
    frame.turn = event.get("turn", frame.turn)
    frame.hands = event.get("hands", frame.hands)
    frame.board = event.get("board", frame.board)
    frame.to_move = event.get("current_player", frame.to_move)
    frame.passes[seat] = event.get("pass_count", 0)

    action = event.get("action")
    if action == "play":
        frame.caption = f"{frame.name(seat)} played {event.get('card', '?')}"
    elif action == "pass":
        frame.caption = f"{frame.name(seat)} passed ({frame.passes[seat]})"
    else:
        frame.out.add(seat)
        frame.caption = f"{frame.name(seat)} was eliminated"


def _player_finish(frame: ReplayFrame, event: dict) -> None:
    seat = event.get("player", -1)
    frame.positions[seat] = event.get("position", len(frame.positions) + 1)
    frame.caption = f"{frame.name(seat)} finished #{frame.positions[seat]}"


def _game_end(frame: ReplayFrame, event: dict) -> None:
    rankings = event.get("rankings", [])
    frame.positions = {seat: i for i, seat in enumerate(rankings, start=1)}
    frame.to_move = -1
    frame.caption = "Final order: " + ", ".join(frame.name(s) for s in rankings)


def _session_end(frame: ReplayFrame, event: dict) -> None:
    frame.caption = (
        f"Session over after {event.get('total_games', 0)} match(es): "
        f"{event.get('reason', '')}"
    )


HANDLERS = {
    "session_start": _session_start,
    "game_start": _game_start,
    "turn": _turn,
    "player_finish": _player_finish,
    "game_end": _game_end,
    "session_end": _session_end,
}


def replay(events: list[dict]) -> list[ReplayFrame]:
    """Fold log events into one frame per recognised event."""
    frame = ReplayFrame()
    frames = []
    for event in events:
        handler = HANDLERS.get(event.get("type"))
        if handler is None:
            continue
        handler(frame, event)
        frames.append(copy.deepcopy(frame))
    return frames


def board_row(placed: str) -> str:
    """Render placed ranks ("6,7,8") as 13 fixed-width cells."""
    ranks = set(placed.split(",")) if placed else set()
    return " ".join(f"{r:>2}" if r in ranks else " ." for r in RANK_ORDER)


def seat_status(frame: ReplayFrame, seat: int) -> str:
    if seat in frame.positions:
        return f"#{frame.positions[seat]}"
    if seat in frame.out:
        return "OUT"
    return f"passes {frame.passes.get(seat, 0)}"


def frame_lines(frame: ReplayFrame, step: int, total: int) -> list[str]:
    """Text lines for one frame, top to bottom."""
    heading = f"Match {frame.match}  Turn {frame.turn}"
    position = f"{step + 1}/{total}"
    lines = [
        "=" * WIDTH,
        heading + position.rjust(WIDTH - len(heading)),
        "=" * WIDTH,
        "",
    ]
    lines += [f"  {symbol} {board_row(frame.board.get(code, ''))}" for code, symbol in SUIT_ROWS]
    lines += ["", f"> {frame.caption}", "-" * WIDTH]

    for s in frame.seats:
        seat = s.get("id", 0)
        arrow = "  <- to move" if seat == frame.to_move else ""
        hand = frame.hands.get(str(seat), "")
        count = len(hand.split(",")) if hand else 0
        lines.append(f"P{seat} {frame.name(seat)} ({s.get('kind', '')}) [{seat_status(frame, seat)}]{arrow}")
        lines.append(f"   {count:2d}: {hand}")

    lines += ["=" * WIDTH, "[n]ext [p]rev [space] play [g]ame [t]urn [q]uit"]
    return lines


def locate(frames: list[ReplayFrame], match: int, turn: int = 0) -> int | None:
    """Index of the first frame at a match and turn."""
    return next(
        (i for i, f in enumerate(frames) if f.match == match and f.turn == turn),
        None,
    )


def draw(stdscr, lines: list[str]) -> None:
    stdscr.erase()
    height, width = stdscr.getmaxyx()
    for row, text in enumerate(lines[: height - 1]):
        stdscr.addnstr(row, 0, text, width - 1)
    stdscr.refresh()


def ask_number(stdscr, prompt: str) -> int | None:
    """Read a number on the bottom line."""
    height, width = stdscr.getmaxyx()
    stdscr.move(height - 1, 0)
    stdscr.clrtoeol()
    stdscr.addnstr(height - 1, 0, prompt, width - 1)
    curses.echo()
    curses.curs_set(1)
    try:
        text = stdscr.getstr(height - 1, len(prompt), 8).decode("utf-8").strip()
        return int(text) if text else None
    except (ValueError, curses.error):
        return None
    finally:
        curses.noecho()
        curses.curs_set(0)


def browse(stdscr, frames: list[ReplayFrame]) -> None:
    """Key loop over the frames."""
    curses.curs_set(0)
    step = 0
    last = len(frames) - 1

    while True:
        draw(stdscr, frame_lines(frames[step], step, len(frames)))
        key = stdscr.getch()

        if key == ord("q"):
            return
        if key in (ord("n"), curses.KEY_RIGHT):
            step = min(step + 1, last)
        elif key in (ord("p"), curses.KEY_LEFT):
            step = max(step - 1, 0)
        elif key == ord(" "):
            stdscr.timeout(1000)
            while step < last:
                step += 1
                draw(stdscr, frame_lines(frames[step], step, len(frames)))
                if stdscr.getch() != -1:
                    break
            stdscr.timeout(-1)
        elif key in (ord("g"), ord("t")):
            if key == ord("g"):
                number = ask_number(stdscr, "Match: ")
                target = None if number is None else locate(frames, number)
            else:
                number = ask_number(stdscr, "Turn: ")
                target = None if number is None else locate(frames, frames[step].match, number)
            if target is not None:
                step = target


def main() -> int:
    """Entry point."""
    parser = argparse.ArgumentParser(description="Step through a Sevens game log")
    parser.add_argument("logfile", type=Path, help="JSONL log written by the host")
    args = parser.parse_args()

    if not args.logfile.is_file():
        print(f"No such log: {args.logfile}", file=sys.stderr)
        return 1

    frames = replay(read_log(args.logfile))
    if not frames:
        print("Log has no events to show", file=sys.stderr)
        return 1

    curses.wrapper(browse, frames)
    return 0


if __name__ == "__main__":
    sys.exit(main())
