"""Shared fixtures for Sevens tests."""

import random

import pytest

from sevens_server.game.engine import SevensGame
from sevens_server.models.game_state import GameState
from sevens_server.models.player import Player, PlayerKind, PlayerSetup

from helpers import cards


@pytest.fixture
def player_setup():
    """Two humans (seats 0 and 2) and two computers."""
    return [
        PlayerSetup(name="Host", kind=PlayerKind.HUMAN),
        PlayerSetup(name="CPU 1", kind=PlayerKind.COMPUTER),
        PlayerSetup(name="Guest", kind=PlayerKind.HUMAN),
        PlayerSetup(name="CPU 2", kind=PlayerKind.COMPUTER),
    ]


@pytest.fixture
def computer_setup():
    """Four computer seats."""
    return [PlayerSetup(name=f"CPU {i}", kind=PlayerKind.COMPUTER) for i in range(4)]


@pytest.fixture
def game():
    """Engine with a fixed seed."""
    return SevensGame(rng=random.Random(1234))


@pytest.fixture
def make_game(player_setup):
    """Factory for an engine in a hand-built mid-match position.

    Args (of the returned function):
        hands: seat -> space-separated card codes
        placed: space-separated codes already on the board
        current_seat: seat to move
        setup: seat setup (defaults to the player_setup fixture)
        rankings: seats that already finished, best first
        eliminated: seats already eliminated, in order
    """

    def _make(
        hands: dict[int, str],
        placed: str = "",
        current_seat: int = 0,
        setup: list[PlayerSetup] | None = None,
        rankings: tuple[int, ...] = (),
        eliminated: tuple[int, ...] = (),
    ) -> SevensGame:
        setup = setup or player_setup
        state = GameState(current_seat=current_seat)
        for seat, entry in enumerate(setup):
            state.players.append(
                Player(
                    player_id=seat,
                    name=entry.name,
                    kind=entry.kind,
                    hand=cards(hands.get(seat, "")),
                )
            )
        for c in cards(placed):
            state.board.place(c.suit, c.rank)
        for position, seat in enumerate(rankings, start=1):
            state.players[seat].rank = position
            state.rankings.append(seat)
        for seat in eliminated:
            state.players[seat].eliminated = True
            state.eliminated_order.append(seat)

        engine = SevensGame(rng=random.Random(0))
        engine.state = state
        return engine

    return _make
