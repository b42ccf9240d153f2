"""Host-side turn coordinator.

Drives the engine one turn at a time and keeps the remote client in
sync. The coordinator is the only writer of the game state. Everything
it waits for (timer delays, host console input, client messages, the
connection closing) arrives on one inbox queue, and at each suspension
point only one source is listened to:

- delay: moves are discarded until the deadline passes, except moves
  from the human whose turn comes next, which are held for that turn
- local human turn: only LOCAL moves are accepted
- remote human turn: only REMOTE moves are accepted
- match over: only restart requests are accepted

Moves the engine rejects are discarded as well. A CLOSED event at any
suspension point ends the session.
"""

from __future__ import annotations

import logging
import queue
import random
import time
from collections import deque
from typing import TYPE_CHECKING, Callable, Protocol

from pydantic import BaseModel

from sevens_server.config import TimingConfig
from sevens_server.models.game_state import PlayAction, PlayerView, describe_action
from sevens_server.models.player import Player, PlayerSetup
from sevens_server.network.events import InputEvent, InputSource
from sevens_server.network.protocol import (
    PassMessage,
    PlayCardMessage,
    RestartMessage,
    RestartRequestMessage,
    state_message,
)

from .engine import SevensGame

if TYPE_CHECKING:
    from sevens_server.logging import GameLogger

logger = logging.getLogger(__name__)


class SessionAborted(Exception):
    """The transport closed; the match in progress is abandoned."""


class Transport(Protocol):
    def send(self, message: BaseModel) -> None: ...


class Renderer(Protocol):
    def render(self, view: PlayerView) -> None: ...

    def show_message(self, text: str) -> None: ...

    def show_results(self, view: PlayerView) -> None: ...


class TurnCoordinator:
    """Runs matches on the host until the session is aborted."""

    def __init__(
        self,
        game: SevensGame,
        transport: Transport,
        renderer: Renderer,
        inbox: queue.Queue[InputEvent],
        player_setup: list[PlayerSetup],
        local_seat: int = 0,
        remote_seat: int = 2,
        timing: TimingConfig | None = None,
        game_logger: GameLogger | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize coordinator.

        Args:
            game: Engine holding the match state
            transport: Sends messages to the remote client
            renderer: Local (host) display
            inbox: Queue of input events from all sources
            player_setup: Seats for every new match
            local_seat: Seat played at the host console
            remote_seat: Seat played by the client
            timing: Presentation delays (all zero disables waiting)
            game_logger: JSONL replay logger
            rng: Random source for computer thinking time
            clock: Monotonic clock used for delay deadlines
        """
        self.game = game
        self.transport = transport
        self.renderer = renderer
        self.inbox = inbox
        self.player_setup = player_setup
        self.local_seat = local_seat
        self.remote_seat = remote_seat
        self.timing = timing or TimingConfig()
        self.game_logger = game_logger
        self.rng = rng or random.Random()
        self._clock = clock

        self.game_number = 0
        self.turn_number = 0
        self._held: deque[InputEvent] = deque()

    # --- Session ---

    def run(self) -> None:
        """Play matches back to back, restarting on request.

        Raises:
            SessionAborted: When the connection closes (always, eventually)
        """
        if self.game_logger:
            self.game_logger.log_session_start(
                [
                    Player(player_id=seat, name=s.name, kind=s.kind)
                    for seat, s in enumerate(self.player_setup)
                ]
            )

        try:
            while True:
                self.start_match()
                self.play_match()
                self.finish_match()
                self.await_restart()
                self._send(RestartMessage())
        except SessionAborted as e:
            logger.warning(f"Session aborted: {e}")
            if self.game_logger:
                self.game_logger.log_session_end(self.game_number, str(e) or "aborted")
            raise

    def start_match(self) -> None:
        """Deal a new match and broadcast the opening state."""
        self.game_number += 1
        self.turn_number = 0
        self._held.clear()

        first_seat = self.game.init_game(self.player_setup)
        logger.info(f"Match {self.game_number} started, seat {first_seat} opened")

        if self.game_logger:
            self.game_logger.log_game_start(self.game_number, self.game.state, first_seat)

        self._broadcast()
        self._pause(self.timing.start_delay)

    def play_match(self) -> None:
        """Play turns until the match is over."""
        while not self.game.state.game_over:
            self.play_turn()

    def finish_match(self) -> None:
        """Show the results locally and log them."""
        view = self.game.get_state_for_player(self.local_seat)
        self.renderer.show_results(view)
        logger.info(f"Match {self.game_number} over, rankings {view.rankings}")

        if self.game_logger:
            self.game_logger.log_game_end(self.game_number, self.game.state)

    def await_restart(self) -> None:
        """Block until either human asks for a new match."""
        while True:
            event = self._next_event()
            if isinstance(event.message, RestartRequestMessage):
                logger.info(f"Restart requested ({event.source.value})")
                return
            self._discard(event, "match is over", "The match is over. Type 'restart' for a new one.")

    # --- Turns ---

    def play_turn(self) -> None:
        """Source one move for the current seat, apply it and broadcast."""
        state = self.game.state
        seat = state.current_seat
        player = self.game.players[seat]
        playable = self.game.get_playable_cards(seat)

        if not playable:
            self._pause(self.timing.auto_pass_delay)
            if player.pass_count >= self.game.max_passes:
                self.game.eliminate(seat)
                after = self.timing.after_eliminate
            else:
                self.game.pass_turn(seat)
                after = self.timing.after_pass
        elif player.is_computer:
            self._pause(
                self.timing.cpu_think_min + self.rng.random() * self.timing.cpu_think_jitter
            )
            card = self.game.cpu_choose_card(seat)
            self.game.play_card(seat, card.suit, card.rank)
            after = self.timing.after_play
        elif seat == self.local_seat:
            self.renderer.show_message("Your turn")
            self._await_move(seat, InputSource.LOCAL)
            after = self.timing.after_human_play
        elif seat == self.remote_seat:
            self.renderer.show_message(f"Waiting for {player.name}...")
            self._await_move(seat, InputSource.REMOTE)
            after = self.timing.after_human_play
        else:
            raise RuntimeError(f"Seat {seat} is human but has no input source")

        self.turn_number += 1
        self._record_turn()
        self._broadcast()
        if not state.game_over:
            self._pause(after)

    def _await_move(self, seat: int, source: InputSource) -> None:
        """Block until `source` supplies a move the engine accepts for `seat`."""
        while True:
            event = self._next_event()
            if event.source != source:
                self._discard(
                    event, f"waiting for {source.value} input", self._off_turn_text(event.message)
                )
                continue
            if self.apply_move(seat, event.message):
                return
            self._discard(event, "rejected by engine", self._rejection_text(seat, event.message))

    def _rejection_text(self, seat: int, message: BaseModel | None) -> str:
        """Explain to the host console why its move was refused."""
        if isinstance(message, PlayCardMessage):
            return "That card cannot be played now."
        if isinstance(message, PassMessage) and not self.game.can_pass(seat):
            return "No passes left, you must play a card."
        return self._off_turn_text(message)

    @staticmethod
    def _off_turn_text(message: BaseModel | None) -> str:
        if isinstance(message, RestartRequestMessage):
            return "Restart is available once the match is over."
        return "Not your turn."

    def apply_move(self, seat: int, message: BaseModel | None) -> bool:
        """Re-validate and apply a human move request.

        Returns:
            True if the engine accepted the move
        """
        if seat != self.game.state.current_seat:
            return False
        if isinstance(message, PlayCardMessage):
            return self.game.play_card(seat, message.suit, message.rank)
        if isinstance(message, PassMessage):
            return self.game.pass_turn(seat)
        return False

    # --- Inbox ---

    def _next_event(self) -> InputEvent:
        """Block for the next event.

        Raises:
            SessionAborted: If the transport has closed
        """
        if self._held:
            return self._held.popleft()
        event = self.inbox.get()
        if event.source == InputSource.CLOSED:
            raise SessionAborted(event.reason or "connection closed")
        return event

    def _pause(self, seconds: float) -> None:
        """Wait for a delay.

        Moves from the human who moves next are held for their turn; any
        other move arriving meanwhile is discarded.

        A non-positive delay returns at once without touching the inbox.
        """
        if seconds <= 0:
            return

        deadline = self._clock() + seconds
        while True:
            remaining = deadline - self._clock()
            if remaining <= 0:
                return
            try:
                event = self.inbox.get(timeout=remaining)
            except queue.Empty:
                return
            if event.source == InputSource.CLOSED:
                raise SessionAborted(event.reason or "connection closed")
            if event.source == self._next_mover() and isinstance(
                event.message, (PlayCardMessage, PassMessage)
            ):
                self._held.append(event)
            else:
                self._discard(event, "not accepting input", self._off_turn_text(event.message))

    def _next_mover(self) -> InputSource | None:
        """Source that will be asked for the current seat's move, if any."""
        state = self.game.state
        seat = state.current_seat
        if state.game_over or self.game.players[seat].is_computer:
            return None
        if not self.game.get_playable_cards(seat):
            return None
        if seat == self.local_seat:
            return InputSource.LOCAL
        if seat == self.remote_seat:
            return InputSource.REMOTE
        return None

    def _discard(self, event: InputEvent, why: str, notice: str | None = None) -> None:
        """Drop an event; `notice` is shown when it came from the host console."""
        kind = getattr(event.message, "type", None)
        logger.debug(f"Discarded {event.source.value} {kind}: {why}")
        if notice and event.source == InputSource.LOCAL:
            self.renderer.show_message(notice)

    # --- Output ---

    def _broadcast(self) -> None:
        """Send the client's view and render the host's view."""
        self._send(state_message(self.game.get_state_for_player(self.remote_seat)))

        view = self.game.get_state_for_player(self.local_seat)
        self.renderer.render(view)
        text = describe_action(view.last_action, view.players)
        if text:
            logger.info(text)

    def _send(self, message: BaseModel) -> None:
        try:
            self.transport.send(message)
        except ConnectionError as e:
            raise SessionAborted(str(e)) from e

    def _record_turn(self) -> None:
        if not self.game_logger:
            return
        state = self.game.state
        self.game_logger.log_turn(self.game_number, self.turn_number, state)

        action = state.last_action
        if isinstance(action, PlayAction):
            player = self.game.players[action.seat]
            if player.rank is not None and not player.hand:
                self.game_logger.log_player_finish(
                    self.game_number, self.turn_number, action.seat, player.rank
                )
