"""Game engine for Sevens."""

from __future__ import annotations

import logging
import random

from sevens_server.config import RulesConfig
from sevens_server.models.card import (
    SEVEN,
    Card,
    Suit,
    create_full_deck,
    sort_hand,
)
from sevens_server.models.game_state import (
    EliminateAction,
    GameState,
    PassAction,
    PlayAction,
    PlayerView,
    PublicPlayer,
)
from sevens_server.models.player import Player, PlayerSetup

from .cpu import choose_card

logger = logging.getLogger(__name__)

NUM_SEATS = 4
CARDS_PER_SEAT = 13
DECK_SIZE = NUM_SEATS * CARDS_PER_SEAT

# The holder of this card leads
OPENING_CARD = Card(suit=Suit.DIAMONDS, rank=SEVEN)


class SevensGame:
    """Rules and state machine for one table.

    Holds the canonical GameState. Mutations return False (and change
    nothing) when a move is illegal; turn advancement, finishing and
    final ranking happen inside the mutation that triggers them.
    """

    def __init__(
        self,
        rules: RulesConfig | None = None,
        rng: random.Random | None = None,
    ):
        """Initialize game engine.

        Args:
            rules: Rules configuration (uses defaults if not provided)
            rng: Random source for shuffling (seed it for reproducible deals)
        """
        self.rules = rules or RulesConfig()
        self.rng = rng or random.Random()
        self.state = GameState()

    @property
    def players(self) -> list[Player]:
        return self.state.players

    @property
    def max_passes(self) -> int:
        return self.rules.max_passes

    def init_game(
        self,
        player_setup: list[PlayerSetup],
        deck: list[Card] | None = None,
    ) -> int:
        """Deal a new match and play the opening 7♦.

        Args:
            player_setup: Name and kind for each of the four seats
            deck: Explicit deck order (no shuffle). Seat i receives
                deck[13*i:13*(i+1)].

        Returns:
            Seat that held 7♦ and opened the match
        """
        if len(player_setup) != NUM_SEATS:
            raise ValueError(f"Sevens needs {NUM_SEATS} players, got {len(player_setup)}")

        if deck is None:
            cards = create_full_deck()
            self.rng.shuffle(cards)
        else:
            if len(deck) != DECK_SIZE or len(set(deck)) != DECK_SIZE:
                raise ValueError("Deck must contain each of the 52 cards exactly once")
            cards = list(deck)

        self.state = GameState()
        for seat, setup in enumerate(player_setup):
            hand = cards[seat * CARDS_PER_SEAT:(seat + 1) * CARDS_PER_SEAT]
            self.state.players.append(
                Player(
                    player_id=seat,
                    name=setup.name,
                    kind=setup.kind,
                    hand=sort_hand(hand),
                )
            )

        start_seat = next(
            p.player_id
            for p in self.players
            if p.has_card(OPENING_CARD.suit, OPENING_CARD.rank)
        )
        self.state.current_seat = start_seat
        logger.info(f"New match dealt, seat {start_seat} holds {OPENING_CARD}")

        self.play_card(start_seat, OPENING_CARD.suit, OPENING_CARD.rank)
        return start_seat

    # --- Card play logic ---

    def can_play(self, suit: Suit, rank: int) -> bool:
        """Check the adjacency rule for a card.

        A 7 may always open its suit. Any other card needs its suit's 7
        on the board and a placed neighbour of the same suit.
        """
        board = self.state.board
        if board.is_placed(suit, rank):
            return False

        if rank == SEVEN:
            return True

        if not board.is_placed(suit, SEVEN):
            return False

        return board.is_placed(suit, rank - 1) or board.is_placed(suit, rank + 1)

    def get_playable_cards(self, seat: int) -> list[Card]:
        """Get cards in hand that can be placed now (hand order)."""
        player = self.players[seat]
        if not player.is_active:
            return []
        return [c for c in player.hand if self.can_play(c.suit, c.rank)]

    def play_card(self, seat: int, suit: Suit, rank: int) -> bool:
        """Place a card from a seat's hand.

        Returns:
            False if the card is not held or cannot be placed
        """
        player = self.players[seat]
        if not player.has_card(suit, rank) or not self.can_play(suit, rank):
            return False

        player.take_card(suit, rank)
        self.state.board.place(suit, rank)
        self.state.last_action = PlayAction(seat=seat, suit=suit, rank=rank)
        logger.debug(f"Seat {seat} played {Card(suit=suit, rank=rank)}")

        if not player.hand:
            player.rank = len(self.state.rankings) + 1
            self.state.rankings.append(seat)
            logger.info(f"Seat {seat} finished in position {player.rank}")

        self._advance_turn()
        return True

    def can_pass(self, seat: int) -> bool:
        """Check if a seat still has a pass left (it must also be active)."""
        player = self.players[seat]
        return player.is_active and player.pass_count < self.max_passes

    def pass_turn(self, seat: int) -> bool:
        """Pass the turn, using up one of the seat's passes.

        Returns:
            False if the seat is not active or has no passes left
        """
        if not self.can_pass(seat):
            return False

        player = self.players[seat]
        player.pass_count += 1
        self.state.last_action = PassAction(seat=seat)
        logger.debug(f"Seat {seat} passed ({player.pass_count}/{self.max_passes})")

        self._advance_turn()
        return True

    def eliminate(self, seat: int) -> None:
        """Knock a seat out and place its remaining hand on the board."""
        player = self.players[seat]
        player.eliminated = True
        self.state.eliminated_order.append(seat)

        for card in player.hand:
            self.state.board.place(card.suit, card.rank)
        player.hand = []

        self.state.last_action = EliminateAction(seat=seat)
        logger.info(f"Seat {seat} eliminated")

        self._advance_turn()

    def _advance_turn(self) -> None:
        """Move to the next active seat, or finish the match."""
        active = self.state.active_seats()

        if len(active) <= 1:
            for seat in active:
                self._assign_rank(seat)
            # Last eliminated ranks best among the eliminated
            for seat in reversed(self.state.eliminated_order):
                if self.players[seat].rank is None:
                    self._assign_rank(seat)
            self.state.game_over = True
            logger.info(f"Match over, rankings {self.state.rankings}")
            return

        next_seat = (self.state.current_seat + 1) % NUM_SEATS
        steps = 0
        while not self.players[next_seat].is_active and steps < NUM_SEATS:
            next_seat = (next_seat + 1) % NUM_SEATS
            steps += 1
        self.state.current_seat = next_seat

    def _assign_rank(self, seat: int) -> None:
        self.players[seat].rank = len(self.state.rankings) + 1
        self.state.rankings.append(seat)

    # --- Computer player ---

    def cpu_choose_card(self, seat: int) -> Card | None:
        """Pick the card a computer seat plays (None if nothing is playable)."""
        return choose_card(self.get_playable_cards(seat), self.players[seat])

    # --- Views ---

    def get_state_for_player(self, seat: int) -> PlayerView:
        """Build the view of the match that a seat is allowed to see."""
        state = self.state
        return PlayerView(
            board=state.board.to_dict(),
            players=[
                PublicPlayer(
                    id=p.player_id,
                    name=p.name,
                    kind=p.kind,
                    hand_count=len(p.hand),
                    pass_count=p.pass_count,
                    eliminated=p.eliminated,
                    rank=p.rank,
                )
                for p in self.players
            ],
            your_seat=seat,
            your_hand=list(self.players[seat].hand),
            playable_cards=self.get_playable_cards(seat),
            current_seat=state.current_seat,
            is_your_turn=state.current_seat == seat,
            game_over=state.game_over,
            rankings=list(state.rankings),
            max_passes=self.max_passes,
            can_pass=(
                state.current_seat == seat
                and not state.game_over
                and self.can_pass(seat)
            ),
            last_action=state.last_action.model_copy() if state.last_action else None,
        )
