"""Tests for the computer player heuristic."""

from sevens_server.game.cpu import choose_card, distance_from_seven, score_card
from sevens_server.models.player import Player

from helpers import card, cards


def make_player(hand: str, pass_count: int = 0) -> Player:
    return Player(player_id=1, name="CPU", hand=cards(hand), pass_count=pass_count)


class TestScoring:
    """Tests for card scoring."""

    def test_distance(self):
        assert distance_from_seven(card("S7")) == 0
        assert distance_from_seven(card("HA")) == 6
        assert distance_from_seven(card("DK")) == 6

    def test_score(self):
        """Test score favours cards near 7 in long suits."""
        player = make_player("S2 S3 S4 S5 H8")
        assert score_card(card("S5"), player) == 0
        assert score_card(card("H8"), player) == -1


class TestChooseCard:
    """Tests for choose_card."""

    def test_nothing_playable(self):
        assert choose_card([], make_player("S2")) is None

    def test_seven_first(self):
        """Test a 7 is played before anything else."""
        player = make_player("S8 H7 C7")
        assert choose_card(cards("S8 H7 C7"), player) == card("H7")

    def test_prefers_long_suit(self):
        """Test a card from a long suit beats a closer card from a short one."""
        player = make_player("S2 S3 S4 S5 H8")
        assert choose_card(cards("S5 H8"), player) == card("S5")

    def test_danger_mode_plays_closest(self):
        """Test with two passes used the card nearest 7 wins."""
        player = make_player("S2 S3 S4 S5 H8", pass_count=2)
        assert choose_card(cards("S5 H8"), player) == card("H8")

    def test_danger_mode_tie_keeps_order(self):
        player = make_player("S6 S8", pass_count=2)
        assert choose_card(cards("S6 S8"), player) == card("S6")
        assert choose_card(cards("S8 S6"), player) == card("S8")

    def test_score_tie_keeps_order(self):
        player = make_player("H8 S6")
        assert choose_card(cards("H8 S6"), player) == card("H8")

    def test_seven_even_in_danger(self):
        player = make_player("S6 D7", pass_count=2)
        assert choose_card(cards("S6 D7"), player) == card("D7")
