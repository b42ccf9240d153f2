"""Tests for protocol module."""

import json
import struct

import pytest

from sevens_client.network.protocol import decode_host_message as client_decode
from sevens_client.network.protocol import GameOverMessage as ClientGameOver
from sevens_server.models.card import Suit, create_full_deck
from sevens_server.network.protocol import (
    MAX_FRAME_BYTES,
    GameOverMessage,
    GameStateMessage,
    PassMessage,
    PlayCardMessage,
    ProtocolError,
    RestartMessage,
    RestartRequestMessage,
    decode_client_message,
    decode_host_message,
    encode_message,
    frame,
    frame_length,
    state_message,
)


class TestClientMessages:
    """Tests for decoding client -> host messages."""

    def test_play_card(self):
        message = decode_client_message(b'{"type": "PLAY_CARD", "suit": "hearts", "rank": 12}')
        assert isinstance(message, PlayCardMessage)
        assert message.suit == Suit.HEARTS
        assert message.rank == 12

    def test_pass_and_restart(self):
        assert isinstance(decode_client_message(b'{"type": "PASS"}'), PassMessage)
        assert isinstance(
            decode_client_message(b'{"type": "RESTART_REQUEST"}'), RestartRequestMessage
        )

    def test_encode(self):
        """Test messages serialize with their type tag."""
        body = encode_message(PlayCardMessage(suit=Suit.CLUBS, rank=7))
        assert json.loads(body) == {"type": "PLAY_CARD", "suit": "clubs", "rank": 7}

    @pytest.mark.parametrize(
        "body",
        [
            b"not json",
            b'{"type": "SHUFFLE"}',
            b'{"suit": "hearts", "rank": 3}',
            b'{"type": "PLAY_CARD", "suit": "stars", "rank": 3}',
            b'{"type": "PLAY_CARD", "suit": "hearts", "rank": 14}',
            b'{"type": "PLAY_CARD", "suit": "hearts"}',
            b'{"type": "GAME_STATE"}',
        ],
    )
    def test_invalid(self, body):
        with pytest.raises(ProtocolError):
            decode_client_message(body)


class TestHostMessages:
    """Tests for host -> client messages."""

    def test_state_message_kind(self, game, player_setup):
        """Test GAME_OVER is used only once the match is over."""
        game.init_game(player_setup, deck=create_full_deck())
        view = game.get_state_for_player(2)
        assert isinstance(state_message(view), GameStateMessage)

        game.state.game_over = True
        assert isinstance(state_message(game.get_state_for_player(2)), GameOverMessage)

    def test_state_decodes_on_host(self, game, player_setup):
        game.init_game(player_setup, deck=create_full_deck())
        view = game.get_state_for_player(2)
        decoded = decode_host_message(encode_message(state_message(view)))
        assert decoded.state == view

    def test_state_decodes_on_client(self, game, player_setup):
        """Test the client reads what the host sends."""
        game.init_game(player_setup, deck=create_full_deck())
        game.state.game_over = True
        body = encode_message(state_message(game.get_state_for_player(2)))

        decoded = client_decode(body)

        assert isinstance(decoded, ClientGameOver)
        view = decoded.state
        assert view.your_seat == 2
        assert len(view.your_hand) == 12
        assert view.board["diamonds"][6] is True
        assert view.last_action.kind == "play"
        assert view.me.name == "Guest"

    def test_restart(self):
        assert isinstance(decode_host_message(encode_message(RestartMessage())), RestartMessage)

    def test_invalid(self):
        with pytest.raises(ProtocolError):
            decode_host_message(b'{"type": "PASS"}')


class TestFraming:
    """Tests for length-prefixed frames."""

    def test_frame(self):
        body = encode_message(PassMessage())
        data = frame(body)
        assert data[:4] == struct.pack("!I", len(body))
        assert data[4:] == body
        assert frame_length(data[:4]) == len(body)

    def test_empty_body(self):
        assert frame_length(frame(b"")[:4]) == 0

    def test_oversize_header(self):
        with pytest.raises(ProtocolError):
            frame_length(struct.pack("!I", MAX_FRAME_BYTES + 1))

    def test_oversize_body(self):
        with pytest.raises(ProtocolError):
            frame(b"x" * (MAX_FRAME_BYTES + 1))

    def test_short_header(self):
        with pytest.raises(ProtocolError):
            frame_length(b"\x00\x00")
