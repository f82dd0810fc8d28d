"""
Tests for the message codec.

Validates that:
- Each client message kind decodes to its model
- Every bad payload becomes a MalformedMessage with a diagnostic
- Server messages encode with wire (camelCase) keys
"""

import json
import sys

import pytest

from ..engine_core.board import Board, Cell
from ..protocol import (
    MalformedMessage,
    Move,
    GameState,
    PlayerPutMessage,
    PlayerRollMessage,
    RepeatGameMessage,
    ChangePlayerMessage,
    ResultPutMessage,
    GameResultMessage,
    GameAbortedMessage,
    IncorrectRequestMessage,
    decode_client_message,
    encode_server_message,
    encode_client_message,
    parse_server_message,
)


class TestDecode:
    """Tests for decoding client frames."""

    def test_player_put(self):
        message = decode_client_message('{"type": "playerPut", "move": {"row": 3, "col": 7}}')
        assert isinstance(message, PlayerPutMessage)
        assert message.move.row == 3
        assert message.move.col == 7

    def test_player_roll(self):
        message = decode_client_message('{"type": "playerRoll", "move": {"row": 1, "col": 10}}')
        assert isinstance(message, PlayerRollMessage)
        assert (message.move.row, message.move.col) == (1, 10)

    def test_repeat_game(self):
        assert isinstance(decode_client_message('{"type": "repeatGame"}'), RepeatGameMessage)

    def test_move_extra_keys_are_ignored(self):
        """Clients tag moves with their own type field."""
        raw = '{"type": "playerPut", "move": {"type": "PutShip", "row": 2, "col": 2}}'
        message = decode_client_message(raw)
        assert isinstance(message, PlayerPutMessage)

    def test_bytes_frame(self):
        message = decode_client_message(b'{"type": "repeatGame"}')
        assert isinstance(message, RepeatGameMessage)

    def test_client_encoding_decodes(self):
        raw = encode_client_message(PlayerRollMessage(move=Move(row=4, col=6)))
        assert decode_client_message(raw) == PlayerRollMessage(move=Move(row=4, col=6))


class TestMalformed:
    """Tests for rejected payloads."""

    @pytest.mark.parametrize("raw", [None, 42, ["playerPut"], b"\xff\xfe"])
    def test_wrong_data_type(self, raw):
        message = decode_client_message(raw)
        assert message == MalformedMessage("Wrong data type")

    def test_invalid_json(self):
        message = decode_client_message("{not json")
        assert isinstance(message, MalformedMessage)
        assert message.message.startswith("Can't parse JSON data: ")

    def test_deeply_nested_json(self):
        message = decode_client_message("[" * 100000)
        assert isinstance(message, MalformedMessage)
        assert message.message.startswith("Can't parse JSON data: ")

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"),
        reason="interpreter has no integer string conversion limit",
    )
    def test_oversized_integer(self):
        raw = '{"type": "playerPut", "move": {"row": %s, "col": 1}}' % ("9" * 5000)
        message = decode_client_message(raw)
        assert isinstance(message, MalformedMessage)
        assert message.message.startswith("Can't parse JSON data: ")

    @pytest.mark.parametrize("raw", ["[]", '"playerPut"', "{}", '{"type": 5}'])
    def test_missing_type(self, raw):
        assert decode_client_message(raw) == MalformedMessage("Message type is missing")

    def test_unknown_type(self):
        message = decode_client_message('{"type": "hello"}')
        assert message == MalformedMessage('Unknown message type: "hello"')

    def test_server_type_from_client_is_unknown(self):
        message = decode_client_message('{"type": "gameResult", "win": true}')
        assert message == MalformedMessage('Unknown message type: "gameResult"')

    def test_missing_move(self):
        message = decode_client_message('{"type": "playerPut"}')
        assert isinstance(message, MalformedMessage)
        assert message.message.startswith("Invalid playerPut message: ")
        assert "move" in message.message

    @pytest.mark.parametrize("move", [
        {"row": "1", "col": 1},
        {"row": 1},
        {"row": 1.5, "col": 2},
        {"row": True, "col": 2},
    ])
    def test_bad_move_shape(self, move):
        raw = json.dumps({"type": "playerRoll", "move": move})
        message = decode_client_message(raw)
        assert isinstance(message, MalformedMessage)
        assert message.message.startswith("Invalid playerRoll message: ")


class TestEncode:
    """Tests for encoding server messages."""

    def test_change_player_wire_keys(self):
        own = Board()
        own.place(1, 1)
        message = ChangePlayerMessage(
            field=own.view(reveal=True),
            field_opposite=Board().view(reveal=False),
            my_turn=True,
            state=GameState(player_ready=False, opponent_ready=True),
        )

        data = json.loads(encode_server_message(message))

        assert data["type"] == "changePlayer"
        assert set(data) == {"type", "field", "fieldOpposite", "myTurn", "state"}
        assert data["field"][0][0] == "S"
        assert data["field"][0][1] == ""
        assert len(data["fieldOpposite"]) == 10
        assert data["myTurn"] is True
        assert data["state"] == {"playerReady": False, "opponentReady": True}

    def test_result_put_wire_keys(self):
        message = ResultPutMessage(
            state=GameState(player_ready=True, opponent_ready=False),
            my_turn=False,
        )
        data = json.loads(encode_server_message(message))
        assert data == {
            "type": "resultPut",
            "state": {"playerReady": True, "opponentReady": False},
            "myTurn": False,
        }

    def test_small_messages(self):
        assert json.loads(encode_server_message(GameAbortedMessage())) == {"type": "gameAborted"}
        assert json.loads(encode_server_message(GameResultMessage(win=False))) == {
            "type": "gameResult",
            "win": False,
        }
        assert json.loads(encode_server_message(IncorrectRequestMessage(message="Not your turn"))) == {
            "type": "incorrectRequest",
            "message": "Not your turn",
        }

    def test_encoding_is_lossless(self):
        board = Board()
        board.place(2, 3)
        board.fire(2, 3)
        board.fire(4, 4)
        message = ChangePlayerMessage(
            field=board.view(),
            field_opposite=board.view(reveal=False),
            my_turn=False,
            state=GameState(player_ready=True, opponent_ready=True),
        )

        parsed = parse_server_message(encode_server_message(message))

        assert parsed == message
        assert parsed.field[1][2] == Cell.HIT
        assert parsed.field[3][3] == Cell.MISS
