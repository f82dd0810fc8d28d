"""
Wire Messages - Pydantic models for everything that crosses the socket.

All messages are JSON objects with a "type" discriminator. Field names are
snake_case in Python and camelCase on the wire.

Client -> server:
- playerPut:  { type, move: { row, col } }
- playerRoll: { type, move: { row, col } }
- repeatGame: { type }

Server -> client:
- gameStarted:      { type, field, fieldOpposite, myTurn, state }
- changePlayer:     { type, field, fieldOpposite, myTurn, state }
- resultPut:        { type, state, myTurn }
- gameResult:       { type, win }
- gameAborted:      { type }
- incorrectRequest: { type, message }
"""

from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..engine_core.board import Cell


Grid = list[list[Cell]]


class WireModel(BaseModel):
    """Base for wire models: camelCase aliases, snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Shared Models
# =============================================================================

class Move(WireModel):
    """Target cell, 1-based. Extra keys sent by clients are ignored."""
    row: int = Field(strict=True)
    col: int = Field(strict=True)


class GameState(WireModel):
    """Readiness flags as seen by the recipient."""
    player_ready: bool
    opponent_ready: bool


# =============================================================================
# Client Messages
# =============================================================================

class PlayerPutMessage(WireModel):
    """Place one piece cell on the sender's own board."""
    type: Literal["playerPut"] = "playerPut"
    move: Move


class PlayerRollMessage(WireModel):
    """Fire at the opponent's board."""
    type: Literal["playerRoll"] = "playerRoll"
    move: Move


class RepeatGameMessage(WireModel):
    """Start over with empty boards."""
    type: Literal["repeatGame"] = "repeatGame"


ClientMessage = Annotated[
    Union[PlayerPutMessage, PlayerRollMessage, RepeatGameMessage],
    Field(discriminator="type"),
]


# =============================================================================
# Server Messages
# =============================================================================

class GameStartedMessage(WireModel):
    type: Literal["gameStarted"] = "gameStarted"
    field: Grid
    field_opposite: Grid
    my_turn: bool
    state: GameState


class ChangePlayerMessage(WireModel):
    type: Literal["changePlayer"] = "changePlayer"
    field: Grid
    field_opposite: Grid
    my_turn: bool
    state: GameState


class ResultPutMessage(WireModel):
    """Readiness update for the player who did not just place."""
    type: Literal["resultPut"] = "resultPut"
    state: GameState
    my_turn: bool


class GameResultMessage(WireModel):
    type: Literal["gameResult"] = "gameResult"
    win: bool


class GameAbortedMessage(WireModel):
    type: Literal["gameAborted"] = "gameAborted"


class IncorrectRequestMessage(WireModel):
    type: Literal["incorrectRequest"] = "incorrectRequest"
    message: str


ServerMessage = Annotated[
    Union[
        GameStartedMessage,
        ChangePlayerMessage,
        ResultPutMessage,
        GameResultMessage,
        GameAbortedMessage,
        IncorrectRequestMessage,
    ],
    Field(discriminator="type"),
]
