"""
Protocol Module - The wire contract between the server and game clients.

Messages are JSON objects discriminated by "type". The codec turns raw
frames into typed pydantic models and back.
"""

from .messages import (
    Move,
    GameState,
    # Client
    PlayerPutMessage,
    PlayerRollMessage,
    RepeatGameMessage,
    ClientMessage,
    # Server
    GameStartedMessage,
    ChangePlayerMessage,
    ResultPutMessage,
    GameResultMessage,
    GameAbortedMessage,
    IncorrectRequestMessage,
    ServerMessage,
)
from .codec import (
    MalformedMessage,
    decode_client_message,
    encode_server_message,
    parse_server_message,
    encode_client_message,
)

__all__ = [
    "Move",
    "GameState",
    "PlayerPutMessage",
    "PlayerRollMessage",
    "RepeatGameMessage",
    "ClientMessage",
    "GameStartedMessage",
    "ChangePlayerMessage",
    "ResultPutMessage",
    "GameResultMessage",
    "GameAbortedMessage",
    "IncorrectRequestMessage",
    "ServerMessage",
    "MalformedMessage",
    "decode_client_message",
    "encode_server_message",
    "parse_server_message",
    "encode_client_message",
]
