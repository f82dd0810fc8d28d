"""
Message Codec - Raw frames to typed messages and back.

Decoding never raises: anything that is not a well-formed client message
becomes a MalformedMessage carrying a diagnostic for the sender.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Union
import json

from pydantic import TypeAdapter, ValidationError

from .messages import (
    ClientMessage,
    ServerMessage,
    PlayerPutMessage,
    PlayerRollMessage,
    RepeatGameMessage,
)


CLIENT_MESSAGE_TYPES = frozenset({"playerPut", "playerRoll", "repeatGame"})

_client_adapter: TypeAdapter = TypeAdapter(ClientMessage)
_server_adapter: TypeAdapter = TypeAdapter(ServerMessage)


@dataclass(frozen=True)
class MalformedMessage:
    """An inbound frame that could not be decoded."""
    message: str


DecodedMessage = Union[PlayerPutMessage, PlayerRollMessage, RepeatGameMessage, MalformedMessage]


def decode_client_message(raw: Any) -> DecodedMessage:
    """
    Decode an inbound frame.

    Args:
        raw: Text frame, or UTF-8 bytes

    Returns:
        A typed client message, or MalformedMessage
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError:
            return MalformedMessage("Wrong data type")

    if not isinstance(raw, str):
        return MalformedMessage("Wrong data type")

    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError, oversized integer literals, runaway nesting
        return MalformedMessage(f"Can't parse JSON data: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("type"), str):
        return MalformedMessage("Message type is missing")

    message_type = data["type"]
    if message_type not in CLIENT_MESSAGE_TYPES:
        return MalformedMessage(f'Unknown message type: "{message_type}"')

    try:
        return _client_adapter.validate_python(data)
    except ValidationError as e:
        return MalformedMessage(f"Invalid {message_type} message: {_summarize(e)}")


def encode_server_message(message: ServerMessage) -> str:
    """Serialize a server message with wire (camelCase) keys."""
    return message.model_dump_json(by_alias=True)


def parse_server_message(raw: str | bytes) -> ServerMessage:
    """Inverse of encode_server_message. Raises ValidationError on bad input."""
    return _server_adapter.validate_json(raw)


def encode_client_message(message: ClientMessage) -> str:
    """Serialize a client message (used by clients and tests)."""
    return message.model_dump_json(by_alias=True)


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err["loc"])
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts)
