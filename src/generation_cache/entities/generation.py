"""Generation domain entities."""

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class PlainTextGeneration:
    """A plain-text model output."""

    text: str


@dataclass(frozen=True)
class ChatGeneration:
    """A chat model output carrying its message.

    Attributes:
        text: The generated text
        message: Chat message object, opaque to the cache
    """

    text: str
    message: Any


Generation = Union[PlainTextGeneration, ChatGeneration]
