"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for wire contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .chat_message import ChatMessage
from .connection_config import ConnectionConfig
from .generation import ChatGeneration, Generation, PlainTextGeneration

__all__ = [
    "ChatGeneration",
    "ChatMessage",
    "ConnectionConfig",
    "Generation",
    "PlainTextGeneration",
]
