"""Chat message domain entity."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ChatMessage:
    """Minimal chat message used by the default message serializer.

    Attributes:
        type: Message role type (e.g. "ai", "human", "system")
        content: Message content
        additional_kwargs: Any other message fields, kept as-is
    """

    type: str
    content: Any
    additional_kwargs: dict[str, Any] = field(default_factory=dict)
