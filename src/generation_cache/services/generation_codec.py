"""Generation codec.

Converts generations to and from the JSON record stored in Redis.
"""

from typing import Any

from pydantic import ValidationError

from generation_cache.dto import StoredGeneration
from generation_cache.entities import ChatGeneration, ChatMessage, Generation, PlainTextGeneration
from generation_cache.errors import CacheCorruptionError
from generation_cache.protocols import MessageSerializer


class ChatMessageSerializer:
    """Default serializer for ChatMessage entities.

    Satisfies the MessageSerializer protocol. Stored form:
    ``{"type": "ai", "data": {"content": "...", ...}}``.
    """

    def to_dict(self, message: ChatMessage) -> dict[str, Any]:
        return {
            "type": message.type,
            "data": {**message.additional_kwargs, "content": message.content},
        }

    def from_dict(self, data: dict[str, Any]) -> ChatMessage:
        payload = dict(data.get("data") or {})
        content = payload.pop("content", "")
        return ChatMessage(type=data["type"], content=content, additional_kwargs=payload)


class GenerationCodec:
    """Encode and decode generations.

    Example:
        ```python
        codec = GenerationCodec()
        raw = codec.encode(PlainTextGeneration(text="4"))
        assert codec.decode(raw) == PlainTextGeneration(text="4")
        ```
    """

    def __init__(self, message_serializer: MessageSerializer | None = None) -> None:
        """Initialize the codec.

        Args:
            message_serializer: Converts chat messages. Defaults to ChatMessageSerializer.
        """
        self._messages = message_serializer or ChatMessageSerializer()

    def encode(self, generation: Generation) -> str:
        """Encode a generation as a JSON string.

        Args:
            generation: Plain-text or chat generation

        Returns:
            The JSON record
        """
        message = None
        if isinstance(generation, ChatGeneration):
            message = self._messages.to_dict(generation.message)
        stored = StoredGeneration(text=generation.text, message=message)
        return stored.model_dump_json(exclude_none=True)

    def decode(self, raw: str | bytes, key: str | None = None) -> Generation:
        """Decode a stored JSON record into a generation.

        Args:
            raw: The stored value
            key: The Redis key it was read from, for error reporting

        Returns:
            ChatGeneration if the record carries a message, else PlainTextGeneration

        Raises:
            CacheCorruptionError: If the record is not a valid stored generation
        """
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            stored = StoredGeneration.model_validate_json(raw)
        except (UnicodeDecodeError, ValidationError) as e:
            raise CacheCorruptionError(f"Unreadable cached generation at {key}: {e}", key=key) from e

        if stored.message is None:
            return PlainTextGeneration(text=stored.text)

        try:
            message = self._messages.from_dict(stored.message)
        except (KeyError, TypeError, ValueError) as e:
            raise CacheCorruptionError(f"Unreadable cached message at {key}: {e}", key=key) from e
        return ChatGeneration(text=stored.text, message=message)
