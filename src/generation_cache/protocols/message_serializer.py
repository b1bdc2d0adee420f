"""Message serializer protocol.

Chat messages are opaque to the cache. A serializer turns one into the
canonical ``{"type": ..., "data": {...}}`` dict and back.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class MessageSerializer(Protocol):
    """Protocol for chat message (de)serialization."""

    def to_dict(self, message: Any) -> dict[str, Any]:
        """Convert a chat message to its stored dict form.

        Args:
            message: The chat message object

        Returns:
            JSON-serializable dict
        """
        ...

    def from_dict(self, data: dict[str, Any]) -> Any:
        """Rebuild a chat message from its stored dict form.

        Args:
            data: Dict previously produced by ``to_dict``

        Returns:
            The reconstructed chat message
        """
        ...
