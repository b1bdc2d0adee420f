"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Injecting any async Redis-compatible client (real or in-memory fake)
- Plugging in a message serializer for a chat framework's message type
- Unit testing with mock implementations
"""

from .key_value_store import KeyValueStore
from .message_serializer import MessageSerializer

__all__ = [
    "KeyValueStore",
    "MessageSerializer",
]
