"""Service layer for business logic.

This package contains services that implement the caching protocol:
- GenerationCache: lookup/update of model generations
- GenerationCodec: generation <-> stored JSON
- IndexedSequence: ordered values under indexed keys
"""

from .generation_cache import GenerationCache
from .generation_codec import ChatMessageSerializer, GenerationCodec
from .indexed_sequence import IndexedSequence

__all__ = [
    "ChatMessageSerializer",
    "GenerationCache",
    "GenerationCodec",
    "IndexedSequence",
]
