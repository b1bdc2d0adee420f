"""Data Transfer Objects for external contracts.

These Pydantic models define the records crossing the package boundary:
credential records handed in by the host, and the JSON record stored in
Redis for each generation.

Internal domain logic should use entities from the entities package.
"""

from .credentials import RedisCacheCredential, RedisCacheUrlCredential
from .stored_generation import StoredGeneration

__all__ = [
    "RedisCacheCredential",
    "RedisCacheUrlCredential",
    "StoredGeneration",
]
