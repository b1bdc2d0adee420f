"""Cache entry key derivation."""

import hashlib
import json


def derive_key(prompt: str, llm_key: str, index: int, prefix: str = "") -> str:
    """Derive the Redis key for one generation of a (prompt, model) pair.

    The inputs are hashed as a JSON array, so text containing separators
    cannot make two different tuples encode the same way.

    Args:
        prompt: The prompt text
        llm_key: The model identity string
        index: Zero-based position in the generation sequence
        prefix: Optional key namespace

    Returns:
        The hex SHA-256 digest, prefixed when a prefix is given
    """
    payload = json.dumps([prompt, llm_key, str(index)], ensure_ascii=False)
    digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
    return f"{prefix}{digest}"
