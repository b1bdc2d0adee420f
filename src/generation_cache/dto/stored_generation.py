"""Wire record for one cached generation."""

from typing import Any

from pydantic import BaseModel, Field


class StoredGeneration(BaseModel):
    """JSON record stored under one cache entry key."""

    text: str = Field(..., description="The generated text")
    message: dict[str, Any] | None = Field(
        None,
        description="Serialized chat message, present only for chat generations",
    )
