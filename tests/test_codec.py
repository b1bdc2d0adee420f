"""Tests for the generation codec."""

import json

import pytest

from generation_cache import (
    CacheCorruptionError,
    ChatGeneration,
    ChatMessage,
    GenerationCodec,
    PlainTextGeneration,
)


@pytest.fixture
def codec():
    """Create a codec with the default message serializer."""
    return GenerationCodec()


def test_encode_plain_text_has_no_message(codec):
    """Plain generations store only text."""
    raw = codec.encode(PlainTextGeneration(text="4"))
    assert json.loads(raw) == {"text": "4"}


def test_encode_chat_generation_stores_message(codec):
    """Chat generations store the message in type/data form."""
    message = ChatMessage(type="ai", content="4", additional_kwargs={"name": "bot"})
    raw = codec.encode(ChatGeneration(text="4", message=message))
    assert json.loads(raw) == {
        "text": "4",
        "message": {"type": "ai", "data": {"content": "4", "name": "bot"}},
    }


def test_decode_chat_generation(codec):
    """Stored messages are rebuilt through the serializer."""
    raw = json.dumps({"text": "hi", "message": {"type": "human", "data": {"content": "hi"}}})
    assert codec.decode(raw) == ChatGeneration(
        text="hi",
        message=ChatMessage(type="human", content="hi"),
    )


def test_decode_accepts_bytes(codec):
    """Values read without decode_responses arrive as bytes."""
    assert codec.decode(b'{"text": "4"}') == PlainTextGeneration(text="4")


def test_custom_message_serializer_is_used():
    """An injected serializer handles opaque message objects."""

    class UpperSerializer:
        def to_dict(self, message):
            return {"type": "ai", "data": {"content": message.upper()}}

        def from_dict(self, data):
            return data["data"]["content"].lower()

    codec = GenerationCodec(message_serializer=UpperSerializer())
    raw = codec.encode(ChatGeneration(text="x", message="hello"))
    assert codec.decode(raw) == ChatGeneration(text="x", message="hello")


@pytest.mark.parametrize("raw", ["not json", "", '{"message": null}', "[1, 2]"])
def test_decode_corrupt_value_raises(codec, raw):
    """Unreadable data is an error, not a miss."""
    with pytest.raises(CacheCorruptionError) as exc_info:
        codec.decode(raw, key="k0")
    assert exc_info.value.key == "k0"


def test_decode_message_without_type_raises(codec):
    """A message the serializer cannot rebuild is corruption."""
    raw = json.dumps({"text": "4", "message": {"data": {"content": "4"}}})
    with pytest.raises(CacheCorruptionError):
        codec.decode(raw)


def test_additional_kwargs_cannot_override_content(codec):
    """The message content wins over a 'content' entry in additional_kwargs."""
    message = ChatMessage(type="ai", content="real", additional_kwargs={"content": "stale"})
    raw = codec.encode(ChatGeneration(text="real", message=message))
    assert json.loads(raw)["message"]["data"]["content"] == "real"


def test_decode_invalid_utf8_bytes_raises(codec):
    """Undecodable bytes are corruption."""
    with pytest.raises(CacheCorruptionError):
        codec.decode(b'{"text": "\xff"}', key="k0")
