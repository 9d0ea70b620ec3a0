"""Greeting payload codec.

A greeting travels as the Ethereum ABI encoding of ``(string, address)``::

    word 0   offset of the string tail (always 0x40 when we encode)
    word 1   sender address, left-padded with zeros
    word 2   string length in bytes
    word 3+  UTF-8 bytes, right-padded to a word boundary

The layout carries no version tag, so any change to it is a breaking change
for deployed receivers.
"""

from __future__ import annotations

from hello_relay.core.types import ADDRESS_SIZE, Address
from hello_relay.errors import DecodeError
from hello_relay.protocol.constants import GREETING_STRING_OFFSET, MIN_PAYLOAD_SIZE, WORD_SIZE

_ADDRESS_PADDING = WORD_SIZE - ADDRESS_SIZE


def _word(value: int) -> bytes:
    return value.to_bytes(WORD_SIZE, "big")


def _padded_length(size: int) -> int:
    return -(-size // WORD_SIZE) * WORD_SIZE


def encode_greeting(text: str, sender: Address) -> bytes:
    """Encode a greeting and its sender into a relay payload."""
    if len(sender) != ADDRESS_SIZE:
        raise ValueError(f"Sender must be {ADDRESS_SIZE} bytes, got {len(sender)}")

    data = text.encode("utf-8")
    return b"".join(
        (
            _word(GREETING_STRING_OFFSET),
            b"\x00" * _ADDRESS_PADDING + sender,
            _word(len(data)),
            data.ljust(_padded_length(len(data)), b"\x00"),
        )
    )


def decode_greeting(payload: bytes) -> tuple[str, Address]:
    """Decode a relay payload into ``(text, sender)``.

    Raises:
        DecodeError: If the payload is not an encoded (string, address) tuple.
    """
    if len(payload) < MIN_PAYLOAD_SIZE:
        raise DecodeError(f"payload is {len(payload)} bytes, need at least {MIN_PAYLOAD_SIZE}")
    if len(payload) % WORD_SIZE:
        raise DecodeError(f"payload length {len(payload)} is not word-aligned")

    offset = int.from_bytes(payload[:WORD_SIZE], "big")
    if offset % WORD_SIZE or offset < GREETING_STRING_OFFSET:
        raise DecodeError(f"invalid string offset {offset}")
    if offset + WORD_SIZE > len(payload):
        raise DecodeError(f"string offset {offset} points past end of payload")

    address_word = payload[WORD_SIZE : 2 * WORD_SIZE]
    if any(address_word[:_ADDRESS_PADDING]):
        raise DecodeError("address word has non-zero high bytes")
    sender = Address(address_word[_ADDRESS_PADDING:])

    length = int.from_bytes(payload[offset : offset + WORD_SIZE], "big")
    start = offset + WORD_SIZE
    if start + length > len(payload):
        raise DecodeError(f"string length {length} runs past end of payload")

    try:
        text = payload[start : start + length].decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"string is not valid UTF-8 ({e.reason})") from e

    return text, sender
