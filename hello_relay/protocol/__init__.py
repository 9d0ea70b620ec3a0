"""Protocol layer: payload codec, constants and messages."""

from hello_relay.protocol.codec import decode_greeting, encode_greeting
from hello_relay.protocol.constants import GAS_LIMIT, RECEIVER_VALUE, WORD_SIZE
from hello_relay.protocol.messages import (
    DeliveryInstruction,
    Greeting,
    GreetingReceived,
    LatestGreeting,
)

__all__ = [
    "GAS_LIMIT",
    "RECEIVER_VALUE",
    "WORD_SIZE",
    "DeliveryInstruction",
    "Greeting",
    "GreetingReceived",
    "LatestGreeting",
    "decode_greeting",
    "encode_greeting",
]
