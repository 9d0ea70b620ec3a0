"""Core simulation infrastructure."""

from hello_relay.core.actor import Actor, Command, Event, EventPayload, Message
from hello_relay.core.simulator import Simulator
from hello_relay.core.types import (
    ADDRESS_SIZE,
    ZERO_ADDRESS,
    ActorId,
    Address,
    DeliveryHash,
    DomainId,
    Wei,
    is_zero_address,
)

__all__ = [
    "ADDRESS_SIZE",
    "ZERO_ADDRESS",
    "Actor",
    "ActorId",
    "Address",
    "Command",
    "DeliveryHash",
    "DomainId",
    "Event",
    "EventPayload",
    "Message",
    "Simulator",
    "Wei",
    "is_zero_address",
]
