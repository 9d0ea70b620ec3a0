"""Greeting value objects and relay messages."""

from __future__ import annotations

from dataclasses import dataclass, field

from hello_relay.core.events import Message
from hello_relay.core.types import Address, DeliveryHash, DomainId
from hello_relay.protocol.constants import DELIVERY_OVERHEAD


@dataclass(frozen=True)
class Greeting:
    """A greeting and the address of whoever sent it."""

    text: str
    sender: Address


@dataclass(frozen=True)
class LatestGreeting:
    """The most recently received greeting and where it came from."""

    text: str
    source_domain: DomainId
    sender: Address


@dataclass(frozen=True)
class GreetingReceived:
    """Notification emitted once per applied delivery."""

    text: str
    source_domain: DomainId
    sender: Address


@dataclass
class DeliveryInstruction(Message):
    """Relayer-to-relayer instruction to execute one delivery.

    Emitted by the source domain's relayer when a payload is dispatched, and
    consumed by the target domain's relayer, which invokes the receiver.
    """

    source_domain: DomainId
    source_address: Address
    target_domain: DomainId
    target_address: Address
    payload: bytes = field(repr=False)
    receiver_value: int
    gas_limit: int
    sequence: int
    delivery_hash: DeliveryHash
    additional_messages: list[bytes] = field(default_factory=list, repr=False)

    @property
    def size_bytes(self) -> int:
        return (
            DELIVERY_OVERHEAD
            + len(self.payload)
            + sum(len(m) for m in self.additional_messages)
        )
