"""Error types raised by the greeter and its relayers.

Every error aborts the operation that raised it before any state is mutated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DeliveryHash, Wei


class HelloRelayError(Exception):
    """Base class for all hello_relay failures."""


class InvalidArgument(HelloRelayError):
    """Construction or send parameters were rejected."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid argument: {reason}")


class InsufficientFunds(HelloRelayError):
    """Funds provided do not cover the quoted delivery cost."""

    def __init__(self, required: Wei, provided: Wei) -> None:
        self.required = required
        self.provided = provided
        super().__init__(f"Insufficient funds: {provided} provided, {required} required")


class Unauthorized(HelloRelayError):
    """Delivery was attempted by a caller that is not a trusted relayer."""

    def __init__(self, caller: Address) -> None:
        self.caller = caller
        super().__init__(f"Unauthorized deliverer 0x{caller.hex()}")


class DecodeError(HelloRelayError):
    """Inbound payload does not match the (string, address) layout."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed greeting payload: {reason}")


class UpstreamError(HelloRelayError):
    """Failure reported by the relay service's pricing or dispatch interface."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Relayer error: {reason}")


class DuplicateDelivery(HelloRelayError):
    """Delivery hash was already applied (only with replay protection on)."""

    def __init__(self, delivery_hash: DeliveryHash) -> None:
        self.delivery_hash = delivery_hash
        super().__init__(f"Delivery 0x{delivery_hash.hex()} already processed")
