"""Narrow interfaces between greeters and a relay service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DeliveryHash, DomainId, Wei


class DeliveryRelayer(Protocol):
    """Pricing and dispatch side of a relay service.

    Implementations report their own failures by raising; callers propagate
    those errors unmodified.
    """

    @property
    def address(self) -> Address: ...

    def quote_evm_delivery_price(
        self, target_domain: DomainId, receiver_value: Wei, gas_limit: int
    ) -> tuple[Wei, Wei]:
        """Return ``(cost, refund_per_unused_gas)`` for one delivery."""
        ...

    def send_payload_to_evm(
        self,
        value: Wei,
        target_domain: DomainId,
        target_address: Address,
        payload: bytes,
        receiver_value: Wei,
        gas_limit: int,
        *,
        sender: Address,
    ) -> int:
        """Request delivery of ``payload``, paying ``value``. Returns a sequence number."""
        ...


class DeliveryTarget(Protocol):
    """Anything a relayer can deliver a payload to."""

    def on_deliver(
        self,
        payload: bytes,
        additional_messages: list[bytes],
        source_address: Address,
        source_domain: DomainId,
        delivery_hash: DeliveryHash,
        *,
        caller: Address,
    ) -> None: ...


class DeliveryAuthorizer(Protocol):
    """Decides which callers may invoke a receiver's delivery entry point."""

    def is_authorized_deliverer(self, caller: Address) -> bool: ...
