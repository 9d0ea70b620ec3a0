"""Simulated relay service actor.

One SimulatedRelayer runs per domain. Dispatching on the source domain
schedules a DeliveryInstruction to the target domain's relayer, which invokes
the registered receiver with its own address as caller.
"""

from __future__ import annotations

import logging
from hashlib import sha256
from typing import TYPE_CHECKING

from hello_relay.core.actor import Actor
from hello_relay.core.types import ActorId, DeliveryHash, Wei
from hello_relay.errors import HelloRelayError, UpstreamError
from hello_relay.protocol.messages import DeliveryInstruction

if TYPE_CHECKING:
    from hello_relay.config import DomainPricing
    from hello_relay.core.actor import EventPayload
    from hello_relay.core.simulator import Simulator
    from hello_relay.core.types import Address, DomainId
    from hello_relay.metrics.collector import MetricsCollector
    from hello_relay.relayer.interfaces import DeliveryTarget

logger = logging.getLogger(__name__)

MAX_DOMAIN_ID = 0xFFFF


def relayer_id(domain: DomainId) -> ActorId:
    return ActorId(f"relayer-{domain}")


class SimulatedRelayer(Actor):
    """Relay service endpoint for a single domain.

    Prices deliveries from a per-target-domain table, requires the paid value
    to match the quote exactly, and delivers after ``delivery_delay`` plus
    uniform jitter. A receiver that rejects a delivery is logged and counted;
    the relayer does not retry on its own.
    """

    def __init__(
        self,
        domain: DomainId,
        address: Address,
        simulator: Simulator,
        pricing: dict[DomainId, DomainPricing],
        metrics: MetricsCollector | None = None,
        delivery_delay: float = 15.0,
        delivery_jitter: float = 0.0,
    ) -> None:
        super().__init__(relayer_id(domain), simulator)
        self._domain = domain
        self._address = address
        self._pricing = dict(pricing)
        self._metrics = metrics
        self._delivery_delay = delivery_delay
        self._delivery_jitter = delivery_jitter

        self._targets: dict[Address, DeliveryTarget] = {}
        self._next_sequence = 0

        # Instructions executed on this domain, kept for redelivery
        self._executed: dict[DeliveryHash, DeliveryInstruction] = {}
        self._deliveries = 0
        self._failures = 0

    @property
    def domain(self) -> DomainId:
        return self._domain

    @property
    def address(self) -> Address:
        return self._address

    @property
    def deliveries(self) -> int:
        return self._deliveries

    @property
    def failures(self) -> int:
        return self._failures

    @property
    def executed_hashes(self) -> list[DeliveryHash]:
        return list(self._executed)

    def register_target(self, address: Address, target: DeliveryTarget) -> None:
        """Register a receiver deployed at ``address`` on this domain."""
        self._targets[address] = target

    def set_pricing(self, target_domain: DomainId, pricing: DomainPricing) -> None:
        """Reprice deliveries to ``target_domain``; takes effect on the next quote."""
        self._pricing[target_domain] = pricing

    def quote_evm_delivery_price(
        self, target_domain: DomainId, receiver_value: Wei, gas_limit: int
    ) -> tuple[Wei, Wei]:
        if not 0 <= target_domain <= MAX_DOMAIN_ID:
            raise UpstreamError(f"domain {target_domain} is not a 16-bit chain id")
        pricing = self._pricing.get(target_domain)
        if pricing is None:
            raise UpstreamError(f"unsupported target domain {target_domain}")
        if gas_limit <= 0:
            raise UpstreamError(f"gas limit must be positive, got {gas_limit}")

        if self._metrics is not None:
            self._metrics.record_quote()

        cost = pricing.base_fee + gas_limit * pricing.gas_price + receiver_value
        return Wei(cost), pricing.gas_price

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
        cost, _ = self.quote_evm_delivery_price(target_domain, receiver_value, gas_limit)
        if value != cost:
            raise UpstreamError(f"paid {value}, delivery costs {cost}")

        target_relayer = relayer_id(target_domain)
        if target_relayer not in self._simulator.actors:
            raise UpstreamError(f"no relayer serving domain {target_domain}")

        sequence = self._next_sequence
        self._next_sequence += 1

        instruction = DeliveryInstruction(
            sender=self._id,
            source_domain=self._domain,
            source_address=sender,
            target_domain=target_domain,
            target_address=target_address,
            payload=payload,
            receiver_value=receiver_value,
            gas_limit=gas_limit,
            sequence=sequence,
            delivery_hash=self._delivery_hash(sender, sequence, payload),
        )

        delay = self._delivery_delay
        if self._delivery_jitter:
            delay += self._simulator.rng.uniform(0, self._delivery_jitter)
        self.send(instruction, to=target_relayer, delay=delay)

        if self._metrics is not None:
            self._metrics.record_dispatch(
                instruction.delivery_hash, target_domain, cost, instruction.size_bytes
            )
        return sequence

    def redeliver(self, delivery_hash: DeliveryHash) -> None:
        """Execute a previously executed delivery again, right away."""
        instruction = self._executed.get(delivery_hash)
        if instruction is None:
            raise UpstreamError(f"unknown delivery 0x{delivery_hash.hex()}")
        self.send(instruction, to=self._id)

    def on_event(self, payload: EventPayload) -> None:
        match payload:
            case DeliveryInstruction() as instruction:
                self._execute(instruction)

    def _delivery_hash(self, sender: Address, sequence: int, payload: bytes) -> DeliveryHash:
        digest = sha256()
        digest.update(self._domain.to_bytes(2, "big"))
        digest.update(sender)
        digest.update(sequence.to_bytes(8, "big"))
        digest.update(payload)
        return DeliveryHash(digest.digest())

    def _execute(self, instruction: DeliveryInstruction) -> None:
        self._executed[instruction.delivery_hash] = instruction

        target = self._targets.get(instruction.target_address)
        if target is None:
            self._fail(instruction, "no_target")
            return

        try:
            target.on_deliver(
                instruction.payload,
                list(instruction.additional_messages),
                instruction.source_address,
                instruction.source_domain,
                instruction.delivery_hash,
                caller=self._address,
            )
        except HelloRelayError as e:
            self._fail(instruction, type(e).__name__, e)
            return

        self._deliveries += 1
        if self._metrics is not None:
            self._metrics.record_delivery(instruction.delivery_hash)

    def _fail(
        self, instruction: DeliveryInstruction, reason: str, error: Exception | None = None
    ) -> None:
        logger.warning(
            "Delivery 0x%s to domain %d failed: %s",
            instruction.delivery_hash.hex()[:16],
            self._domain,
            error or reason,
        )
        self._failures += 1
        if self._metrics is not None:
            self._metrics.record_failure(instruction.delivery_hash, reason)
