"""Shared pytest fixtures for hello_relay tests."""

from dataclasses import dataclass, field

import pytest

from hello_relay.config import DomainPricing
from hello_relay.core.simulator import Simulator
from hello_relay.core.types import Address, DomainId, Wei
from hello_relay.errors import UpstreamError
from hello_relay.greeter.contract import HelloRelay
from hello_relay.metrics.collector import MetricsCollector
from hello_relay.relayer.simulated import SimulatedRelayer

RELAYER = Address(b"\x11" * 20)
GREETER = Address(b"\x22" * 20)

SOURCE_DOMAIN = DomainId(2)
TARGET_DOMAIN = DomainId(5)

PRICING = DomainPricing(base_fee=Wei(1_000), gas_price=Wei(2))


@dataclass
class Dispatch:
    value: int
    target_domain: DomainId
    target_address: Address
    payload: bytes
    receiver_value: int
    gas_limit: int
    sender: Address


@dataclass
class FakeRelayer:
    """In-memory relayer double recording every quote and dispatch."""

    address: Address = RELAYER
    price: int = 101_000
    refund_per_gas: int = 2
    supported: set[int] = field(default_factory=lambda: {int(TARGET_DOMAIN)})
    quotes: list[tuple[int, int, int]] = field(default_factory=list)
    dispatches: list[Dispatch] = field(default_factory=list)
    dispatch_error: Exception | None = None

    def quote_evm_delivery_price(
        self, target_domain: DomainId, receiver_value: Wei, gas_limit: int
    ) -> tuple[Wei, Wei]:
        self.quotes.append((target_domain, receiver_value, gas_limit))
        if target_domain not in self.supported:
            raise UpstreamError(f"unsupported target domain {target_domain}")
        return Wei(self.price), Wei(self.refund_per_gas)

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
        if self.dispatch_error is not None:
            raise self.dispatch_error
        self.dispatches.append(
            Dispatch(
                value, target_domain, target_address, payload, receiver_value, gas_limit, sender
            )
        )
        return len(self.dispatches) - 1


@pytest.fixture
def fake_relayer() -> FakeRelayer:
    return FakeRelayer()


@pytest.fixture
def greeter(fake_relayer: FakeRelayer) -> HelloRelay:
    """Greeter wired to the fake relayer."""
    return HelloRelay(address=GREETER, relayer=fake_relayer)


@pytest.fixture
def simulator() -> Simulator:
    """Create a fresh simulator with default seed."""
    return Simulator(seed=42)


@pytest.fixture
def metrics(simulator: Simulator) -> MetricsCollector:
    """Create a metrics collector."""
    return MetricsCollector(simulator=simulator)


@pytest.fixture
def relayer_pair(
    simulator: Simulator, metrics: MetricsCollector
) -> tuple[SimulatedRelayer, SimulatedRelayer]:
    """Two simulated relayers that price deliveries to each other."""
    source = SimulatedRelayer(
        domain=SOURCE_DOMAIN,
        address=Address(b"\x01" * 20),
        simulator=simulator,
        pricing={TARGET_DOMAIN: PRICING},
        metrics=metrics,
        delivery_delay=10.0,
    )
    target = SimulatedRelayer(
        domain=TARGET_DOMAIN,
        address=Address(b"\x05" * 20),
        simulator=simulator,
        pricing={SOURCE_DOMAIN: PRICING},
        metrics=metrics,
        delivery_delay=10.0,
    )
    simulator.register_actor(source)
    simulator.register_actor(target)
    return source, target
