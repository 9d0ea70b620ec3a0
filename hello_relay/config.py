"""Greeter and simulation configuration."""

from __future__ import annotations

from dataclasses import dataclass, field

from hello_relay.core.types import ADDRESS_SIZE, Address, DomainId, Wei, is_zero_address
from hello_relay.errors import InvalidArgument


@dataclass(frozen=True)
class GreeterConfig:
    """Immutable settings for one greeter deployment."""

    relayer: Address  # the only address allowed to deliver greetings
    replay_protection: bool = False  # reject delivery hashes seen before

    def __post_init__(self) -> None:
        if len(self.relayer) != ADDRESS_SIZE:
            raise InvalidArgument(f"relayer address must be {ADDRESS_SIZE} bytes")
        if is_zero_address(self.relayer):
            raise InvalidArgument("relayer address")


@dataclass(frozen=True)
class DomainPricing:
    """Delivery pricing the simulated relayer charges for one target domain."""

    base_fee: Wei  # flat fee per delivery
    gas_price: Wei  # price per unit of execution budget


@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for a simulated multi-domain greeter deployment."""

    # Domains (Wormhole chain ids of the usual EVM testnets)
    domains: tuple[DomainId, ...] = (DomainId(2), DomainId(5), DomainId(6), DomainId(14))
    pricing: dict[DomainId, DomainPricing] = field(default_factory=dict)
    default_pricing: DomainPricing = DomainPricing(
        base_fee=Wei(10**14),  # 0.0001 ETH
        gas_price=Wei(10**9),  # 1 gwei
    )

    # Relay timing (seconds)
    delivery_delay: float = 15.0
    delivery_jitter: float = 5.0

    # Workload
    greetings: int = 10
    replay_protection: bool = False

    # Simulation parameters
    seed: int = 42
    duration: float = 600.0

    def __post_init__(self) -> None:
        if len(set(self.domains)) < 2:
            raise ValueError("At least two distinct domains are required")
        if len(set(self.domains)) != len(self.domains):
            raise ValueError("Domains must not repeat")
        if self.delivery_delay < 0 or self.delivery_jitter < 0:
            raise ValueError("Delivery delay and jitter must be non-negative")

    def pricing_for(self, domain: DomainId) -> DomainPricing:
        return self.pricing.get(domain, self.default_pricing)
