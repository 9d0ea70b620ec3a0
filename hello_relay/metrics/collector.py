"""Metrics collection for simulated relay runs."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from statistics import median
from typing import TYPE_CHECKING

from hello_relay.metrics.results import RelayResults

if TYPE_CHECKING:
    from hello_relay.core.simulator import Simulator
    from hello_relay.core.types import DeliveryHash, DomainId


@dataclass
class MetricsCollector:
    """Collects relay activity shared by every relayer in a simulation."""

    simulator: Simulator

    quotes: int = 0
    fees_collected: int = 0
    payload_bytes: int = 0
    dispatched_per_domain: dict[DomainId, int] = field(default_factory=lambda: defaultdict(int))
    failures_by_reason: dict[str, int] = field(default_factory=lambda: defaultdict(int))

    # Delivery hash -> dispatch time, until the delivery completes or fails
    dispatch_times: dict[DeliveryHash, float] = field(default_factory=dict)
    delivery_latencies: list[float] = field(default_factory=list)
    failed: int = 0

    def record_quote(self) -> None:
        self.quotes += 1

    def record_dispatch(
        self, delivery_hash: DeliveryHash, target_domain: DomainId, fee: int, size_bytes: int
    ) -> None:
        self.dispatch_times[delivery_hash] = self.simulator.current_time
        self.dispatched_per_domain[target_domain] += 1
        self.fees_collected += fee
        self.payload_bytes += size_bytes

    def record_delivery(self, delivery_hash: DeliveryHash) -> None:
        dispatched_at = self.dispatch_times.pop(delivery_hash, None)
        if dispatched_at is not None:
            self.delivery_latencies.append(self.simulator.current_time - dispatched_at)

    def record_failure(self, delivery_hash: DeliveryHash, reason: str) -> None:
        self.dispatch_times.pop(delivery_hash, None)
        self.failed += 1
        self.failures_by_reason[reason] += 1

    @property
    def dispatched(self) -> int:
        return sum(self.dispatched_per_domain.values())

    @property
    def delivered(self) -> int:
        return len(self.delivery_latencies)

    def finalize(self) -> RelayResults:
        dispatched = self.dispatched
        latencies = self.delivery_latencies
        return RelayResults(
            quotes=self.quotes,
            dispatched=dispatched,
            delivered=self.delivered,
            failed=self.failed,
            in_flight=len(self.dispatch_times),
            fees_collected=self.fees_collected,
            payload_bytes=self.payload_bytes,
            delivery_success_rate=self.delivered / dispatched if dispatched else 0.0,
            median_delivery_latency=median(latencies) if latencies else 0.0,
            max_delivery_latency=max(latencies) if latencies else 0.0,
            dispatched_per_domain=dict(self.dispatched_per_domain),
            failures_by_reason=dict(self.failures_by_reason),
        )
