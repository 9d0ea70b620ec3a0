"""Relay run results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hello_relay.core.types import DomainId


@dataclass
class RelayResults:
    """Derived metrics computed after a simulated run completes."""

    quotes: int
    dispatched: int
    delivered: int
    failed: int
    in_flight: int
    fees_collected: int
    payload_bytes: int
    delivery_success_rate: float
    median_delivery_latency: float
    max_delivery_latency: float
    dispatched_per_domain: dict[DomainId, int] = field(default_factory=dict)
    failures_by_reason: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {
            "quotes": self.quotes,
            "dispatched": self.dispatched,
            "delivered": self.delivered,
            "failed": self.failed,
            "in_flight": self.in_flight,
            "fees_collected": self.fees_collected,
            "payload_bytes": self.payload_bytes,
            "delivery_success_rate": self.delivery_success_rate,
            "median_delivery_latency": self.median_delivery_latency,
            "max_delivery_latency": self.max_delivery_latency,
            "dispatched_per_domain": {str(k): v for k, v in self.dispatched_per_domain.items()},
            "failures_by_reason": dict(self.failures_by_reason),
        }
