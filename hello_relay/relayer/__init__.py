"""Relay service interfaces and the simulated relayer."""

from hello_relay.relayer.interfaces import DeliveryAuthorizer, DeliveryRelayer, DeliveryTarget
from hello_relay.relayer.simulated import SimulatedRelayer, relayer_id

__all__ = [
    "DeliveryAuthorizer",
    "DeliveryRelayer",
    "DeliveryTarget",
    "SimulatedRelayer",
    "relayer_id",
]
