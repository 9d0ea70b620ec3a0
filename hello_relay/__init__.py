"""Cross-domain greetings over a pay-upfront relay service."""

from hello_relay.config import DomainPricing, GreeterConfig, SimulationConfig
from hello_relay.errors import (
    DecodeError,
    DuplicateDelivery,
    HelloRelayError,
    InsufficientFunds,
    InvalidArgument,
    Unauthorized,
    UpstreamError,
)
from hello_relay.greeter.contract import HelloRelay
from hello_relay.protocol.constants import GAS_LIMIT

__all__ = [
    "GAS_LIMIT",
    "DecodeError",
    "DomainPricing",
    "DuplicateDelivery",
    "GreeterConfig",
    "HelloRelay",
    "HelloRelayError",
    "InsufficientFunds",
    "InvalidArgument",
    "SimulationConfig",
    "Unauthorized",
    "UpstreamError",
]
