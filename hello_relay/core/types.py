"""Core type aliases for cross-domain messaging."""

from typing import NewType

# Actor identification - unique string identifier for each actor in the simulation
ActorId = NewType("ActorId", str)

# Domain identifier - opaque 16-bit tag naming a chain
DomainId = NewType("DomainId", int)

# Account or contract address - 20 raw bytes
Address = NewType("Address", bytes)

# Delivery hash - 32-byte identifier of one delivery attempt, owned by the relayer
DeliveryHash = NewType("DeliveryHash", bytes)

# Native token amount in wei
Wei = NewType("Wei", int)

ADDRESS_SIZE = 20
ZERO_ADDRESS = Address(b"\x00" * ADDRESS_SIZE)


def is_zero_address(address: bytes) -> bool:
    return not any(address)

