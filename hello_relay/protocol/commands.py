"""Commands for local simulation events (not relayed between domains)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hello_relay.core.events import Command

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DomainId

__all__ = ["Command", "SendGreeting"]


@dataclass
class SendGreeting(Command):
    """Ask a client to send a greeting from its domain."""

    target_domain: DomainId
    target_address: Address
    text: str
    caller: Address
    tip: int = 0  # funds provided above the quote
