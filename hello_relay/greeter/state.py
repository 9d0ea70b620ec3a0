"""Storage for the latest received greeting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hello_relay.protocol.messages import LatestGreeting


class GreetingStore(Protocol):
    def get(self) -> LatestGreeting | None: ...

    def set(self, greeting: LatestGreeting) -> None: ...


class LatestGreetingSlot:
    """Single-slot store with last-write-wins semantics.

    Starts empty. Every ``set`` replaces the previous value outright; there is
    no history and no ordering check.
    """

    def __init__(self) -> None:
        self._latest: LatestGreeting | None = None
        self._writes = 0

    @property
    def writes(self) -> int:
        return self._writes

    def get(self) -> LatestGreeting | None:
        return self._latest

    def set(self, greeting: LatestGreeting) -> None:
        self._latest = greeting
        self._writes += 1
