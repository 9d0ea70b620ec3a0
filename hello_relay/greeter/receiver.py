"""Inbound greetings."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TYPE_CHECKING

from hello_relay.errors import DuplicateDelivery, Unauthorized
from hello_relay.protocol.codec import decode_greeting
from hello_relay.protocol.messages import Greeting, GreetingReceived, LatestGreeting

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DeliveryHash, DomainId
    from hello_relay.greeter.state import GreetingStore
    from hello_relay.relayer.interfaces import DeliveryAuthorizer

logger = logging.getLogger(__name__)

GreetingListener = Callable[[GreetingReceived], None]


class TrustedRelayer:
    """Authorizes exactly one relayer address."""

    def __init__(self, relayer: Address) -> None:
        self._relayer = relayer

    @property
    def relayer(self) -> Address:
        return self._relayer

    def is_authorized_deliverer(self, caller: Address) -> bool:
        return caller == self._relayer


class MessageReceiver:
    """Applies greetings delivered by a trusted relayer.

    A delivery is checked, decoded and only then written to the store, so a
    rejected delivery leaves the store untouched. Each applied delivery
    notifies every subscribed listener.
    """

    def __init__(
        self,
        authorizer: DeliveryAuthorizer,
        store: GreetingStore,
        replay_protection: bool = False,
    ) -> None:
        self._authorizer = authorizer
        self._store = store
        self._replay_protection = replay_protection
        self._seen_hashes: set[DeliveryHash] = set()
        self._listeners: list[GreetingListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: GreetingListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: GreetingListener) -> None:
        self._listeners.remove(listener)

    def on_deliver(
        self,
        payload: bytes,
        additional_messages: list[bytes],
        source_address: Address,
        source_domain: DomainId,
        delivery_hash: DeliveryHash,
        *,
        caller: Address,
    ) -> None:
        """Relayer callback for one delivery.

        ``additional_messages`` and ``source_address`` are accepted but unused.
        ``delivery_hash`` is only consulted when replay protection is on;
        otherwise a repeated delivery is applied again.

        Raises:
            Unauthorized: If ``caller`` is not an authorized deliverer.
            DuplicateDelivery: If replay protection is on and the hash was seen.
            DecodeError: If ``payload`` is malformed.
        """
        if not self._authorizer.is_authorized_deliverer(caller):
            logger.warning("Rejected delivery from unauthorized caller 0x%s", caller.hex())
            raise Unauthorized(caller)

        with self._lock:
            if self._replay_protection and delivery_hash in self._seen_hashes:
                raise DuplicateDelivery(delivery_hash)

            greeting = Greeting(*decode_greeting(payload))
            self._store.set(
                LatestGreeting(
                    text=greeting.text,
                    source_domain=source_domain,
                    sender=greeting.sender,
                )
            )
            if self._replay_protection:
                self._seen_hashes.add(delivery_hash)

        logger.info(
            "Greeting received from domain %d (0x%s): %r",
            source_domain,
            greeting.sender.hex(),
            greeting.text,
        )
        event = GreetingReceived(
            text=greeting.text,
            source_domain=source_domain,
            sender=greeting.sender,
        )
        for listener in list(self._listeners):
            listener(event)
