"""A greeter deployment on one domain."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hello_relay.config import GreeterConfig
from hello_relay.greeter.quoter import FeeQuoter
from hello_relay.greeter.receiver import MessageReceiver, TrustedRelayer
from hello_relay.greeter.sender import MessageSender
from hello_relay.greeter.state import LatestGreetingSlot
from hello_relay.protocol.constants import GAS_LIMIT

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DeliveryHash, DomainId, Wei
    from hello_relay.greeter.receiver import GreetingListener
    from hello_relay.greeter.state import GreetingStore
    from hello_relay.protocol.messages import LatestGreeting
    from hello_relay.relayer.interfaces import DeliveryAuthorizer, DeliveryRelayer


class HelloRelay:
    """Sends greetings to other domains and keeps the latest one received.

    Wires a FeeQuoter and MessageSender for the outbound path and a
    MessageReceiver over a single-slot store for the inbound path. The relay
    address in ``config`` is fixed for the lifetime of the deployment.
    """

    GAS_LIMIT = GAS_LIMIT

    def __init__(
        self,
        address: Address,
        relayer: DeliveryRelayer,
        config: GreeterConfig | None = None,
        authorizer: DeliveryAuthorizer | None = None,
        store: GreetingStore | None = None,
    ) -> None:
        if config is None:
            config = GreeterConfig(relayer=relayer.address)

        self._address = address
        self._config = config
        self._store = store if store is not None else LatestGreetingSlot()
        self._quoter = FeeQuoter(relayer)
        self._sender = MessageSender(address, relayer, self._quoter)
        self._receiver = MessageReceiver(
            authorizer=authorizer or TrustedRelayer(config.relayer),
            store=self._store,
            replay_protection=config.replay_protection,
        )

    @property
    def address(self) -> Address:
        return self._address

    @property
    def config(self) -> GreeterConfig:
        return self._config

    @property
    def gas_limit(self) -> int:
        return self.GAS_LIMIT

    @property
    def latest_greeting(self) -> LatestGreeting | None:
        return self._store.get()

    @property
    def latest_text(self) -> str:
        latest = self._store.get()
        return latest.text if latest is not None else ""

    def subscribe(self, listener: GreetingListener) -> None:
        self._receiver.subscribe(listener)

    def quote(self, target_domain: DomainId) -> Wei:
        """Cost of sending one greeting to ``target_domain``."""
        return self._quoter.quote(target_domain)

    def send(
        self,
        target_domain: DomainId,
        target_address: Address,
        text: str,
        funds_provided: Wei,
        caller: Address,
    ) -> int:
        return self._sender.send(target_domain, target_address, text, funds_provided, caller)

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
        self._receiver.on_deliver(
            payload,
            additional_messages,
            source_address,
            source_domain,
            delivery_hash,
            caller=caller,
        )
