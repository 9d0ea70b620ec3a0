"""Outbound greetings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hello_relay.core.types import ADDRESS_SIZE, Wei, is_zero_address
from hello_relay.errors import InsufficientFunds, InvalidArgument
from hello_relay.protocol.codec import encode_greeting
from hello_relay.protocol.constants import GAS_LIMIT, RECEIVER_VALUE
from hello_relay.protocol.messages import Greeting

if TYPE_CHECKING:
    from hello_relay.core.types import Address, DomainId
    from hello_relay.greeter.quoter import FeeQuoter
    from hello_relay.relayer.interfaces import DeliveryRelayer

logger = logging.getLogger(__name__)


def _is_valid_address(address: Address | None) -> bool:
    return (
        address is not None and len(address) == ADDRESS_SIZE and not is_zero_address(address)
    )


class MessageSender:
    """Validates, prices and dispatches greetings to other domains.

    The sender never mutates local state and never retries: once the relayer
    accepts a dispatch, delivery is entirely its responsibility.
    """

    def __init__(self, address: Address, relayer: DeliveryRelayer, quoter: FeeQuoter) -> None:
        self._address = address
        self._relayer = relayer
        self._quoter = quoter

    def send(
        self,
        target_domain: DomainId,
        target_address: Address,
        text: str,
        funds_provided: Wei,
        caller: Address,
    ) -> int:
        """Send ``text`` to ``target_address`` on ``target_domain``.

        Exactly the quoted cost is forwarded to the relayer; whatever the
        caller provided above that is not touched.

        Returns:
            The relayer's sequence number for the dispatch.

        Raises:
            InvalidArgument: If the target address is missing, zero or not
                20 bytes wide, the text is empty, or the caller is not 20 bytes.
            InsufficientFunds: If ``funds_provided`` is below the fresh quote.
        """
        if not _is_valid_address(target_address):
            raise InvalidArgument("target address")
        if not text:
            raise InvalidArgument("empty message")
        if caller is None or len(caller) != ADDRESS_SIZE:
            raise InvalidArgument("caller address")

        cost = self._quoter.quote(target_domain)
        if funds_provided < cost:
            raise InsufficientFunds(required=cost, provided=funds_provided)

        greeting = Greeting(text=text, sender=caller)
        payload = encode_greeting(greeting.text, greeting.sender)

        sequence = self._relayer.send_payload_to_evm(
            cost,
            target_domain,
            target_address,
            payload,
            Wei(RECEIVER_VALUE),
            GAS_LIMIT,
            sender=self._address,
        )
        logger.debug(
            "Dispatched greeting seq=%d to domain %d (0x%s), cost=%d",
            sequence,
            target_domain,
            target_address.hex(),
            cost,
        )
        return sequence
