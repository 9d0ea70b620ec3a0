"""Delivery fee quoting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hello_relay.core.types import Wei
from hello_relay.protocol.constants import GAS_LIMIT, RECEIVER_VALUE

if TYPE_CHECKING:
    from hello_relay.core.types import DomainId
    from hello_relay.relayer.interfaces import DeliveryRelayer


class FeeQuoter:
    """Asks the relayer what one greeting delivery to a domain costs.

    Every call re-quotes; prices are never cached because the relayer may
    reprice at any time.
    """

    def __init__(self, relayer: DeliveryRelayer) -> None:
        self._relayer = relayer

    def quote(self, target_domain: DomainId) -> Wei:
        cost, _refund_per_gas = self._relayer.quote_evm_delivery_price(
            target_domain, Wei(RECEIVER_VALUE), GAS_LIMIT
        )
        return cost
