"""Tests for the simulated relay service."""

import pytest

from hello_relay.config import DomainPricing
from hello_relay.core.simulator import Simulator
from hello_relay.core.types import Address, DomainId, Wei
from hello_relay.errors import UpstreamError
from hello_relay.greeter.contract import HelloRelay
from hello_relay.metrics.collector import MetricsCollector
from hello_relay.protocol.codec import encode_greeting
from hello_relay.protocol.constants import GAS_LIMIT
from hello_relay.relayer.simulated import SimulatedRelayer, relayer_id

ALICE = Address(b"\xaa" * 20)
SOURCE_GREETER = Address(b"\x02" * 20)
TARGET_GREETER = Address(b"\x50" * 20)

RelayerPair = tuple[SimulatedRelayer, SimulatedRelayer]


def deploy(relayer: SimulatedRelayer, address: Address) -> HelloRelay:
    greeter = HelloRelay(address=address, relayer=relayer)
    relayer.register_target(address, greeter)
    return greeter


class TestQuoting:
    def test_price_formula(self, relayer_pair: RelayerPair) -> None:
        """Cost is base fee plus gas limit times gas price plus receiver value."""
        source, _ = relayer_pair

        cost, refund = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)

        assert cost == 1_000 + GAS_LIMIT * 2
        assert refund == 2

    def test_receiver_value_added_to_cost(self, relayer_pair: RelayerPair) -> None:
        """Value forwarded to the receiver is charged on top."""
        source, _ = relayer_pair

        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(7), GAS_LIMIT)

        assert cost == 1_000 + GAS_LIMIT * 2 + 7

    def test_unknown_domain(self, relayer_pair: RelayerPair) -> None:
        """Domains without pricing are rejected."""
        source, _ = relayer_pair

        with pytest.raises(UpstreamError, match="unsupported target domain 42"):
            source.quote_evm_delivery_price(DomainId(42), Wei(0), GAS_LIMIT)

    def test_domain_out_of_range(self, relayer_pair: RelayerPair) -> None:
        """Domain ids are 16-bit."""
        source, _ = relayer_pair

        with pytest.raises(UpstreamError, match="16-bit"):
            source.quote_evm_delivery_price(DomainId(70_000), Wei(0), GAS_LIMIT)

    def test_repricing(self, relayer_pair: RelayerPair) -> None:
        """New pricing applies to the next quote."""
        source, _ = relayer_pair
        source.set_pricing(DomainId(5), DomainPricing(base_fee=Wei(0), gas_price=Wei(10)))

        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)

        assert cost == GAS_LIMIT * 10

    def test_quotes_counted(self, relayer_pair: RelayerPair, metrics: MetricsCollector) -> None:
        """Successful quotes are recorded."""
        source, _ = relayer_pair

        source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)

        assert metrics.quotes == 2


class TestDispatch:
    def test_value_must_match_quote(self, relayer_pair: RelayerPair) -> None:
        """Overpaying or underpaying the relayer is refused."""
        source, _ = relayer_pair
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        payload = encode_greeting("hi", ALICE)

        for value in (cost - 1, cost + 1):
            with pytest.raises(UpstreamError, match="delivery costs"):
                source.send_payload_to_evm(
                    Wei(value), DomainId(5), TARGET_GREETER, payload, Wei(0), GAS_LIMIT,
                    sender=SOURCE_GREETER,
                )

    def test_missing_target_relayer(self, simulator: Simulator) -> None:
        """Priced domain without a registered relayer cannot be dispatched to."""
        lonely = SimulatedRelayer(
            domain=DomainId(2),
            address=Address(b"\x01" * 20),
            simulator=simulator,
            pricing={DomainId(9): DomainPricing(base_fee=Wei(1), gas_price=Wei(0))},
        )
        simulator.register_actor(lonely)

        with pytest.raises(UpstreamError, match="no relayer serving domain 9"):
            lonely.send_payload_to_evm(
                Wei(1), DomainId(9), TARGET_GREETER, b"", Wei(0), GAS_LIMIT, sender=SOURCE_GREETER
            )

    def test_sequence_numbers_increase(self, relayer_pair: RelayerPair) -> None:
        """Each dispatch gets the next sequence number."""
        source, _ = relayer_pair
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)

        sequences = [
            source.send_payload_to_evm(
                cost, DomainId(5), TARGET_GREETER, b"", Wei(0), GAS_LIMIT, sender=SOURCE_GREETER
            )
            for _ in range(3)
        ]

        assert sequences == [0, 1, 2]

    def test_relayer_id(self) -> None:
        """Relayer actors are named after their domain."""
        assert relayer_id(DomainId(5)) == "relayer-5"


class TestDelivery:
    def test_end_to_end(self, simulator: Simulator, relayer_pair: RelayerPair) -> None:
        """A greeting sent on one domain lands on the other after the delay."""
        source, target = relayer_pair
        sender_greeter = deploy(source, SOURCE_GREETER)
        receiver_greeter = deploy(target, TARGET_GREETER)

        cost = sender_greeter.quote(DomainId(5))
        sender_greeter.send(DomainId(5), TARGET_GREETER, "hello", cost, ALICE)

        simulator.run(until=5.0)
        assert receiver_greeter.latest_greeting is None

        simulator.run_until_empty()
        latest = receiver_greeter.latest_greeting
        assert latest is not None
        assert latest.text == "hello"
        assert latest.source_domain == 2
        assert latest.sender == ALICE
        assert simulator.current_time == 10.0
        assert target.deliveries == 1

    def test_unknown_target_address_counted_as_failure(
        self, simulator: Simulator, relayer_pair: RelayerPair, metrics: MetricsCollector
    ) -> None:
        """Delivery to an address with no receiver fails without raising."""
        source, target = relayer_pair
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        source.send_payload_to_evm(
            cost, DomainId(5), Address(b"\x77" * 20), encode_greeting("hi", ALICE), Wei(0),
            GAS_LIMIT, sender=SOURCE_GREETER,
        )

        simulator.run_until_empty()

        assert target.failures == 1
        assert metrics.failures_by_reason == {"no_target": 1}

    def test_receiver_rejection_recorded(
        self, simulator: Simulator, relayer_pair: RelayerPair, metrics: MetricsCollector
    ) -> None:
        """A receiver that refuses the payload is recorded, not retried."""
        source, target = relayer_pair
        receiver_greeter = deploy(target, TARGET_GREETER)
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        source.send_payload_to_evm(
            cost, DomainId(5), TARGET_GREETER, b"not a greeting", Wei(0), GAS_LIMIT,
            sender=SOURCE_GREETER,
        )

        simulator.run_until_empty()

        assert receiver_greeter.latest_greeting is None
        assert target.failures == 1
        assert metrics.failures_by_reason == {"DecodeError": 1}

    def test_greeter_trusting_other_relayer_rejects(
        self, simulator: Simulator, relayer_pair: RelayerPair, metrics: MetricsCollector
    ) -> None:
        """A greeter deployed against a different relayer refuses the delivery."""
        source, target = relayer_pair
        misconfigured = HelloRelay(address=TARGET_GREETER, relayer=source)
        target.register_target(TARGET_GREETER, misconfigured)
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        source.send_payload_to_evm(
            cost, DomainId(5), TARGET_GREETER, encode_greeting("hi", ALICE), Wei(0), GAS_LIMIT,
            sender=SOURCE_GREETER,
        )

        simulator.run_until_empty()

        assert misconfigured.latest_greeting is None
        assert metrics.failures_by_reason == {"Unauthorized": 1}

    def test_redelivery(self, simulator: Simulator, relayer_pair: RelayerPair) -> None:
        """A delivery can be executed again under the same hash."""
        source, target = relayer_pair
        receiver_greeter = deploy(target, TARGET_GREETER)
        received = []
        receiver_greeter.subscribe(received.append)
        cost, _ = source.quote_evm_delivery_price(DomainId(5), Wei(0), GAS_LIMIT)
        source.send_payload_to_evm(
            cost, DomainId(5), TARGET_GREETER, encode_greeting("hi", ALICE), Wei(0), GAS_LIMIT,
            sender=SOURCE_GREETER,
        )
        simulator.run_until_empty()

        (delivery_hash,) = target.executed_hashes
        target.redeliver(delivery_hash)
        simulator.run_until_empty()

        assert len(received) == 2
        assert target.deliveries == 2

    def test_redeliver_unknown_hash(self, relayer_pair: RelayerPair) -> None:
        """Only executed deliveries can be redelivered."""
        _, target = relayer_pair

        with pytest.raises(UpstreamError, match="unknown delivery"):
            target.redeliver(b"\x00" * 32)  # type: ignore[arg-type]
