"""Greetings exchanged between simulated domains."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from hashlib import sha256
from typing import TYPE_CHECKING

import coolname

from hello_relay.config import GreeterConfig, SimulationConfig
from hello_relay.core.actor import Actor
from hello_relay.core.simulator import Simulator
from hello_relay.core.types import ActorId, Address, DomainId, Wei
from hello_relay.errors import HelloRelayError
from hello_relay.greeter.contract import HelloRelay
from hello_relay.metrics.collector import MetricsCollector
from hello_relay.protocol.commands import SendGreeting
from hello_relay.relayer.simulated import SimulatedRelayer

if TYPE_CHECKING:
    from random import Random

    from hello_relay.core.actor import EventPayload
    from hello_relay.metrics.results import RelayResults
    from hello_relay.protocol.messages import GreetingReceived

logger = logging.getLogger(__name__)


def derive_address(label: str, domain: DomainId) -> Address:
    """Deterministic 20-byte address for a named participant on a domain."""
    return Address(sha256(f"{label}:{domain}".encode()).digest()[:20])


def generate_run_id(rng: Random) -> str:
    coolname.replace_random(rng)
    return "-".join(coolname.generate(3))


class GreetingClient(Actor):
    """Off-chain user agent that sends greetings through a domain's greeter."""

    def __init__(self, domain: DomainId, simulator: Simulator, greeter: HelloRelay) -> None:
        super().__init__(ActorId(f"client-{domain}"), simulator)
        self._greeter = greeter
        self.sent: list[int] = []
        self.rejected: list[HelloRelayError] = []

    def on_event(self, payload: EventPayload) -> None:
        match payload:
            case SendGreeting() as cmd:
                self._send(cmd)

    def _send(self, cmd: SendGreeting) -> None:
        try:
            cost = self._greeter.quote(cmd.target_domain)
            sequence = self._greeter.send(
                cmd.target_domain,
                cmd.target_address,
                cmd.text,
                Wei(cost + cmd.tip),
                cmd.caller,
            )
        except HelloRelayError as e:
            logger.warning("Greeting to domain %d rejected: %s", cmd.target_domain, e)
            self.rejected.append(e)
            return
        self.sent.append(sequence)


@dataclass
class Deployment:
    """A greeter, relayer and client on every configured domain."""

    config: SimulationConfig
    simulator: Simulator
    metrics: MetricsCollector
    relayers: dict[DomainId, SimulatedRelayer] = field(default_factory=dict)
    greeters: dict[DomainId, HelloRelay] = field(default_factory=dict)
    clients: dict[DomainId, GreetingClient] = field(default_factory=dict)
    received: list[tuple[DomainId, GreetingReceived]] = field(default_factory=list)

    def schedule_greeting(
        self,
        delay: float,
        source: DomainId,
        target: DomainId,
        text: str,
        caller: Address,
        tip: int = 0,
    ) -> None:
        client = self.clients[source]
        client.schedule_command(
            delay,
            SendGreeting(
                target_domain=target,
                target_address=self.greeters[target].address,
                text=text,
                caller=caller,
                tip=tip,
            ),
        )


def build_deployment(config: SimulationConfig | None = None) -> Deployment:
    """Build relayers, greeters and clients for every domain in ``config``."""
    if config is None:
        config = SimulationConfig()

    simulator = Simulator(seed=config.seed)
    metrics = MetricsCollector(simulator=simulator)
    deployment = Deployment(config=config, simulator=simulator, metrics=metrics)

    for domain in config.domains:
        pricing = {
            target: config.pricing_for(target) for target in config.domains if target != domain
        }
        relayer = SimulatedRelayer(
            domain=domain,
            address=derive_address("relayer", domain),
            simulator=simulator,
            pricing=pricing,
            metrics=metrics,
            delivery_delay=config.delivery_delay,
            delivery_jitter=config.delivery_jitter,
        )
        simulator.register_actor(relayer)

        greeter = HelloRelay(
            address=derive_address("greeter", domain),
            relayer=relayer,
            config=GreeterConfig(
                relayer=relayer.address, replay_protection=config.replay_protection
            ),
        )
        relayer.register_target(greeter.address, greeter)
        greeter.subscribe(lambda event, d=domain: deployment.received.append((d, event)))

        client = GreetingClient(domain, simulator, greeter)
        simulator.register_actor(client)

        deployment.relayers[domain] = relayer
        deployment.greeters[domain] = greeter
        deployment.clients[domain] = client

    return deployment


@dataclass
class GreetingRunResult:
    run_id: str
    deployment: Deployment
    results: RelayResults


def run_greeting_scenario(config: SimulationConfig | None = None) -> GreetingRunResult:
    """Send ``config.greetings`` greetings between random domain pairs and run to completion."""
    if config is None:
        config = SimulationConfig()

    deployment = build_deployment(config)
    sim = deployment.simulator
    run_id = generate_run_id(sim.rng)

    for i in range(config.greetings):
        source, target = sim.rng.sample(list(config.domains), 2)
        deployment.schedule_greeting(
            delay=sim.rng.uniform(0, config.duration / 2),
            source=source,
            target=target,
            text=f"Hello #{i} from domain {source}",
            caller=Address(sim.rng.randbytes(20)),
            tip=sim.rng.randint(0, 10**12),
        )

    sim.run(config.duration)
    return GreetingRunResult(
        run_id=run_id, deployment=deployment, results=deployment.metrics.finalize()
    )


def main() -> None:
    """Run the greeting scenario and print summary statistics."""
    import argparse
    import json

    parser = argparse.ArgumentParser(description="Exchange greetings between simulated domains")
    parser.add_argument("--seed", type=int, default=42, help="Simulation seed (default: 42)")
    parser.add_argument("--greetings", type=int, default=10, help="Greetings to send")
    parser.add_argument(
        "--duration", type=float, default=600.0, help="Simulated seconds (default: 600)"
    )
    parser.add_argument(
        "--replay-protection",
        action="store_true",
        help="Reject delivery hashes a greeter has already applied",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve the first domain's greeter state over HTTP after the run",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the state server (default: 8000)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every delivery")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig(
        seed=args.seed,
        greetings=args.greetings,
        duration=args.duration,
        replay_protection=args.replay_protection,
    )
    run = run_greeting_scenario(config)
    deployment = run.deployment

    print(f"Run {run.run_id} (seed={config.seed})")
    print(f"Simulated time: {deployment.simulator.current_time:.1f}s")
    print(f"Events processed: {deployment.simulator.events_processed}")

    print("\n=== Latest Greetings ===")
    for domain, greeter in deployment.greeters.items():
        latest = greeter.latest_greeting
        if latest is None:
            print(f"domain {domain}: <none>")
        else:
            print(
                f"domain {domain}: {latest.text!r} "
                f"(from domain {latest.source_domain}, 0x{latest.sender.hex()[:8]}...)"
            )

    print("\n=== Relay Metrics ===")
    print(json.dumps(run.results.to_dict(), indent=2))

    if args.serve:
        from hello_relay.server import run_server

        run_server(deployment.greeters[config.domains[0]], port=args.port)


if __name__ == "__main__":
    main()
