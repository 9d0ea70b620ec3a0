"""Simulation scenario runners."""

from hello_relay.scenarios.greeting import (
    Deployment,
    GreetingClient,
    GreetingRunResult,
    build_deployment,
    derive_address,
    run_greeting_scenario,
)

__all__ = [
    "Deployment",
    "GreetingClient",
    "GreetingRunResult",
    "build_deployment",
    "derive_address",
    "run_greeting_scenario",
]
