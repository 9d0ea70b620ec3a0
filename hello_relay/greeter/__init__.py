"""Greeter components: quoting, sending, receiving and state."""

from hello_relay.greeter.contract import HelloRelay
from hello_relay.greeter.quoter import FeeQuoter
from hello_relay.greeter.receiver import GreetingListener, MessageReceiver, TrustedRelayer
from hello_relay.greeter.sender import MessageSender
from hello_relay.greeter.state import GreetingStore, LatestGreetingSlot

__all__ = [
    "FeeQuoter",
    "GreetingListener",
    "GreetingStore",
    "HelloRelay",
    "LatestGreetingSlot",
    "MessageReceiver",
    "MessageSender",
    "TrustedRelayer",
]
