"""Protocol constants for cross-domain greetings."""

# Execution budget paid for on the destination domain. Quote and dispatch
# must use the same value.
GAS_LIMIT = 50_000

# Value forwarded to the receiving contract on delivery
RECEIVER_VALUE = 0

# ABI word size
WORD_SIZE = 32

# Offset of the string tail in an encoded (string, address) tuple
GREETING_STRING_OFFSET = 2 * WORD_SIZE

# Smallest valid payload: offset word + address word + length word
MIN_PAYLOAD_SIZE = 3 * WORD_SIZE

# Fixed per-delivery overhead (VAA header and signatures) for accounting
DELIVERY_OVERHEAD = 256  # bytes
