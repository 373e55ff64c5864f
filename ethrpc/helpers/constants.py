"""Common configuration constants used across the client."""

# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default JSON-RPC request timeout in seconds"""

CONNECTION_TIMEOUT = 3.0
"""Timeout for establishing connections"""

# HTTP Connection Pooling
MAX_KEEPALIVE_CONNECTIONS = 5
"""Maximum number of keepalive connections in pool"""

MAX_CONNECTIONS = 10
"""Maximum total number of connections"""

# JSON-RPC Constants
JSON_RPC_VERSION = "2.0"
"""Version tag sent with every request"""

BLOCK_HASH_LENGTH = 66
"""Length of a 0x-prefixed 32-byte block hash"""

SYMBOLIC_BLOCK_TAGS = frozenset({"latest", "earliest", "pending", "safe", "finalized"})
"""Block tags nodes resolve by name"""

BYZANTIUM_BLOCK = 4_370_000
"""First mainnet block of the Byzantium fork"""

# Numeric Constants
MAX_SAFE_INTEGER = 2**53 - 1
"""Largest integer a 64-bit float represents exactly"""

DIVISION_PRECISION = 100
"""Significant digits kept by BigNumber arithmetic"""

# Logging
DEFAULT_LOG_LEVEL = "INFO"
"""Log level used when ETH_RPC_LOG_LEVEL is not set"""


__all__ = [
    "BLOCK_HASH_LENGTH",
    "BYZANTIUM_BLOCK",
    "CONNECTION_TIMEOUT",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_TIMEOUT",
    "DIVISION_PRECISION",
    "JSON_RPC_VERSION",
    "MAX_CONNECTIONS",
    "MAX_KEEPALIVE_CONNECTIONS",
    "MAX_SAFE_INTEGER",
    "SYMBOLIC_BLOCK_TAGS",
]
