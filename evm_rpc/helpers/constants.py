"""Common configuration constants used across the application."""

import re


# HTTP and Network Constants
DEFAULT_TIMEOUT = 30.0
"""Default JSON-RPC request timeout in seconds"""

JSON_CONTENT_TYPE = "application/json"
"""Content-Type header sent with every JSON-RPC request"""

JSONRPC_VERSION = "2.0"
"""JSON-RPC protocol version carried in every envelope"""

# Block Tags
BLOCK_TAGS = frozenset({"latest", "earliest", "pending", "safe", "finalized"})
"""Fixed block tags accepted wherever a block parameter is expected"""

DEFAULT_BLOCK_TAG = "latest"
"""Block tag used when the caller does not pick one"""

# Hex Patterns
QUANTITY_PATTERN = re.compile(r"^0x[0-9a-fA-F]+$")
"""Hex-encoded quantity (block numbers, balances, gas, timestamps)"""

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")
"""20-byte account address"""

TX_HASH_PATTERN = re.compile(r"^0x[a-fA-F0-9]{64}$")
"""32-byte transaction hash"""

DECIMAL_PATTERN = re.compile(r"^[0-9]+$")
"""Base-10 block number as typed on the command line"""

HASH_LENGTH = 66
"""Length of a 0x-prefixed 32-byte hash"""

# Output
OUTPUT_FORMATS = ("json", "pretty")
"""Supported output rendering modes"""

DEFAULT_OUTPUT_FORMAT = "pretty"
"""Output mode used when none is configured"""

DEFAULT_LOG_LEVEL = "WARNING"
"""Log level used when none is configured"""

# Process Exit Codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1


__all__ = [
    "ADDRESS_PATTERN",
    "BLOCK_TAGS",
    "DECIMAL_PATTERN",
    "DEFAULT_BLOCK_TAG",
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_OUTPUT_FORMAT",
    "DEFAULT_TIMEOUT",
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "HASH_LENGTH",
    "JSONRPC_VERSION",
    "JSON_CONTENT_TYPE",
    "OUTPUT_FORMATS",
    "QUANTITY_PATTERN",
    "TX_HASH_PATTERN",
]
