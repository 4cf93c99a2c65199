"""Exception hierarchy for the JSON-RPC client.

Everything raised by the client, the block resolver and the validators derives
from ``EVMRPCError`` so the command line can map any failure to exit code 1
with a single except clause.
"""

from typing import Any


class EVMRPCError(Exception):
    """Base class for all client errors."""


class ValidationError(EVMRPCError):
    """Malformed user input detected locally, before any network call."""

    def __init__(self, message: str, value: str) -> None:
        """Initialize validation error.

        Args:
            message: Human-readable reason
            value: The offending input
        """
        super().__init__(message)
        self.value = value


class InvalidIdentifier(ValidationError):
    """Block identifier that is neither a hash, a tag, nor a block number."""

    def __init__(self, identifier: str) -> None:
        """Initialize invalid identifier error.

        Args:
            identifier: The identifier as supplied by the caller
        """
        super().__init__(
            f"Invalid block identifier: {identifier!r} "
            "(expected a block hash, a block tag, or a decimal/hex block number)",
            identifier,
        )


class NetworkError(EVMRPCError):
    """Transport-level failure: connection, timeout, or unusable HTTP response."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Network error: {message}")


class RPCProtocolError(EVMRPCError):
    """Well-formed JSON-RPC error response returned by the node."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        """Initialize protocol error.

        Args:
            code: JSON-RPC error code, kept verbatim
            message: JSON-RPC error message, kept verbatim
            data: Optional error data (e.g. revert payload)
        """
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message
        self.data = data


class MalformedResponseError(EVMRPCError):
    """Result that contradicts the contract of the method that produced it."""


class NotFoundError(EVMRPCError):
    """Entity lookup came back empty and the caller chose to treat it as fatal."""

    def __init__(self, kind: str, identifier: str, hint: str | None = None) -> None:
        """Initialize not-found error.

        Args:
            kind: Entity name shown to the user (e.g. "Transaction")
            identifier: Hash, number or tag that was looked up
            hint: Optional explanation appended in parentheses
        """
        message = f"{kind} {identifier} not found"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)
        self.kind = kind
        self.identifier = identifier


class BlockNotFound(NotFoundError):
    """Referenced block does not exist (future number, unknown hash)."""

    def __init__(self, identifier: str) -> None:
        super().__init__("Block", identifier, "it may not exist yet")


__all__ = [
    "BlockNotFound",
    "EVMRPCError",
    "InvalidIdentifier",
    "MalformedResponseError",
    "NetworkError",
    "NotFoundError",
    "RPCProtocolError",
    "ValidationError",
]
