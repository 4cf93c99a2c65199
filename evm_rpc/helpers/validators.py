"""Structural pre-checks for addresses and transaction hashes.

These run before a request is built, so a malformed argument is rejected
without a round trip to the node.
"""

from eth_utils import is_address

from evm_rpc.helpers.constants import ADDRESS_PATTERN, TX_HASH_PATTERN
from evm_rpc.helpers.errors import ValidationError


def is_valid_address(address: str) -> bool:
    """Validate an Ethereum address.

    The strict ``0x`` + 40 hex characters format check runs first, then
    ``eth_utils.is_address`` rejects mixed-case input with a bad EIP-55 checksum.

    Example:
        >>> is_valid_address("0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045")
        True
        >>> is_valid_address("0x123")
        False
    """
    if not isinstance(address, str) or ADDRESS_PATTERN.fullmatch(address) is None:
        return False
    return is_address(address)


def is_valid_tx_hash(tx_hash: str) -> bool:
    """Validate a transaction hash (``0x`` + 64 hex characters)."""
    return isinstance(tx_hash, str) and TX_HASH_PATTERN.fullmatch(tx_hash) is not None


def require_address(address: str, label: str = "Ethereum address") -> str:
    """Return the address unchanged or raise ValidationError.

    Args:
        address: Address to check
        label: What the address is, used in the error message

    Raises:
        ValidationError: If the address is malformed or badly checksummed
    """
    if not is_valid_address(address):
        msg = f"Invalid {label}: {address!r}"
        raise ValidationError(msg, address)
    return address


def require_tx_hash(tx_hash: str) -> str:
    """Return the hash unchanged or raise ValidationError."""
    if not is_valid_tx_hash(tx_hash):
        msg = f"Invalid transaction hash: {tx_hash!r}"
        raise ValidationError(msg, tx_hash)
    return tx_hash


__all__ = [
    "is_valid_address",
    "is_valid_tx_hash",
    "require_address",
    "require_tx_hash",
]
