"""Parsing utilities for hex-encoded quantities."""

from datetime import UTC, datetime
from decimal import Decimal

from eth_utils import from_wei

from evm_rpc.helpers.constants import QUANTITY_PATTERN


def is_quantity(value: object) -> bool:
    """Check whether a value is a hex-encoded quantity string.

    Example:
        >>> is_quantity("0x1a")
        True
        >>> is_quantity("0x")
        False
    """
    return isinstance(value, str) and QUANTITY_PATTERN.fullmatch(value) is not None


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Python integers are unbounded, so balances beyond 64 bits are exact.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def to_quantity(value: int) -> str:
    """Encode a non-negative integer as a quantity.

    Example:
        >>> to_quantity(0)
        '0x0'
        >>> to_quantity(4660)
        '0x1234'
    """
    if value < 0:
        msg = f"Quantities cannot be negative: {value}"
        raise ValueError(msg)
    return hex(value)


def parse_hex_timestamp(hex_timestamp: str) -> datetime:
    """Parse Unix timestamp from hex string to datetime.

    Example:
        >>> parse_hex_timestamp("0x5c")
        datetime.datetime(1970, 1, 1, 0, 1, 32, tzinfo=datetime.timezone.utc)
    """
    return datetime.fromtimestamp(int(hex_timestamp, 16), tz=UTC)


def _format_decimal(value: Decimal | int) -> str:
    if isinstance(value, int):
        return str(value)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def wei_to_ether(wei: str | int) -> str:
    """Convert a wei amount (quantity or int) to a decimal ether string.

    Only used for display; protocol values stay in wei.

    Example:
        >>> wei_to_ether("0xde0b6b3a7640000")
        '1'
        >>> wei_to_ether(1500000000000000000)
        '1.5'
    """
    amount = parse_hex_int(wei) if isinstance(wei, str) else wei
    return _format_decimal(from_wei(amount, "ether"))


def wei_to_gwei(wei: str | int) -> str:
    """Convert a wei amount (quantity or int) to a decimal gwei string.

    Example:
        >>> wei_to_gwei("0x3b9aca00")
        '1'
    """
    amount = parse_hex_int(wei) if isinstance(wei, str) else wei
    return _format_decimal(from_wei(amount, "gwei"))


__all__ = [
    "is_quantity",
    "parse_hex_int",
    "parse_hex_timestamp",
    "to_quantity",
    "wei_to_ether",
    "wei_to_gwei",
]
