"""Resolve user-supplied block identifiers and classify block finality.

An identifier is tried as a hash, then a tag, then a block number:

- exactly 66 characters starting with ``0x`` is looked up with eth_getBlockByHash
- ``latest``, ``earliest``, ``pending``, ``safe`` and ``finalized`` go straight
  to eth_getBlockByNumber
- anything else must be a hex quantity (sent as-is) or a decimal number
  (re-encoded as a quantity)

Finality compares the block number with the ``safe`` and ``finalized`` heads,
which are fetched concurrently. Either of those fetches may fail without
failing the lookup; the status then falls back to the next weaker tier.
"""

from enum import StrEnum

from typing import Literal, TypeAlias

import asyncio

from pydantic import BaseModel, Field

from evm_rpc.helpers.constants import (
    BLOCK_TAGS,
    DECIMAL_PATTERN,
    HASH_LENGTH,
    QUANTITY_PATTERN,
)
from evm_rpc.helpers.errors import BlockNotFound, InvalidIdentifier
from evm_rpc.helpers.http import log_and_suppress_errors
from evm_rpc.helpers.logging import get_logger
from evm_rpc.helpers.parsers import to_quantity
from evm_rpc.rpc.client import RPCClient
from evm_rpc.rpc.models import Block


logger = get_logger(__name__)

IdentifierKind: TypeAlias = Literal["hash", "tag", "number"]


class FinalityStatus(StrEnum):
    """How settled a block is relative to the safe and finalized heads."""

    FINALIZED = "finalized"
    SAFE = "safe"
    PENDING = "pending"


class BlockResolution(BaseModel):
    """A resolved block plus how it was looked up and, if asked for, its finality."""

    identifier: str = Field(..., description="Identifier as supplied")
    kind: IdentifierKind = Field(..., description="How the identifier was classified")
    block: Block = Field(..., description="The resolved block")
    status: FinalityStatus | None = Field(
        default=None, description="Finality, when status was requested"
    )


def classify_identifier(identifier: str) -> tuple[IdentifierKind, str]:
    """Classify a block identifier and produce the RPC parameter for it.

    Args:
        identifier: Hash, tag, hex quantity or decimal block number

    Returns:
        Tuple of (kind, rpc_param)

    Raises:
        InvalidIdentifier: If a numeric identifier is malformed

    Example:
        >>> classify_identifier("finalized")
        ('tag', 'finalized')
        >>> classify_identifier("1000")
        ('number', '0x3e8')
    """
    if identifier.startswith("0x") and len(identifier) == HASH_LENGTH:
        return "hash", identifier

    if identifier in BLOCK_TAGS:
        return "tag", identifier

    if identifier.startswith("0x"):
        if QUANTITY_PATTERN.fullmatch(identifier) is None:
            raise InvalidIdentifier(identifier)
        return "number", identifier

    if DECIMAL_PATTERN.fullmatch(identifier) is None:
        raise InvalidIdentifier(identifier)
    return "number", to_quantity(int(identifier))


def normalize_block_tag(value: str) -> str:
    """Turn a ``--block`` option value into a block parameter.

    Tags and hex quantities pass through; decimal numbers become quantities.

    Raises:
        InvalidIdentifier: If the value is not a tag or a block number
    """
    if value in BLOCK_TAGS:
        return value
    if value.startswith("0x") and QUANTITY_PATTERN.fullmatch(value) is not None:
        return value
    if DECIMAL_PATTERN.fullmatch(value) is not None:
        return to_quantity(int(value))
    raise InvalidIdentifier(value)


def classify_finality(
    number: int | None,
    safe_number: int | None,
    finalized_number: int | None,
) -> FinalityStatus:
    """Classify a block number against the safe and finalized heads.

    ``finalized <= safe <= latest`` always holds on chain, so the finalized
    head is checked first; an unavailable head simply skips that tier.

    Example:
        >>> classify_finality(90, 100, 80)
        <FinalityStatus.SAFE: 'safe'>
    """
    if number is None:
        return FinalityStatus.PENDING
    if finalized_number is not None and number <= finalized_number:
        return FinalityStatus.FINALIZED
    if safe_number is not None and number <= safe_number:
        return FinalityStatus.SAFE
    return FinalityStatus.PENDING


async def _fetch_head_number(client: RPCClient, tag: str) -> int | None:
    block: Block | None = None
    async with log_and_suppress_errors(f"fetch {tag} block"):
        block = await client.get_block_by_number(tag)
    if block is None:
        logger.warning("%s block unavailable, skipping that finality tier", tag)
        return None
    return block.block_number


async def fetch_finality_status(client: RPCClient, number: int | None) -> FinalityStatus:
    """Fetch the safe and finalized heads concurrently and classify ``number``.

    Failures of either fetch are logged and treated as "unavailable".
    """
    safe_number, finalized_number = await asyncio.gather(
        _fetch_head_number(client, "safe"),
        _fetch_head_number(client, "finalized"),
    )
    logger.debug(
        "finality heads: safe=%s finalized=%s block=%s",
        safe_number,
        finalized_number,
        number,
    )
    return classify_finality(number, safe_number, finalized_number)


async def resolve_block(
    client: RPCClient,
    identifier: str,
    *,
    full_transactions: bool = False,
    with_status: bool = False,
) -> BlockResolution:
    """Look up the block an identifier refers to.

    Args:
        client: RPC client
        identifier: Hash, tag, hex quantity or decimal block number
        full_transactions: Return full transactions instead of hashes
        with_status: Also classify the block as finalized/safe/pending

    Returns:
        BlockResolution with the block and, if requested, its finality

    Raises:
        InvalidIdentifier: If the identifier is malformed (no request is made)
        BlockNotFound: If the node has no such block
    """
    kind, param = classify_identifier(identifier)

    if kind == "hash":
        block = await client.get_block_by_hash(param, full_transactions)
    else:
        block = await client.get_block_by_number(param, full_transactions)

    if block is None:
        raise BlockNotFound(identifier)

    status = None
    if with_status:
        status = await fetch_finality_status(client, block.block_number)

    return BlockResolution(identifier=identifier, kind=kind, block=block, status=status)


__all__ = [
    "BlockResolution",
    "FinalityStatus",
    "IdentifierKind",
    "classify_finality",
    "classify_identifier",
    "fetch_finality_status",
    "normalize_block_tag",
    "resolve_block",
]
