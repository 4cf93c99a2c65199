"""Pydantic models for chain entities returned by the node.

Quantities are kept as the hex strings the node sent; use the integer
accessors (or ``parse_hex_int``) when arithmetic is needed. Every model allows
extra fields so client-specific additions (blob gas, withdrawals, ...) survive
a round trip to the formatter.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from evm_rpc.helpers.parsers import parse_hex_int


class LogEntry(BaseModel):
    """Event log emitted by a transaction."""

    address: str = Field(..., description="Emitting contract address")
    topics: list[str] = Field(
        default_factory=list, description="Indexed topics (at most 4)", max_length=4
    )
    data: str = Field(default="0x", description="Non-indexed event data")
    block_number: str | None = Field(
        default=None, description="Block number as hex string", alias="blockNumber"
    )
    block_hash: str | None = Field(
        default=None, description="Block hash", alias="blockHash"
    )
    transaction_hash: str | None = Field(
        default=None, description="Emitting transaction hash", alias="transactionHash"
    )
    transaction_index: str | None = Field(
        default=None, description="Transaction index as hex string", alias="transactionIndex"
    )
    log_index: str | None = Field(
        default=None, description="Log index as hex string", alias="logIndex"
    )
    removed: bool | None = Field(
        default=None, description="True if the block was dropped by a reorg"
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class Transaction(BaseModel):
    """Transaction as returned by eth_getTransactionByHash."""

    hash: str = Field(..., description="Transaction hash")
    block_hash: str | None = Field(
        default=None, description="Containing block hash (None while pending)", alias="blockHash"
    )
    block_number: str | None = Field(
        default=None,
        description="Containing block number (None while pending)",
        alias="blockNumber",
    )
    transaction_index: str | None = Field(
        default=None, description="Index in block (None while pending)", alias="transactionIndex"
    )
    from_address: str | None = Field(default=None, description="Sender", alias="from")
    to: str | None = Field(default=None, description="Recipient (None for deployments)")
    nonce: str | None = Field(default=None, description="Sender nonce as hex string")
    value: str | None = Field(default=None, description="Value in wei as hex string")
    gas: str | None = Field(default=None, description="Gas limit as hex string")
    gas_price: str | None = Field(
        default=None, description="Gas price as hex string", alias="gasPrice"
    )
    input: str | None = Field(default=None, description="Call data")

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def is_pending(self) -> bool:
        """True until the transaction has been included in a block."""
        return self.block_hash is None or self.block_number is None


class TransactionReceipt(BaseModel):
    """Receipt of a mined transaction."""

    transaction_hash: str = Field(..., description="Transaction hash", alias="transactionHash")
    transaction_index: str | None = Field(
        default=None, description="Index in block as hex string", alias="transactionIndex"
    )
    block_hash: str | None = Field(default=None, description="Block hash", alias="blockHash")
    block_number: str | None = Field(
        default=None, description="Block number as hex string", alias="blockNumber"
    )
    from_address: str | None = Field(default=None, description="Sender", alias="from")
    to: str | None = Field(default=None, description="Recipient (None for deployments)")
    cumulative_gas_used: str | None = Field(
        default=None, description="Cumulative gas used as hex string", alias="cumulativeGasUsed"
    )
    gas_used: str | None = Field(
        default=None, description="Gas used as hex string", alias="gasUsed"
    )
    contract_address: str | None = Field(
        default=None, description="Deployed contract address", alias="contractAddress"
    )
    logs: list[LogEntry] = Field(default_factory=list, description="Emitted logs in order")
    status: str | None = Field(
        default=None, description="0x1 on success, 0x0 on failure"
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def succeeded(self) -> bool | None:
        """Execution outcome, or None for pre-Byzantium receipts without status."""
        if self.status is None:
            return None
        return parse_hex_int(self.status) == 1


class Block(BaseModel):
    """Block as returned by eth_getBlockByNumber / eth_getBlockByHash.

    ``transactions`` holds hashes or full transactions depending on the flag
    passed with the request, not on anything in the block itself.
    """

    number: str | None = Field(
        default=None, description="Block number as hex string (None for pending)"
    )
    hash: str | None = Field(default=None, description="Block hash (None for pending)")
    parent_hash: str = Field(..., description="Parent block hash", alias="parentHash")
    timestamp: str = Field(..., description="Block timestamp as hex string")
    gas_limit: str = Field(..., description="Gas limit as hex string", alias="gasLimit")
    gas_used: str = Field(..., description="Gas used as hex string", alias="gasUsed")
    miner: str | None = Field(default=None, description="Miner/validator address")
    transactions: list[str | Transaction] = Field(
        default_factory=list, description="Transaction hashes or full transactions"
    )

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    @property
    def block_number(self) -> int | None:
        """Block number as an integer, None for the pending block."""
        if self.number is None:
            return None
        return parse_hex_int(self.number)


class CallParams(BaseModel):
    """Message call parameters for eth_call and eth_estimateGas."""

    to: str = Field(..., description="Target address")
    data: str | None = Field(default=None, description="Call data (hex)")
    from_address: str | None = Field(default=None, description="Sender", alias="from")
    gas: str | None = Field(default=None, description="Gas limit as hex string")
    gas_price: str | None = Field(
        default=None, description="Gas price as hex string", alias="gasPrice"
    )
    value: str | None = Field(default=None, description="Value in wei as hex string")

    model_config = ConfigDict(populate_by_name=True)

    def to_rpc(self) -> dict[str, str]:
        """Wire form: camelCase keys, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class LogFilter(BaseModel):
    """Filter object for eth_getLogs."""

    from_block: str | None = Field(default=None, description="Start block", alias="fromBlock")
    to_block: str | None = Field(default=None, description="End block", alias="toBlock")
    address: str | list[str] | None = Field(default=None, description="Emitting address(es)")
    topics: list[str | list[str] | None] | None = Field(
        default=None, description="Topic filters by position", max_length=4
    )
    block_hash: str | None = Field(
        default=None, description="Single block hash (excludes a range)", alias="blockHash"
    )

    model_config = ConfigDict(populate_by_name=True)

    def to_rpc(self) -> dict[str, Any]:
        """Wire form: camelCase keys, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ChainInfo(BaseModel):
    """Current head, chain id and gas price fetched together."""

    block_number: str = Field(..., description="Latest block number as hex string")
    chain_id: str = Field(..., description="Chain ID as hex string")
    gas_price: str = Field(..., description="Gas price in wei as hex string")


__all__ = [
    "Block",
    "CallParams",
    "ChainInfo",
    "LogEntry",
    "LogFilter",
    "Transaction",
    "TransactionReceipt",
]
