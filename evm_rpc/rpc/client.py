"""Ethereum JSON-RPC client."""

from itertools import count

from typing import Any, Self, TypeAlias, TypeVar

import asyncio

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from evm_rpc.helpers.constants import DEFAULT_BLOCK_TAG, DEFAULT_TIMEOUT
from evm_rpc.helpers.errors import MalformedResponseError, NetworkError, RPCProtocolError
from evm_rpc.helpers.http import create_http_client
from evm_rpc.helpers.http_models import JsonRpcParams
from evm_rpc.helpers.logging import get_logger
from evm_rpc.helpers.parsers import to_quantity
from evm_rpc.rpc.models import (
    Block,
    CallParams,
    ChainInfo,
    LogEntry,
    LogFilter,
    Transaction,
    TransactionReceipt,
)
from evm_rpc.rpc.rpc_models import JsonRpcRequest, JsonRpcResponse


logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)

BlockParameter: TypeAlias = str | int


def _block_param(block: BlockParameter) -> str:
    return to_quantity(block) if isinstance(block, int) else block


def _call_param(params: CallParams | dict[str, Any]) -> dict[str, Any]:
    return params.to_rpc() if isinstance(params, CallParams) else params


class RPCClient:
    """Ethereum JSON-RPC client.

    One instance owns one HTTP connection pool and one correlation-id counter.
    Ids start at 1 and are handed out in the order requests are issued, so
    requests fanned out with ``asyncio.gather`` still get distinct ids.

    Example:
        ```python
        async with RPCClient("https://ethereum-rpc.publicnode.com") as rpc:
            head = await rpc.get_block_number()
            block = await rpc.get_block_by_number(head)
            if block is None:
                ...  # block not produced yet
        ```
    """

    def __init__(
        self,
        rpc_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize RPC client.

        Args:
            rpc_url: Ethereum JSON-RPC endpoint URL
            timeout: Per-request timeout in seconds
            http_client: Optional pre-configured client; closing it stays the
                caller's responsibility

        Raises:
            ValueError: If rpc_url is empty or None
        """
        if not rpc_url:
            msg = "RPC URL cannot be empty"
            raise ValueError(msg)

        self.rpc_url = rpc_url
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self._http = http_client or create_http_client(rpc_url, timeout=timeout)
        self._ids = count(1)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_http_client:
            await self._http.aclose()

    def _next_request(self, method: str, params: JsonRpcParams | None) -> JsonRpcRequest:
        return JsonRpcRequest(method=method, params=params or [], id=next(self._ids))

    async def send(self, method: str, params: JsonRpcParams | None = None) -> Any:
        """Make a single JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_blockNumber")
            params: Method parameters list

        Returns:
            The ``result`` member, or None when the node returned no result

        Raises:
            NetworkError: If the request fails or the response is not JSON-RPC
            RPCProtocolError: If the response contains an error member
        """
        request = self._next_request(method, params)
        logger.debug("-> %s id=%d params=%s", method, request.id, request.params)

        try:
            response = await self._http.post(
                self.rpc_url, json=request.model_dump(), timeout=self.timeout
            )
        except httpx.TimeoutException as e:
            msg = f"{method} timed out after {self.timeout:g}s"
            raise NetworkError(msg) from e
        except httpx.HTTPError as e:
            msg = f"{method} request to {self.rpc_url} failed: {e}"
            raise NetworkError(msg) from e

        try:
            body = response.json()
        except ValueError as e:
            msg = f"{method} returned HTTP {response.status_code} with a non-JSON body"
            raise NetworkError(msg) from e

        if not isinstance(body, dict):
            msg = f"{method} returned HTTP {response.status_code} with an unexpected body"
            raise NetworkError(msg)

        try:
            envelope = JsonRpcResponse.model_validate(body)
        except ModelValidationError as e:
            msg = f"{method} returned a malformed JSON-RPC envelope"
            raise NetworkError(msg) from e

        if envelope.error is not None:
            logger.debug(
                "<- %s id=%d error %d", method, request.id, envelope.error.code
            )
            raise RPCProtocolError(
                envelope.error.code, envelope.error.message, envelope.error.data
            )

        if response.is_error:
            msg = f"{method} failed with HTTP {response.status_code}"
            raise NetworkError(msg)

        if envelope.id is not None and str(envelope.id) != str(request.id):
            msg = f"{method} got mismatched response id {envelope.id!r} (sent {request.id})"
            raise NetworkError(msg)

        logger.debug("<- %s id=%d result=%s", method, request.id, envelope.result)
        return envelope.result

    async def _send_required(self, method: str, params: JsonRpcParams | None = None) -> Any:
        result = await self.send(method, params)
        if result is None:
            msg = f"{method} returned no result"
            raise MalformedResponseError(msg)
        return result

    @staticmethod
    def _parse(model: type[M], method: str, result: Any) -> M:
        try:
            return model.model_validate(result)
        except ModelValidationError as e:
            msg = f"{method} returned a result that is not a valid {model.__name__}"
            raise MalformedResponseError(msg) from e

    # Chain state

    async def get_block_number(self) -> str:
        """Get the latest block number as a quantity."""
        return await self._send_required("eth_blockNumber")

    async def get_chain_id(self) -> str:
        """Get the chain ID as a quantity."""
        return await self._send_required("eth_chainId")

    async def get_gas_price(self) -> str:
        """Get the current gas price in wei as a quantity."""
        return await self._send_required("eth_gasPrice")

    async def get_network_version(self) -> str:
        """Get the network ID as a decimal string (net_version)."""
        return await self._send_required("net_version")

    async def get_chain_info(self) -> ChainInfo:
        """Fetch block number, chain ID and gas price concurrently.

        All three requests must succeed; the first failure propagates.
        """
        block_number, chain_id, gas_price = await asyncio.gather(
            self.get_block_number(),
            self.get_chain_id(),
            self.get_gas_price(),
        )
        return ChainInfo(block_number=block_number, chain_id=chain_id, gas_price=gas_price)

    # Accounts

    async def get_balance(
        self, address: str, block_tag: BlockParameter = DEFAULT_BLOCK_TAG
    ) -> str:
        """Get the balance of an address in wei as a quantity."""
        return await self._send_required(
            "eth_getBalance", [address, _block_param(block_tag)]
        )

    async def get_transaction_count(
        self, address: str, block_tag: BlockParameter = DEFAULT_BLOCK_TAG
    ) -> str:
        """Get the transaction count (nonce) of an address as a quantity."""
        return await self._send_required(
            "eth_getTransactionCount", [address, _block_param(block_tag)]
        )

    async def get_code(
        self, address: str, block_tag: BlockParameter = DEFAULT_BLOCK_TAG
    ) -> str:
        """Get the code at an address; accounts without code return "0x"."""
        return await self._send_required(
            "eth_getCode", [address, _block_param(block_tag)]
        )

    async def get_storage_at(
        self,
        address: str,
        position: str,
        block_tag: BlockParameter = DEFAULT_BLOCK_TAG,
    ) -> str:
        """Get the 32-byte storage word at a slot."""
        return await self._send_required(
            "eth_getStorageAt", [address, position, _block_param(block_tag)]
        )

    # Execution

    async def call(
        self,
        params: CallParams | dict[str, Any],
        block_tag: BlockParameter = DEFAULT_BLOCK_TAG,
    ) -> str:
        """Execute a message call without creating a transaction.

        A revert comes back from the node as an error response and is raised
        as RPCProtocolError.
        """
        return await self._send_required(
            "eth_call", [_call_param(params), _block_param(block_tag)]
        )

    async def estimate_gas(self, params: CallParams | dict[str, Any]) -> str:
        """Estimate the gas a message call would use."""
        return await self._send_required("eth_estimateGas", [_call_param(params)])

    # Lookups that may come back empty

    async def get_transaction_by_hash(self, tx_hash: str) -> Transaction | None:
        """Get a transaction by hash.

        Returns:
            The transaction, or None if the node does not know the hash
        """
        method = "eth_getTransactionByHash"
        result = await self.send(method, [tx_hash])
        if result is None:
            return None
        return self._parse(Transaction, method, result)

    async def get_transaction_receipt(self, tx_hash: str) -> TransactionReceipt | None:
        """Get a transaction receipt by hash.

        Returns:
            The receipt, or None if the transaction is unmined or unknown
        """
        method = "eth_getTransactionReceipt"
        result = await self.send(method, [tx_hash])
        if result is None:
            return None
        return self._parse(TransactionReceipt, method, result)

    async def get_block_by_number(
        self, block: BlockParameter, full_transactions: bool = False
    ) -> Block | None:
        """Get a block by number or tag.

        Args:
            block: Block tag, quantity, or integer block number
            full_transactions: Return full transactions instead of hashes

        Returns:
            The block, or None if it does not exist (yet)
        """
        method = "eth_getBlockByNumber"
        result = await self.send(method, [_block_param(block), full_transactions])
        if result is None:
            return None
        return self._parse(Block, method, result)

    async def get_block_by_hash(
        self, block_hash: str, full_transactions: bool = False
    ) -> Block | None:
        """Get a block by hash.

        Returns:
            The block, or None if the hash is unknown
        """
        method = "eth_getBlockByHash"
        result = await self.send(method, [block_hash, full_transactions])
        if result is None:
            return None
        return self._parse(Block, method, result)

    async def get_logs(self, log_filter: LogFilter | dict[str, Any]) -> list[LogEntry]:
        """Get logs matching a filter.

        Logs with ``removed=True`` (dropped by a reorg) are returned as-is.

        Returns:
            Matching logs in node order; empty list when nothing matches
        """
        method = "eth_getLogs"
        params = log_filter.to_rpc() if isinstance(log_filter, LogFilter) else log_filter
        result = await self._send_required(method, [params])
        if not isinstance(result, list):
            msg = f"{method} returned {type(result).__name__}, expected a list"
            raise MalformedResponseError(msg)
        return [self._parse(LogEntry, method, entry) for entry in result]


__all__ = [
    "BlockParameter",
    "RPCClient",
]
