#!/usr/bin/env python3
"""Print a snapshot of chain state using the RPC client programmatically.

Usage:
    ETH_RPC_URL=https://ethereum-rpc.publicnode.com python scripts/chain_snapshot.py
"""

from asyncio import run

from rich.console import Console
from rich.table import Table

from evm_rpc.blocks.resolver import resolve_block
from evm_rpc.helpers.config import get_eth_rpc_url
from evm_rpc.helpers.errors import EVMRPCError, NetworkError
from evm_rpc.helpers.parsers import parse_hex_int, parse_hex_timestamp, wei_to_ether, wei_to_gwei
from evm_rpc.rpc.client import RPCClient


WATCHED_ACCOUNT = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"
USDC_CONTRACT = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"

console = Console()


async def main() -> int:
    rpc_url = get_eth_rpc_url()

    async with RPCClient(rpc_url) as rpc:
        info = await rpc.get_chain_info()
        balance = await rpc.get_balance(WATCHED_ACCOUNT)
        resolution = await resolve_block(rpc, "latest", with_status=True)
        code = await rpc.get_code(USDC_CONTRACT)
        sample_hash = next(iter(resolution.block.transactions), None)
        sample_tx = sample_receipt = None
        if isinstance(sample_hash, str):
            sample_tx = await rpc.get_transaction_by_hash(sample_hash)
            sample_receipt = await rpc.get_transaction_receipt(sample_hash)

    block = resolution.block
    table = Table(title=f"Chain snapshot ({rpc_url})")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Chain ID", str(parse_hex_int(info.chain_id)))
    table.add_row("Head", f"{info.block_number} ({parse_hex_int(info.block_number)})")
    table.add_row("Gas price", f"{wei_to_gwei(info.gas_price)} gwei")
    table.add_row(f"Balance {WATCHED_ACCOUNT[:10]}…", f"{wei_to_ether(balance)} ETH")
    table.add_row("Latest block hash", block.hash or "-")
    table.add_row("Latest block time", parse_hex_timestamp(block.timestamp).isoformat())
    gas = f"{parse_hex_int(block.gas_used)} / {parse_hex_int(block.gas_limit)}"
    table.add_row("Gas used / limit", gas)
    table.add_row("Latest block status", str(resolution.status))
    table.add_row("USDC has code", "yes" if code != "0x" else "no")
    if sample_tx is not None:
        table.add_row("First tx", sample_tx.hash)
        table.add_row("First tx pending", "yes" if sample_tx.is_pending else "no")
    if sample_receipt is not None:
        outcome = {True: "success", False: "reverted", None: "unknown"}[sample_receipt.succeeded]
        table.add_row("First tx outcome", outcome)
    console.print(table)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(run(main()))
    except NetworkError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Set ETH_RPC_URL to a reachable endpoint (e.g. https://cloudflare-eth.com)")
        raise SystemExit(1) from e
    except EVMRPCError as e:
        console.print(f"[red]{e}[/red]")
        raise SystemExit(1) from e
