"""Command-line interface for querying an EVM JSON-RPC endpoint.

Results go to stdout and errors to stderr as a single ``Error: ...`` line.
The exit code is 0 on success and 1 on any validation, not-found, protocol or
network failure.
"""

import argparse
import asyncio
import sys

from typing import TYPE_CHECKING, NoReturn, TypeAlias, cast

from rich.console import Console

from evm_rpc.blocks.resolver import normalize_block_tag, resolve_block
from evm_rpc.helpers.config import (
    get_eth_rpc_url,
    get_log_level,
    get_output_format,
    get_rpc_timeout,
)
from evm_rpc.helpers.constants import (
    DECIMAL_PATTERN,
    DEFAULT_BLOCK_TAG,
    EXIT_FAILURE,
    EXIT_SUCCESS,
    OUTPUT_FORMATS,
)
from evm_rpc.helpers.errors import EVMRPCError, NotFoundError, ValidationError
from evm_rpc.helpers.formatting import (
    OutputFormat,
    format_balance,
    format_chain_info,
    render,
    to_jsonable,
)
from evm_rpc.helpers.logging import get_logger, set_log_level
from evm_rpc.helpers.parsers import to_quantity
from evm_rpc.helpers.validators import is_valid_tx_hash, require_address, require_tx_hash
from evm_rpc.rpc.client import RPCClient
from evm_rpc.rpc.models import CallParams, LogFilter


if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    Handler: TypeAlias = Callable[[RPCClient, argparse.Namespace, OutputFormat], Awaitable[str]]


logger = get_logger(__name__)


def _hex_option(value: str | None) -> str | None:
    """Accept decimal option values for quantities, pass hex through."""
    if value is not None and DECIMAL_PATTERN.fullmatch(value):
        return to_quantity(int(value))
    return value


def _call_params(args: argparse.Namespace) -> CallParams:
    require_address(args.to, "contract address")
    if args.from_address:
        require_address(args.from_address, "sender address")
    return CallParams(
        to=args.to,
        data=args.data or None,
        from_address=args.from_address,
        gas=_hex_option(args.gas),
        gas_price=_hex_option(args.gas_price),
        value=_hex_option(args.value),
    )


def _topic(value: str) -> str | list[str] | None:
    if value in {"", "null", "*"}:
        return None
    alternatives = value.split(",")
    for topic in alternatives:
        if not is_valid_tx_hash(topic):
            msg = f"Invalid topic: {topic!r}"
            raise ValidationError(msg, topic)
    return alternatives if len(alternatives) > 1 else alternatives[0]


# Command handlers


async def cmd_block_number(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.get_block_number(), fmt)


async def cmd_chain_id(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.get_chain_id(), fmt)


async def cmd_gas_price(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.get_gas_price(), fmt)


async def cmd_network_version(
    rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat
) -> str:
    return render(await rpc.get_network_version(), fmt)


async def cmd_balance(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    balance = await rpc.get_balance(args.address, args.block)
    return format_balance(balance, fmt)


async def cmd_nonce(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.get_transaction_count(args.address, args.block), fmt)


async def cmd_code(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.get_code(args.address, args.block), fmt)


async def cmd_storage(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    position = _hex_option(args.position)
    return render(await rpc.get_storage_at(args.address, position, args.block), fmt)


async def cmd_call(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return render(await rpc.call(args.call_params, args.block), fmt)


async def cmd_estimate_gas(
    rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat
) -> str:
    return render(await rpc.estimate_gas(args.call_params), fmt)


async def cmd_tx(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    tx = await rpc.get_transaction_by_hash(args.hash)
    if tx is None:
        raise NotFoundError("Transaction", args.hash)
    if tx.is_pending:
        logger.info("transaction %s is still pending", args.hash)
    return render(tx, fmt)


async def cmd_receipt(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    receipt = await rpc.get_transaction_receipt(args.hash)
    if receipt is None:
        raise NotFoundError(
            "Transaction receipt", args.hash, "the transaction may be pending or unknown"
        )
    if receipt.succeeded is False:
        logger.warning("transaction %s reverted (status %s)", args.hash, receipt.status)
    return render(receipt, fmt)


async def cmd_block(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    resolution = await resolve_block(
        rpc,
        args.identifier,
        full_transactions=args.transactions,
        with_status=args.status,
    )
    if resolution.status is None:
        return render(resolution.block, fmt)
    return render({**to_jsonable(resolution.block), "status": resolution.status.value}, fmt)


async def cmd_logs(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    logs = await rpc.get_logs(args.log_filter)
    return render(logs, fmt)


async def cmd_info(rpc: RPCClient, args: argparse.Namespace, fmt: OutputFormat) -> str:
    return format_chain_info(await rpc.get_chain_info(), fmt)


# Pre-flight validation, run before any client exists


def _validate(args: argparse.Namespace) -> None:
    if hasattr(args, "block"):
        args.block = normalize_block_tag(args.block)
    if hasattr(args, "address") and isinstance(args.address, str):
        require_address(args.address)
    if hasattr(args, "hash"):
        require_tx_hash(args.hash)
    if hasattr(args, "to"):
        args.call_params = _call_params(args)
    if args.command == "logs":
        args.log_filter = _log_filter(args)


def _log_filter(args: argparse.Namespace) -> LogFilter:
    addresses = [require_address(address) for address in args.address or []]
    if args.block_hash is not None and not is_valid_tx_hash(args.block_hash):
        msg = f"Invalid block hash: {args.block_hash!r}"
        raise ValidationError(msg, args.block_hash)
    if args.block_hash is not None and (args.from_block or args.to_block):
        msg = "--block-hash cannot be combined with --from-block/--to-block"
        raise ValidationError(msg, args.block_hash)
    topics = [_topic(topic) for topic in args.topic] if args.topic else None
    return LogFilter(
        from_block=normalize_block_tag(args.from_block) if args.from_block else None,
        to_block=normalize_block_tag(args.to_block) if args.to_block else None,
        address=addresses[0] if len(addresses) == 1 else (addresses or None),
        topics=topics,
        block_hash=args.block_hash,
    )


class ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _add_block_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-b",
        "--block",
        default=DEFAULT_BLOCK_TAG,
        help="Block tag (latest, earliest, pending, safe, finalized) or block number",
    )


def _add_call_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("to", help="Contract address")
    parser.add_argument("-d", "--data", default="0x", help="Call data (hex)")
    parser.add_argument("-f", "--from", dest="from_address", help="From address")
    parser.add_argument("-g", "--gas", help="Gas limit")
    parser.add_argument("-p", "--gas-price", dest="gas_price", help="Gas price")
    parser.add_argument("-v", "--value", help="Value to send (wei)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = ArgumentParser(
        prog="evm-rpc",
        description="Query an Ethereum-compatible JSON-RPC endpoint",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  evm-rpc -u https://ethereum-rpc.publicnode.com block-number
  evm-rpc balance 0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045
  evm-rpc block finalized --status
  evm-rpc -f json block 19000000 --transactions
        """,
    )
    parser.add_argument("-u", "--url", help="RPC URL endpoint (default: $ETH_RPC_URL)")
    parser.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (default: $EVM_RPC_FORMAT or pretty)",
    )
    parser.add_argument(
        "--timeout", type=float, help="Request timeout in seconds (default: 30)"
    )
    parser.add_argument(
        "--log-level", help="Log level for stderr diagnostics (default: WARNING)"
    )

    commands = parser.add_subparsers(dest="command", required=True, metavar="command")

    def add(name: str, handler: "Handler", help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text, description=help_text)
        sub.set_defaults(handler=handler)
        return sub

    add("block-number", cmd_block_number, "Get the current block number")
    add("chain-id", cmd_chain_id, "Get the chain ID")
    add("gas-price", cmd_gas_price, "Get the current gas price")
    add("network-version", cmd_network_version, "Get the network ID (net_version)")
    add("info", cmd_info, "Get blockchain information")

    sub = add("balance", cmd_balance, "Get balance of an address")
    sub.add_argument("address", help="Ethereum address")
    _add_block_option(sub)

    sub = add("nonce", cmd_nonce, "Get the transaction count of an address")
    sub.add_argument("address", help="Ethereum address")
    _add_block_option(sub)

    sub = add("code", cmd_code, "Get code at an address")
    sub.add_argument("address", help="Contract address")
    _add_block_option(sub)

    sub = add("storage", cmd_storage, "Get a storage slot of a contract")
    sub.add_argument("address", help="Contract address")
    sub.add_argument("position", help="Storage slot (hex or decimal)")
    _add_block_option(sub)

    sub = add("call", cmd_call, "Make a call to a smart contract")
    _add_call_options(sub)
    _add_block_option(sub)

    sub = add("estimate-gas", cmd_estimate_gas, "Estimate gas for a call")
    _add_call_options(sub)

    sub = add("tx", cmd_tx, "Get transaction details by hash")
    sub.add_argument("hash", help="Transaction hash")

    sub = add("receipt", cmd_receipt, "Get transaction receipt by hash")
    sub.add_argument("hash", help="Transaction hash")

    sub = add("block", cmd_block, "Get block by number, tag or hash")
    sub.add_argument("identifier", help="Block number (hex/decimal), tag, or block hash")
    sub.add_argument(
        "-t",
        "--transactions",
        action="store_true",
        help="Include full transaction details",
    )
    sub.add_argument(
        "-s",
        "--status",
        action="store_true",
        help="Report whether the block is finalized, safe or pending",
    )

    sub = add("logs", cmd_logs, "Get logs matching a filter")
    sub.add_argument("--address", action="append", help="Emitting contract (repeatable)")
    sub.add_argument(
        "--topic",
        action="append",
        help="Topic by position (repeatable); comma-separate alternatives, 'null' for any",
    )
    sub.add_argument("--from-block", dest="from_block", help="Start block")
    sub.add_argument("--to-block", dest="to_block", help="End block")
    sub.add_argument("--block-hash", dest="block_hash", help="Restrict to one block")

    return parser


async def execute(args: argparse.Namespace, rpc_url: str, fmt: OutputFormat) -> str:
    """Run the selected command against ``rpc_url`` and return rendered output."""
    handler: Handler = args.handler
    async with RPCClient(rpc_url, timeout=get_rpc_timeout(args.timeout)) as rpc:
        return await handler(rpc, args, fmt)


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, run the command, print the result.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    out = Console(soft_wrap=True, highlight=False, emoji=False)
    err = Console(stderr=True, soft_wrap=True, highlight=False, emoji=False)

    try:
        set_log_level(get_log_level(args.log_level))
        fmt = cast("OutputFormat", get_output_format(args.format))
        rpc_url = get_eth_rpc_url(args.url)
        _validate(args)
        output = asyncio.run(execute(args, rpc_url, fmt))
    except (EVMRPCError, ValueError) as e:
        logger.debug("%s failed", args.command, exc_info=True)
        err.print(f"Error: {e}", markup=False)
        return EXIT_FAILURE

    out.print(output, markup=False)
    return EXIT_SUCCESS


def cli() -> None:
    """Command-line interface entry point."""
    sys.exit(run())


if __name__ == "__main__":
    cli()
