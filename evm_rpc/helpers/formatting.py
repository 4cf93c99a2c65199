"""Rendering of RPC results for the command line."""

import json

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel

from evm_rpc.helpers.http_models import JsonValue
from evm_rpc.helpers.parsers import is_quantity, parse_hex_int, wei_to_ether, wei_to_gwei
from evm_rpc.rpc.models import ChainInfo


OutputFormat: TypeAlias = Literal["json", "pretty"]


def to_jsonable(value: Any) -> JsonValue:
    """Convert models (and lists of models) to plain JSON data using wire names."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, list | tuple):
        return [to_jsonable(item) for item in value]
    return value


def render(value: Any, mode: OutputFormat = "pretty") -> str:
    """Format output for readability.

    ``json`` mode is a 2-space indented JSON document. ``pretty`` mode annotates
    a bare quantity string with its decimal value; only the top-level value is
    annotated, nested fields inside objects are left as the node returned them.

    Args:
        value: Decoded RPC result or model
        mode: "json" or "pretty"

    Returns:
        Rendered text without a trailing newline

    Example:
        >>> render("0x15f5a48")
        '0x15f5a48 (23026248)'
        >>> render("0x15f5a48", "json")
        '"0x15f5a48"'
    """
    data = to_jsonable(value)

    if mode == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)

    if isinstance(data, str):
        if is_quantity(data):
            return f"{data} ({parse_hex_int(data)})"
        return data

    return json.dumps(data, indent=2, ensure_ascii=False)


def format_balance(balance: str, mode: OutputFormat = "pretty") -> str:
    """Render an eth_getBalance result, with the ether amount in pretty mode."""
    if mode != "pretty":
        return render(balance, mode)
    return f"Balance: {balance} wei ({wei_to_ether(balance)} ETH)"


def format_chain_info(info: ChainInfo, mode: OutputFormat = "pretty") -> str:
    """Render the chain-info summary with decimal annotations on every field."""
    summary = {
        "blockNumber": f"{info.block_number} ({parse_hex_int(info.block_number)})",
        "chainId": f"{info.chain_id} ({parse_hex_int(info.chain_id)})",
        "gasPrice": f"{info.gas_price} ({wei_to_gwei(info.gas_price)} gwei)",
    }
    return render(summary, mode)


__all__ = [
    "OutputFormat",
    "format_balance",
    "format_chain_info",
    "render",
    "to_jsonable",
]
