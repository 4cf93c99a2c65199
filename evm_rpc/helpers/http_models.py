"""Type definitions for JSON-RPC payloads."""

from typing import Any, TypeAlias


# JSON value type - using Any for the recursive case
# since pyright has trouble with recursive type aliases
JsonValue: TypeAlias = str | int | float | bool | dict[str, Any] | list[Any] | None

# Positional params of a JSON-RPC call
JsonRpcParams: TypeAlias = list[Any]

__all__ = ["JsonRpcParams", "JsonValue"]
