"""Pydantic models for JSON-RPC requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from evm_rpc.helpers.constants import JSONRPC_VERSION


class JsonRpcRequest(BaseModel):
    """JSON-RPC 2.0 request model."""

    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    method: str = Field(..., description="Method name to call")
    params: list[Any] = Field(
        default_factory=list, description="Method parameters"
    )
    id: int = Field(..., description="Correlation ID assigned by the client")

    model_config = ConfigDict(frozen=True)


class JsonRpcError(BaseModel):
    """Error member of a JSON-RPC 2.0 response."""

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Any = Field(default=None, description="Optional error details")


class JsonRpcResponse(BaseModel):
    """JSON-RPC 2.0 response model.

    A response carrying neither ``result`` nor ``error`` (or ``result: null``)
    is an explicit null, which several lookup methods use to mean "not found".
    """

    jsonrpc: str = Field(default=JSONRPC_VERSION, description="JSON-RPC version")
    id: int | str | None = Field(default=None, description="Echoed request ID")
    result: Any = Field(default=None, description="Method result")
    error: JsonRpcError | None = Field(default=None, description="Error member")

    model_config = ConfigDict(extra="allow")


__all__ = [
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
]
