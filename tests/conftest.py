"""Pytest configuration and shared fixtures for client tests."""

import json

from typing import TYPE_CHECKING, Any

import httpx
import pytest


if TYPE_CHECKING:
    from collections.abc import Callable

    from pytest_httpx import HTTPXMock


RPC_URL = "https://rpc.test"

ABSENT = object()
"""Marker for a response that carries neither result nor error."""


class FakeNode:
    """Minimal JSON-RPC node answering requests intercepted by pytest-httpx.

    Handlers are registered per method. A handler is a plain value, a callable
    receiving the request params, or an error dict sent as the error member.
    Every decoded request is recorded in ``requests`` in arrival order.
    """

    def __init__(self) -> None:
        self.handlers: dict[str, Any] = {}
        self.errors: dict[str, dict[str, Any]] = {}
        self.requests: list[dict[str, Any]] = []

    def on(self, method: str, result: Any = None, *, omit: bool = False) -> "FakeNode":
        """Answer ``method`` with ``result`` (value or callable of params).

        With ``omit=True`` the response carries no result member at all.
        """
        self.handlers[method] = ABSENT if omit else result
        return self

    def fail(self, method: str, code: int, message: str, data: Any = None) -> "FakeNode":
        """Answer ``method`` with a JSON-RPC error member."""
        error: dict[str, Any] = {"code": code, "message": message}
        if data is not None:
            error["data"] = data
        self.errors[method] = error
        return self

    @property
    def methods(self) -> list[str]:
        """Methods of all received requests, in order."""
        return [request["method"] for request in self.requests]

    @property
    def ids(self) -> list[int]:
        """Correlation ids of all received requests, in order."""
        return [request["id"] for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)
        method = payload["method"]
        body: dict[str, Any] = {"jsonrpc": "2.0", "id": payload["id"]}

        if method in self.errors:
            body["error"] = self.errors[method]
            return httpx.Response(200, json=body)

        if method not in self.handlers:
            body["error"] = {"code": -32601, "message": f"the method {method} does not exist"}
            return httpx.Response(200, json=body)

        result = self.handlers[method]
        if callable(result):
            result = result(payload["params"])
        if result is not ABSENT:
            body["result"] = result
        return httpx.Response(200, json=body)


@pytest.fixture
def rpc_url() -> str:
    """Endpoint URL used by all mocked clients."""
    return RPC_URL


@pytest.fixture
def node(httpx_mock: "HTTPXMock") -> FakeNode:
    """Fake node answering every POST to the mocked endpoint.

    Args:
        httpx_mock: pytest-httpx fixture

    Returns:
        FakeNode to register method handlers on
    """
    fake = FakeNode()
    httpx_mock.add_callback(fake, is_reusable=True, is_optional=True)
    return fake


@pytest.fixture
def make_block() -> "Callable[..., dict[str, Any]]":
    """Factory for block payloads shaped like eth_getBlockByNumber results."""

    def factory(number: int | None, **overrides: Any) -> dict[str, Any]:
        block: dict[str, Any] = {
            "number": hex(number) if number is not None else None,
            "hash": f"0x{(number or 0):064x}" if number is not None else None,
            "parentHash": f"0x{max((number or 0) - 1, 0):064x}",
            "timestamp": "0x65a0c2f3",
            "gasLimit": "0x1c9c380",
            "gasUsed": "0xe4e1c0",
            "miner": "0x95222290dd7278aa3ddd389cc1e1d165cc4bafe5",
            "transactions": [],
        }
        block.update(overrides)
        return block

    return factory
