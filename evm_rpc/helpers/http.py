"""HTTP client utilities and helpers."""

from contextlib import asynccontextmanager

from typing import TYPE_CHECKING, Any

import httpx

from evm_rpc.helpers.constants import DEFAULT_TIMEOUT, JSON_CONTENT_TYPE
from evm_rpc.helpers.errors import EVMRPCError
from evm_rpc.helpers.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator


logger = get_logger(__name__)


def create_http_client(
    base_url: str, timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create an httpx AsyncClient bound to a JSON-RPC endpoint.

    Args:
        base_url: JSON-RPC endpoint URL
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance sending JSON content

    Example:
        ```python
        from evm_rpc.helpers.http import create_http_client

        async with create_http_client("https://ethereum-rpc.publicnode.com") as client:
            response = await client.post("", json=payload)
        ```
    """
    headers = {"Content-Type": JSON_CONTENT_TYPE, **kwargs.pop("headers", {})}
    return httpx.AsyncClient(
        base_url=base_url, headers=headers, timeout=timeout, **kwargs
    )


@asynccontextmanager
async def log_and_suppress_errors(
    operation_name: str,
    *,
    log_level: str = "warning",
    suppress: bool = True,
    exceptions: tuple[type[BaseException], ...] = (EVMRPCError,),
) -> "AsyncIterator[None]":
    """Context manager to log and optionally suppress client errors.

    Args:
        operation_name: Description of the operation for logging
        log_level: Logging level ("debug", "info", "warning", "error")
        suppress: If True, suppress exceptions; if False, re-raise after logging
        exceptions: Exception types to intercept; anything else propagates

    Yields:
        None

    Example:
        ```python
        from evm_rpc.helpers.http import log_and_suppress_errors

        safe_block = None
        async with log_and_suppress_errors("fetch safe block"):
            safe_block = await client.get_block_by_number("safe")
            # On failure the error is logged and safe_block stays None
        ```
    """
    try:
        yield
    except exceptions as e:
        log_method = getattr(logger, log_level, logger.warning)
        log_method("%s failed: %s", operation_name, e)

        if not suppress:
            raise


__all__ = [
    "create_http_client",
    "log_and_suppress_errors",
]
