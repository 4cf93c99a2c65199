"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv

from evm_rpc.helpers.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_TIMEOUT,
    OUTPUT_FORMATS,
)


# Load environment variables from .env file
load_dotenv()


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Empty values count as unset.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key) or default


def get_eth_rpc_url(rpc_url: str | None = None) -> str:
    """Get Ethereum RPC URL from parameter or environment.

    Args:
        rpc_url: Optional RPC URL to use directly

    Returns:
        Ethereum RPC URL

    Raises:
        ValueError: If RPC URL is not provided and ETH_RPC_URL env var is not set

    Example:
        ```python
        from evm_rpc.helpers.config import get_eth_rpc_url

        # Get from environment
        rpc_url = get_eth_rpc_url()

        # Or provide explicitly
        rpc_url = get_eth_rpc_url("https://ethereum-rpc.publicnode.com")
        ```
    """
    if rpc_url:
        return rpc_url

    env_rpc_url = get_optional_env("ETH_RPC_URL")
    if not env_rpc_url:
        msg = "RPC URL must be provided with --url or set in ETH_RPC_URL"
        raise ValueError(msg)

    return env_rpc_url


def get_output_format(output_format: str | None = None) -> str:
    """Get output format from parameter, EVM_RPC_FORMAT, or the default.

    Args:
        output_format: Optional format to use directly

    Returns:
        "json" or "pretty"

    Raises:
        ValueError: If the resolved format is not supported
    """
    value = output_format or get_optional_env("EVM_RPC_FORMAT") or DEFAULT_OUTPUT_FORMAT
    if value not in OUTPUT_FORMATS:
        msg = f"Invalid output format: {value} (expected one of {', '.join(OUTPUT_FORMATS)})"
        raise ValueError(msg)
    return value


def get_log_level(log_level: str | None = None) -> str:
    """Get log level name from parameter, EVM_RPC_LOG_LEVEL, or the default."""
    return (log_level or get_optional_env("EVM_RPC_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()


def get_rpc_timeout(timeout: float | None = None) -> float:
    """Get request timeout in seconds from parameter, EVM_RPC_TIMEOUT, or the default.

    Args:
        timeout: Optional timeout to use directly

    Returns:
        Timeout in seconds

    Raises:
        ValueError: If the timeout or EVM_RPC_TIMEOUT is not a positive number
    """
    if timeout is not None:
        if timeout <= 0:
            msg = f"Timeout must be a positive number of seconds, got {timeout:g}"
            raise ValueError(msg)
        return timeout

    env_timeout = get_optional_env("EVM_RPC_TIMEOUT")
    if env_timeout is None:
        return DEFAULT_TIMEOUT

    try:
        value = float(env_timeout)
    except ValueError:
        value = 0.0
    if value <= 0:
        msg = f"EVM_RPC_TIMEOUT must be a positive number, got {env_timeout!r}"
        raise ValueError(msg)
    return value


__all__ = [
    "get_eth_rpc_url",
    "get_log_level",
    "get_optional_env",
    "get_output_format",
    "get_rpc_timeout",
]
