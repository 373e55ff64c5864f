"""Configuration management and environment variable utilities."""

import os

from dotenv import load_dotenv

from ethrpc.helpers.constants import DEFAULT_TIMEOUT


# Load environment variables from .env file
load_dotenv()


def get_optional_env(key: str, default: str | None = None) -> str | None:
    """Get an optional environment variable with a default value.

    Args:
        key: Environment variable name
        default: Default value if not set

    Returns:
        Environment variable value or default
    """
    return os.getenv(key, default)


def get_required_url(
    env_key: str, url: str | None = None, description: str | None = None
) -> str:
    """Get a URL from a parameter or an environment variable.

    Args:
        env_key: Environment variable consulted when url is not given
        url: Optional URL to use directly
        description: Human readable name used in the error message

    Returns:
        The resolved URL

    Raises:
        ValueError: If neither the parameter nor the env var is set
    """
    if url:
        return url

    env_url = get_optional_env(env_key)
    if not env_url:
        msg = f"{description or env_key} must be provided or set in {env_key}"
        raise ValueError(msg)

    return env_url


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
        from ethrpc.helpers.config import get_eth_rpc_url

        # Get from environment
        rpc_url = get_eth_rpc_url()

        # Or provide explicitly
        rpc_url = get_eth_rpc_url("https://eth.llamarpc.com")
        ```
    """
    return get_required_url("ETH_RPC_URL", rpc_url, "Ethereum RPC URL")


def get_eth_rpc_urls(rpc_urls: list[str] | None = None) -> list[str]:
    """Get an ordered list of Ethereum RPC URLs for failover.

    Args:
        rpc_urls: Optional URLs to use directly, in priority order

    Returns:
        URLs in priority order

    Raises:
        ValueError: If no URLs are given and ETH_RPC_URLS is not set

    Example:
        ```python
        # ETH_RPC_URLS="https://primary.example,https://backup.example"
        urls = get_eth_rpc_urls()
        # ["https://primary.example", "https://backup.example"]
        ```
    """
    if rpc_urls is not None:
        return list(rpc_urls)

    raw = get_required_url("ETH_RPC_URLS", None, "Ethereum RPC URLs")
    urls = [url.strip() for url in raw.split(",") if url.strip()]
    if not urls:
        msg = "ETH_RPC_URLS does not contain any URL"
        raise ValueError(msg)
    return urls


def get_rpc_timeout(timeout: float | None = None) -> float:
    """Get the JSON-RPC transport timeout in seconds.

    Args:
        timeout: Optional timeout to use directly

    Returns:
        Timeout from the parameter, ETH_RPC_TIMEOUT, or DEFAULT_TIMEOUT

    Raises:
        ValueError: If ETH_RPC_TIMEOUT is not a positive number
    """
    if timeout is not None:
        return timeout

    raw = get_optional_env("ETH_RPC_TIMEOUT")
    if not raw:
        return DEFAULT_TIMEOUT

    try:
        value = float(raw)
    except ValueError:
        msg = f"ETH_RPC_TIMEOUT must be a number, got {raw!r}"
        raise ValueError(msg) from None

    if value <= 0:
        msg = f"ETH_RPC_TIMEOUT must be positive, got {raw!r}"
        raise ValueError(msg)
    return value


__all__ = [
    "get_eth_rpc_url",
    "get_eth_rpc_urls",
    "get_optional_env",
    "get_required_url",
    "get_rpc_timeout",
]
