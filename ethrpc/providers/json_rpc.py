"""Providers bound to one endpoint or to an ordered list of endpoints."""

import httpx

from ethrpc.helpers.config import get_eth_rpc_url, get_eth_rpc_urls
from ethrpc.providers.base import BaseProvider
from ethrpc.providers.strategies import FailoverStrategy, SingleEndpointStrategy


class JsonRpcProvider(BaseProvider):
    """Provider talking to a single JSON-RPC endpoint.

    Example:
        ```python
        provider = JsonRpcProvider("https://mainnet.infura.io/v3/YOUR-PROJECT-ID")
        await provider.get_block_number()
        # BigNumber('19000000')
        ```
    """

    def __init__(
        self,
        rpc_url: str | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            rpc_url: JSON-RPC endpoint URL, ETH_RPC_URL when omitted
            timeout: Transport timeout in seconds, ETH_RPC_TIMEOUT when omitted
            http_client: Optional shared client, left open on close

        Raises:
            ValueError: If no URL is given and ETH_RPC_URL is not set
        """
        url = get_eth_rpc_url(rpc_url)
        super().__init__(
            SingleEndpointStrategy(url, timeout=timeout, http_client=http_client)
        )
        self.rpc_url = url


class FallthroughProvider(BaseProvider):
    """Provider falling through an ordered list of endpoints on transport errors.

    Example:
        ```python
        provider = FallthroughProvider([
            "https://primary.example/rpc",
            "https://backup.example/rpc",
        ])
        ```
    """

    def __init__(
        self,
        rpc_urls: list[str] | None = None,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        sticky: bool = False,
    ) -> None:
        """Initialize the provider.

        Args:
            rpc_urls: Endpoint URLs in priority order, ETH_RPC_URLS when omitted
            timeout: Transport timeout per attempt in seconds
            http_client: Optional shared client, left open on close
            sticky: Start each call at the last endpoint that succeeded

        Raises:
            ValueError: If no URLs are given and ETH_RPC_URLS is not set
        """
        urls = get_eth_rpc_urls(rpc_urls)
        super().__init__(
            FailoverStrategy(
                urls, timeout=timeout, http_client=http_client, sticky=sticky
            )
        )
        self.rpc_urls = urls


__all__ = ["FallthroughProvider", "JsonRpcProvider"]
