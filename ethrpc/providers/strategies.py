"""Endpoint strategies that carry JSON-RPC bodies to nodes.

A provider holds exactly one strategy and never knows which one. Strategies
only deal with transport: they return the decoded response envelope, and
interpreting ``result`` / ``error`` is left to the provider.
"""

from typing import Protocol

import httpx

from ethrpc.helpers.config import get_rpc_timeout
from ethrpc.helpers.errors import AllEndpointsFailedError, InvalidArgument, TransportError
from ethrpc.helpers.http import create_http_client, post_json_rpc
from ethrpc.helpers.http_models import JsonObject
from ethrpc.helpers.logging import get_logger


logger = get_logger(__name__)


class EndpointStrategy(Protocol):
    """Dispatch contract shared by every strategy."""

    async def dispatch(self, body: JsonObject) -> JsonObject:
        """Send a request body and return the decoded response envelope.

        Raises:
            TransportError: If no usable envelope could be obtained
        """
        ...

    async def aclose(self) -> None:
        """Release HTTP resources owned by the strategy."""
        ...


class _HttpStrategy:
    """Shared HTTP client ownership for the concrete strategies."""

    def __init__(
        self, timeout: float | None, http_client: httpx.AsyncClient | None
    ) -> None:
        self.timeout = get_rpc_timeout(timeout)
        # clients passed in by the caller are theirs to close
        self._owns_client = http_client is None
        self.client = http_client or create_http_client(timeout=self.timeout)

    async def _post(self, url: str, body: JsonObject) -> JsonObject:
        return await post_json_rpc(self.client, url, body, timeout=self.timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


class SingleEndpointStrategy(_HttpStrategy):
    """Send every request to one URL."""

    def __init__(
        self,
        url: str,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            url: JSON-RPC endpoint URL
            timeout: Transport timeout in seconds, ETH_RPC_TIMEOUT by default
            http_client: Optional shared client, not closed by the strategy

        Raises:
            InvalidArgument: If url is empty
        """
        if not url:
            msg = "RPC URL cannot be empty"
            raise InvalidArgument(msg)
        super().__init__(timeout, http_client)
        self.url = url

    @property
    def urls(self) -> list[str]:
        return [self.url]

    async def dispatch(self, body: JsonObject) -> JsonObject:
        return await self._post(self.url, body)


class FailoverStrategy(_HttpStrategy):
    """Try an ordered list of URLs until one answers.

    Endpoints are attempted one after another, never in parallel, so a node
    that is slow rather than down does not receive duplicate load. The first
    usable envelope wins. Only TransportError moves on to the next endpoint.

    With ``sticky=True`` the strategy starts each dispatch at the endpoint
    that last succeeded and wraps around the list from there. By default
    every dispatch starts at the first URL.
    """

    def __init__(
        self,
        urls: list[str],
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        sticky: bool = False,
    ) -> None:
        """Initialize the strategy.

        Args:
            urls: JSON-RPC endpoint URLs in priority order
            timeout: Transport timeout in seconds per attempt
            http_client: Optional shared client, not closed by the strategy
            sticky: Start at the last successful endpoint instead of the first

        Raises:
            InvalidArgument: If urls is empty or contains an empty URL
        """
        if not urls:
            msg = "At least one RPC URL is required"
            raise InvalidArgument(msg)
        if any(not url for url in urls):
            msg = "RPC URL cannot be empty"
            raise InvalidArgument(msg)
        super().__init__(timeout, http_client)
        self._urls = tuple(urls)
        self.sticky = sticky
        self._start_index = 0

    @property
    def urls(self) -> list[str]:
        return list(self._urls)

    def _attempt_order(self) -> list[int]:
        start = self._start_index if self.sticky else 0
        return [(start + offset) % len(self._urls) for offset in range(len(self._urls))]

    async def dispatch(self, body: JsonObject) -> JsonObject:
        errors: list[TransportError] = []
        for index in self._attempt_order():
            url = self._urls[index]
            try:
                response = await self._post(url, body)
            except TransportError as e:
                errors.append(e)
                logger.warning("%s failed for %s: %s", body.get("method"), url, e.cause)
                continue

            if self.sticky:
                self._start_index = index
            if errors:
                logger.info("%s succeeded on fallback %s", body.get("method"), url)
            return response

        logger.error(
            "%s failed on all %d endpoints", body.get("method"), len(self._urls)
        )
        raise AllEndpointsFailedError(errors)


__all__ = [
    "EndpointStrategy",
    "FailoverStrategy",
    "SingleEndpointStrategy",
]
