"""HTTP client utilities and helpers."""

from typing import Any

import httpx

from ethrpc.helpers.constants import (
    CONNECTION_TIMEOUT,
    DEFAULT_TIMEOUT,
    MAX_CONNECTIONS,
    MAX_KEEPALIVE_CONNECTIONS,
)
from ethrpc.helpers.errors import TransportError
from ethrpc.helpers.http_models import JsonObject
from ethrpc.helpers.logging import get_logger


logger = get_logger(__name__)


def create_http_client(
    timeout: float = DEFAULT_TIMEOUT, **kwargs: Any
) -> httpx.AsyncClient:
    """Create a configured httpx AsyncClient.

    Args:
        timeout: Default timeout in seconds (default: DEFAULT_TIMEOUT)
        **kwargs: Additional httpx.AsyncClient kwargs

    Returns:
        Configured AsyncClient instance

    Example:
        ```python
        from ethrpc.helpers.http import create_http_client

        async with create_http_client(timeout=60.0) as client:
            body = await post_json_rpc(client, url, {"method": "eth_chainId"})
        ```
    """
    kwargs.setdefault(
        "limits",
        httpx.Limits(
            max_connections=MAX_CONNECTIONS,
            max_keepalive_connections=MAX_KEEPALIVE_CONNECTIONS,
        ),
    )
    return httpx.AsyncClient(
        timeout=httpx.Timeout(timeout, connect=min(timeout, CONNECTION_TIMEOUT)),
        **kwargs,
    )


async def post_json_rpc(
    client: httpx.AsyncClient,
    url: str,
    body: JsonObject,
    *,
    timeout: float | None = None,
) -> JsonObject:
    """Post a JSON-RPC body and return the decoded response object.

    Args:
        client: HTTP client instance
        url: Endpoint URL
        body: JSON-RPC request body
        timeout: Optional timeout override

    Returns:
        Decoded JSON object returned by the endpoint

    Raises:
        TransportError: On connection failure, timeout, non-2xx status, or a
            body that is not a JSON object
    """
    try:
        if timeout is None:
            response = await client.post(url, json=body)
        else:
            response = await client.post(url, json=body, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except httpx.TimeoutException as e:
        # timeouts count as transport failures so failover applies uniformly
        raise TransportError(url, e) from e
    except httpx.HTTPError as e:
        raise TransportError(url, e) from e
    except ValueError as e:
        # body is not valid JSON
        raise TransportError(url, e) from e

    if not isinstance(data, dict):
        msg = f"expected a JSON object, got {type(data).__name__}"
        raise TransportError(url, msg)

    logger.debug("%s answered %s", url, body.get("method"))
    return data


__all__ = [
    "create_http_client",
    "post_json_rpc",
]
