"""Typed Ethereum JSON-RPC operations on top of an endpoint strategy."""

import asyncio
import itertools

from collections.abc import Mapping
from types import TracebackType

from typing import Any, Self

from pydantic import ValidationError

from ethrpc.helpers.errors import InvalidArgument, MalformedResponse, RpcError
from ethrpc.helpers.logging import get_logger
from ethrpc.helpers.parsers import (
    BlockTag,
    is_block_hash,
    parse_hex_int,
    parse_hex_quantity,
    prepare_block_tag,
)
from ethrpc.helpers.rpc_models import JsonRpcRequest, JsonRpcResponse
from ethrpc.numeric.big_number import BigNumber
from ethrpc.providers.chains import lookup_chain
from ethrpc.providers.models import (
    Block,
    Log,
    LogFilter,
    Network,
    Transaction,
    TransactionReceipt,
    TransactionRequest,
)
from ethrpc.providers.normalizers import (
    normalize_block,
    normalize_log,
    normalize_transaction,
    normalize_transaction_receipt,
)
from ethrpc.providers.strategies import EndpointStrategy


logger = get_logger(__name__)


def _confirmations(block_number: BigNumber | None, latest: BigNumber) -> BigNumber:
    # pending records have no block yet
    if block_number is None:
        return BigNumber.from_int(0)
    return latest - block_number + 1


class BaseProvider:
    """Ethereum JSON-RPC client returning canonical records.

    Every operation builds a fresh request, hands it to the strategy, checks
    the response envelope and normalizes the result. Failures propagate
    unchanged; the only retrying is whatever the strategy does.

    Example:
        ```python
        async with JsonRpcProvider("https://eth.llamarpc.com") as provider:
            block = await provider.get_block("latest")
            balance = await provider.get_balance(block.miner)
        ```
    """

    def __init__(self, strategy: EndpointStrategy) -> None:
        """Initialize the provider.

        Args:
            strategy: Endpoint strategy used for every request
        """
        self.strategy = strategy
        self._request_ids = itertools.count(1)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close HTTP resources owned by the strategy."""
        await self.strategy.aclose()

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Make a single JSON-RPC call and return its raw result.

        Args:
            method: RPC method name (e.g., "eth_blockNumber")
            params: Method parameters list

        Returns:
            The ``result`` member, which may be None

        Raises:
            TransportError: If the strategy could not reach a node
            AllEndpointsFailedError: If every failover endpoint failed
            RpcError: If the node answered with an error object
            MalformedResponse: If the envelope has both or neither of
                result and error
        """
        request = JsonRpcRequest(
            method=method, params=params or [], id=next(self._request_ids)
        )
        raw = await self.strategy.dispatch(request.model_dump())

        try:
            response = JsonRpcResponse.model_validate(raw)
        except ValidationError as e:
            raise MalformedResponse(f"{method} response", e) from e

        if response.error is not None:
            error = response.error
            logger.debug("%s returned error %s: %s", method, error.code, error.message)
            raise RpcError(error.code, error.message, error.data, method)

        return response.result

    async def _call_quantity(self, method: str, params: list[Any]) -> BigNumber:
        result = await self.call(method, params)
        if result is None:
            raise MalformedResponse(method, "result is null")
        return parse_hex_quantity(result, method)

    async def _call_with_head(
        self, method: str, params: list[Any]
    ) -> tuple[Any, BigNumber]:
        """Run a lookup and eth_blockNumber concurrently.

        If either request fails the other is cancelled and awaited before the
        original error is raised.
        """
        try:
            async with asyncio.TaskGroup() as group:
                lookup = group.create_task(self.call(method, params))
                head = group.create_task(self.get_block_number())
        except ExceptionGroup as e:
            if len(e.exceptions) == 1:
                raise e.exceptions[0] from None
            raise
        return lookup.result(), head.result()

    async def get_network(self) -> Network:
        """Get the chain id, name and ENS registry of the connected network.

        Returns:
            Network: e.g. ``Network(chain_id=1, name="eth", ens_address="0x0000...")``
        """
        result = await self.call("eth_chainId")
        chain_id = parse_hex_int(result, "eth_chainId")
        info = lookup_chain(chain_id)
        return Network(chain_id=chain_id, name=info.name, ens_address=info.ens_address)

    async def get_block_number(self) -> BigNumber:
        """Get the number of the most recently mined block."""
        return await self._call_quantity("eth_blockNumber", [])

    async def get_block(
        self,
        block_tag: BlockTag = "latest",
        return_transaction_objects: bool = False,
    ) -> Block | None:
        """Get a block by number, hash or symbolic tag.

        Args:
            block_tag: Block number, 66-character block hash, or
                'latest' / 'earliest' / 'pending'
            return_transaction_objects: Return full transactions instead of hashes

        Returns:
            Block, or None if the node does not know the block

        Raises:
            InvalidArgument: If the block tag is malformed
        """
        tag = prepare_block_tag(block_tag)
        method = "eth_getBlockByHash" if is_block_hash(tag) else "eth_getBlockByNumber"
        result = await self.call(method, [tag, return_transaction_objects])
        if result is None:
            return None
        return normalize_block(result, return_transaction_objects)

    async def get_transaction(self, transaction_hash: str) -> Transaction | None:
        """Get a transaction, mined or pending, with its confirmations.

        The lookup and the latest block number are fetched concurrently.

        Returns:
            Transaction, or None if the node does not know the hash
        """
        result, latest = await self._call_with_head(
            "eth_getTransactionByHash", [transaction_hash]
        )
        if result is None:
            return None
        transaction = normalize_transaction(result)
        return transaction.model_copy(
            update={"confirmations": _confirmations(transaction.block_number, latest)}
        )

    async def get_transaction_receipt(
        self, transaction_hash: str
    ) -> TransactionReceipt | None:
        """Get the receipt of a mined transaction with its confirmations.

        Returns:
            TransactionReceipt, or None if the transaction is not mined
        """
        result, latest = await self._call_with_head(
            "eth_getTransactionReceipt", [transaction_hash]
        )
        if result is None:
            return None
        receipt = normalize_transaction_receipt(result)
        return receipt.model_copy(
            update={"confirmations": _confirmations(receipt.block_number, latest)}
        )

    async def get_transaction_count(
        self, address: str, block_tag: BlockTag = "latest"
    ) -> BigNumber:
        """Get the number of transactions sent from an address up to a block."""
        tag = prepare_block_tag(block_tag)
        return await self._call_quantity("eth_getTransactionCount", [address, tag])

    async def get_gas_price(self) -> BigNumber:
        """Get the node's current gas price estimate in wei."""
        return await self._call_quantity("eth_gasPrice", [])

    async def get_balance(
        self, address: str, block_tag: BlockTag = "latest"
    ) -> BigNumber:
        """Get the balance of an address in wei.

        Example:
            ```python
            balance = await provider.get_balance("0x7cB57B5A97eAbe94205C07890BE4c1aD31E486A8")
            balance.to_decimal_string()
            # '28798127851528138'
            ```
        """
        tag = prepare_block_tag(block_tag)
        return await self._call_quantity("eth_getBalance", [address, tag])

    async def get_code(self, address: str, block_tag: BlockTag = "latest") -> str:
        """Get the contract code at an address, ``"0x"`` for accounts without code."""
        tag = prepare_block_tag(block_tag)
        result = await self.call("eth_getCode", [address, tag])
        if not isinstance(result, str):
            raise MalformedResponse("eth_getCode", f"expected hex data, got {result!r}")
        return result.lower()

    async def estimate_gas(
        self, transaction: TransactionRequest | Mapping[str, Any]
    ) -> BigNumber:
        """Estimate the gas a call would use if it were sent.

        Args:
            transaction: Call object, numeric fields as numbers or hex strings

        Raises:
            InvalidArgument: If the call object is malformed
        """
        if not isinstance(transaction, TransactionRequest):
            try:
                transaction = TransactionRequest.model_validate(transaction)
            except ValidationError as e:
                raise InvalidArgument(str(e)) from e
        return await self._call_quantity("eth_estimateGas", [transaction.to_params()])

    async def get_logs(self, log_filter: LogFilter | Mapping[str, Any]) -> list[Log]:
        """Search event logs.

        ``fromBlock`` / ``toBlock`` accept the same block tags as get_block.
        Nodes may return an empty list for very broad filters.

        Example:
            ```python
            logs = await provider.get_logs({
                "address": "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2",
                "fromBlock": 14825027,
                "toBlock": "latest",
            })
            ```
        """
        if not isinstance(log_filter, LogFilter):
            try:
                log_filter = LogFilter.model_validate(log_filter)
            except ValidationError as e:
                raise InvalidArgument(str(e)) from e

        result = await self.call("eth_getLogs", [log_filter.to_params()])
        if not isinstance(result, list):
            raise MalformedResponse("eth_getLogs", f"expected a list, got {result!r}")
        return [normalize_log(log) for log in result]


__all__ = ["BaseProvider"]
