"""Pydantic models for canonical chain records and call arguments.

Records use snake_case attributes with the node's camelCase names as aliases,
so ``block.gas_used`` and ``block.model_dump(by_alias=True)["gasUsed"]`` both
work. Fields a node did not send are ``None``; unknown fields a node adds are
kept verbatim as extras.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ethrpc.helpers.parsers import BlockTag, encode_quantity, prepare_block_tag
from ethrpc.numeric.big_number import BigNumber


def _zero() -> BigNumber:
    return BigNumber.from_int(0)


class ChainRecord(BaseModel):
    """Base for records normalized from node payloads."""

    model_config = ConfigDict(
        extra="allow",
        frozen=True,
        populate_by_name=True,
    )


class Log(ChainRecord):
    """Event log emitted by a transaction."""

    address: str = Field(..., description="Checksummed emitting contract")
    topics: list[str] = Field(..., description="Indexed topics, lowercase hex")
    data: str = Field(..., description="Non-indexed data, lowercase hex")
    block_number: BigNumber = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    transaction_hash: str = Field(..., alias="transactionHash")
    transaction_index: BigNumber = Field(..., alias="transactionIndex")
    log_index: BigNumber = Field(..., alias="logIndex")
    removed: bool | None = Field(
        default=None, description="True when the log was reverted by a reorg"
    )


class Transaction(ChainRecord):
    """Transaction, mined or pending."""

    hash: str = Field(..., description="Transaction hash")
    from_: str = Field(..., alias="from", description="Checksummed sender")
    to: str | None = Field(
        default=None, description="Checksummed recipient, None for contract creation"
    )
    nonce: BigNumber
    gas: BigNumber
    value: BigNumber
    input: str
    gas_price: BigNumber | None = Field(default=None, alias="gasPrice")
    max_fee_per_gas: BigNumber | None = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: BigNumber | None = Field(
        default=None, alias="maxPriorityFeePerGas"
    )
    block_hash: str | None = Field(default=None, alias="blockHash")
    block_number: BigNumber | None = Field(default=None, alias="blockNumber")
    transaction_index: BigNumber | None = Field(default=None, alias="transactionIndex")
    chain_id: BigNumber | None = Field(default=None, alias="chainId")
    type: BigNumber | None = None
    v: BigNumber | None = None
    r: str | None = None
    s: str | None = None
    y_parity: BigNumber | None = Field(default=None, alias="yParity")
    access_list: list[dict[str, Any]] | None = Field(default=None, alias="accessList")
    max_fee_per_blob_gas: BigNumber | None = Field(default=None, alias="maxFeePerBlobGas")
    blob_versioned_hashes: list[str] | None = Field(
        default=None, alias="blobVersionedHashes", description="Type 3 blob hashes"
    )
    confirmations: BigNumber = Field(
        default_factory=_zero,
        description="Blocks mined on top of and including this one, 0 while pending",
    )


class TransactionReceipt(ChainRecord):
    """Receipt of a mined transaction."""

    transaction_hash: str = Field(..., alias="transactionHash")
    transaction_index: BigNumber = Field(..., alias="transactionIndex")
    block_hash: str = Field(..., alias="blockHash")
    block_number: BigNumber = Field(..., alias="blockNumber")
    from_: str = Field(..., alias="from")
    to: str | None = None
    contract_address: str | None = Field(
        default=None,
        alias="contractAddress",
        description="Checksummed address of a created contract",
    )
    cumulative_gas_used: BigNumber = Field(..., alias="cumulativeGasUsed")
    gas_used: BigNumber = Field(..., alias="gasUsed")
    effective_gas_price: BigNumber | None = Field(default=None, alias="effectiveGasPrice")
    logs: list[Log]
    logs_bloom: str = Field(..., alias="logsBloom")
    status: BigNumber | None = Field(
        default=None, description="1 for success, 0 for revert (post-Byzantium)"
    )
    root: str | None = Field(default=None, description="State root (pre-Byzantium)")
    type: BigNumber | None = None
    blob_gas_used: BigNumber | None = Field(default=None, alias="blobGasUsed")
    blob_gas_price: BigNumber | None = Field(default=None, alias="blobGasPrice")
    byzantium: bool = Field(..., description="Mined at or after the Byzantium fork")
    confirmations: BigNumber = Field(default_factory=_zero)


class Withdrawal(ChainRecord):
    """Validator withdrawal included in a post-Shanghai block."""

    index: BigNumber
    validator_index: BigNumber = Field(..., alias="validatorIndex")
    address: str = Field(..., description="Checksummed recipient")
    amount: BigNumber = Field(..., description="Amount in gwei")


class Block(ChainRecord):
    """Block with either transaction hashes or full transactions."""

    number: BigNumber
    hash: str | None = Field(default=None, description="None for pending blocks")
    parent_hash: str = Field(..., alias="parentHash")
    timestamp: BigNumber
    gas_limit: BigNumber = Field(..., alias="gasLimit")
    gas_used: BigNumber = Field(..., alias="gasUsed")
    base_fee_per_gas: BigNumber | None = Field(default=None, alias="baseFeePerGas")
    difficulty: BigNumber | None = None
    total_difficulty: BigNumber | None = Field(default=None, alias="totalDifficulty")
    size: BigNumber | None = None
    nonce: str | None = None
    miner: str | None = Field(default=None, description="Checksummed fee recipient")
    extra_data: str | None = Field(default=None, alias="extraData")
    logs_bloom: str | None = Field(default=None, alias="logsBloom")
    mix_hash: str | None = Field(default=None, alias="mixHash")
    sha3_uncles: str | None = Field(default=None, alias="sha3Uncles")
    state_root: str | None = Field(default=None, alias="stateRoot")
    receipts_root: str | None = Field(default=None, alias="receiptsRoot")
    transactions_root: str | None = Field(default=None, alias="transactionsRoot")
    withdrawals_root: str | None = Field(default=None, alias="withdrawalsRoot")
    withdrawals: list[Withdrawal] | None = None
    blob_gas_used: BigNumber | None = Field(default=None, alias="blobGasUsed")
    excess_blob_gas: BigNumber | None = Field(default=None, alias="excessBlobGas")
    parent_beacon_block_root: str | None = Field(
        default=None, alias="parentBeaconBlockRoot"
    )
    uncles: list[str] = Field(default_factory=list)
    transactions: list[Transaction] | list[str] = Field(
        ..., description="Transaction hashes, or full transactions when requested"
    )


class Network(BaseModel):
    """Network a provider is connected to."""

    model_config = ConfigDict(frozen=True)

    chain_id: int
    name: str
    ens_address: str | None = None


class LogFilter(BaseModel):
    """Arguments of an eth_getLogs search.

    Accepts snake_case or camelCase keys. ``block_hash`` excludes a block range.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    address: str | list[str] | None = None
    topics: list[str | list[str] | None] | None = None
    from_block: int | str | BigNumber | None = Field(default=None, alias="fromBlock")
    to_block: int | str | BigNumber | None = Field(default=None, alias="toBlock")
    block_hash: str | None = Field(default=None, alias="blockHash")

    @model_validator(mode="after")
    def check_range_or_hash(self) -> Self:
        """Reject filters selecting both a block hash and a block range."""
        if self.block_hash is not None and (
            self.from_block is not None or self.to_block is not None
        ):
            msg = "blockHash cannot be combined with fromBlock or toBlock"
            raise ValueError(msg)
        return self

    def to_params(self) -> dict[str, Any]:
        """Render the filter as an eth_getLogs parameter object."""
        params: dict[str, Any] = {}
        if self.address is not None:
            params["address"] = self.address
        if self.topics is not None:
            params["topics"] = self.topics
        if self.from_block is not None:
            params["fromBlock"] = prepare_block_tag(self.from_block)
        if self.to_block is not None:
            params["toBlock"] = prepare_block_tag(self.to_block)
        if self.block_hash is not None:
            params["blockHash"] = self.block_hash
        return params


class TransactionRequest(BaseModel):
    """Call object for eth_estimateGas.

    Numeric fields given as numbers are hex encoded; strings are sent as is.
    """

    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    gas: int | str | BigNumber | None = None
    gas_price: int | str | BigNumber | None = Field(default=None, alias="gasPrice")
    max_fee_per_gas: int | str | BigNumber | None = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: int | str | BigNumber | None = Field(
        default=None, alias="maxPriorityFeePerGas"
    )
    value: int | str | BigNumber | None = None
    nonce: int | str | BigNumber | None = None
    data: str | None = None

    def to_params(self) -> dict[str, Any]:
        """Render the request as a JSON-RPC call object."""
        params: dict[str, Any] = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            key = field.alias or name
            if name in {"from_", "to", "data"}:
                params[key] = value
            else:
                params[key] = encode_quantity(value)
        params.update(self.model_extra or {})
        return params


__all__ = [
    "Block",
    "BlockTag",
    "ChainRecord",
    "Log",
    "LogFilter",
    "Network",
    "Transaction",
    "TransactionReceipt",
    "TransactionRequest",
    "Withdrawal",
]
