"""Normalization of raw node payloads into canonical records.

Every function here is pure: it takes the decoded ``result`` of a JSON-RPC
call and returns a frozen pydantic record. Hex quantities become
``BigNumber``, addresses are checksummed, hashes and byte strings are
lowercased, and ``null`` or absent optional fields become ``None``.
Anything that cannot be normalized raises ``MalformedResponse``.
"""

from collections.abc import Iterable, Mapping

from typing import Any, TypeVar

from eth_utils import to_checksum_address
from pydantic import ValidationError

from ethrpc.helpers.constants import BYZANTIUM_BLOCK
from ethrpc.helpers.errors import MalformedResponse
from ethrpc.helpers.parsers import parse_hex_quantity
from ethrpc.providers.models import (
    Block,
    ChainRecord,
    Log,
    Transaction,
    TransactionReceipt,
    Withdrawal,
)


BLOCK_QUANTITIES = (
    "number",
    "timestamp",
    "gasLimit",
    "gasUsed",
    "baseFeePerGas",
    "difficulty",
    "totalDifficulty",
    "size",
    "blobGasUsed",
    "excessBlobGas",
)
BLOCK_ADDRESSES = ("miner",)
BLOCK_HEX_FIELDS = (
    "hash",
    "parentHash",
    "nonce",
    "extraData",
    "logsBloom",
    "mixHash",
    "sha3Uncles",
    "stateRoot",
    "receiptsRoot",
    "transactionsRoot",
    "withdrawalsRoot",
    "parentBeaconBlockRoot",
)

TRANSACTION_QUANTITIES = (
    "blockNumber",
    "transactionIndex",
    "nonce",
    "gas",
    "gasPrice",
    "maxFeePerGas",
    "maxPriorityFeePerGas",
    "value",
    "chainId",
    "type",
    "v",
    "yParity",
    "maxFeePerBlobGas",
)
TRANSACTION_ADDRESSES = ("from", "to")
TRANSACTION_HEX_FIELDS = ("hash", "blockHash", "input", "r", "s")

RECEIPT_QUANTITIES = (
    "blockNumber",
    "transactionIndex",
    "cumulativeGasUsed",
    "gasUsed",
    "effectiveGasPrice",
    "status",
    "blobGasUsed",
    "blobGasPrice",
    "type",
)
RECEIPT_ADDRESSES = ("from", "to", "contractAddress")
RECEIPT_HEX_FIELDS = ("transactionHash", "blockHash", "logsBloom", "root")

LOG_QUANTITIES = ("blockNumber", "transactionIndex", "logIndex")
LOG_ADDRESSES = ("address",)
LOG_HEX_FIELDS = ("blockHash", "transactionHash", "data")

WITHDRAWAL_QUANTITIES = ("index", "validatorIndex", "amount")
WITHDRAWAL_ADDRESSES = ("address",)

R = TypeVar("R", bound=ChainRecord)


def _require_mapping(raw: object, kind: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedResponse(kind, f"expected an object, got {type(raw).__name__}")
    return raw


def _checksum(value: Any, field: str) -> str | None:
    # some nodes send "" instead of null for contract creations
    if value is None or value == "":
        return None
    try:
        return to_checksum_address(value)
    except (TypeError, ValueError) as e:
        raise MalformedResponse(field, e) from e


def _lower(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedResponse(field, f"expected a hex string, got {value!r}")
    return value.lower()


def _clean_fields(
    raw: Mapping[str, Any],
    quantities: Iterable[str],
    addresses: Iterable[str],
    hex_fields: Iterable[str],
) -> dict[str, Any]:
    """Copy a payload converting each known field by kind."""
    cleaned = dict(raw)
    for key in quantities:
        if cleaned.get(key) is not None:
            cleaned[key] = parse_hex_quantity(cleaned[key], key)
    for key in addresses:
        if key in cleaned:
            cleaned[key] = _checksum(cleaned[key], key)
    for key in hex_fields:
        if key in cleaned:
            cleaned[key] = _lower(cleaned[key], key)
    return cleaned


def _build(model: type[R], cleaned: dict[str, Any], kind: str) -> R:
    try:
        return model.model_validate(cleaned)
    except ValidationError as e:
        raise MalformedResponse(kind, e) from e


def _lower_all(values: Any, field: str) -> list[str]:
    if not isinstance(values, list):
        raise MalformedResponse(field, f"expected a list, got {values!r}")
    if any(not isinstance(value, str) for value in values):
        raise MalformedResponse(field, f"expected hex strings, got {values!r}")
    return [value.lower() for value in values]


def normalize_log(raw: object, receipt_log: bool = False) -> Log:
    """Normalize an eth_getLogs entry or a receipt log.

    Args:
        raw: Raw log object
        receipt_log: Drop the ``removed`` flag, which is meaningless inside a receipt

    Returns:
        Log: Canonical log

    Raises:
        MalformedResponse: If mandatory fields are missing or invalid
    """
    payload = _require_mapping(raw, "log")
    cleaned = _clean_fields(payload, LOG_QUANTITIES, LOG_ADDRESSES, LOG_HEX_FIELDS)
    if "topics" in cleaned:
        cleaned["topics"] = _lower_all(cleaned["topics"], "topics")
    if receipt_log:
        cleaned.pop("removed", None)
    return _build(Log, cleaned, "log")


def normalize_transaction(raw: object) -> Transaction:
    """Normalize an eth_getTransactionByHash result or a block transaction.

    ``confirmations`` is left at 0; the provider fills it in once it knows
    the latest block.

    Example:
        ```python
        tx = normalize_transaction(rpc_transaction)
        tx.value
        # BigNumber('0')
        tx.to
        # '0x39B72d136ba3e4ceF35F48CD09587ffaB754DD8B'
        ```
    """
    payload = _require_mapping(raw, "transaction")
    cleaned = _clean_fields(
        payload, TRANSACTION_QUANTITIES, TRANSACTION_ADDRESSES, TRANSACTION_HEX_FIELDS
    )
    if cleaned.get("blobVersionedHashes") is not None:
        cleaned["blobVersionedHashes"] = _lower_all(
            cleaned["blobVersionedHashes"], "blobVersionedHashes"
        )
    return _build(Transaction, cleaned, "transaction")


def normalize_withdrawal(raw: object) -> Withdrawal:
    """Normalize one entry of a block's ``withdrawals`` list."""
    payload = _require_mapping(raw, "withdrawal")
    cleaned = _clean_fields(payload, WITHDRAWAL_QUANTITIES, WITHDRAWAL_ADDRESSES, ())
    return _build(Withdrawal, cleaned, "withdrawal")


def normalize_transaction_receipt(raw: object) -> TransactionReceipt:
    """Normalize an eth_getTransactionReceipt result."""
    payload = _require_mapping(raw, "transaction receipt")
    cleaned = _clean_fields(
        payload, RECEIPT_QUANTITIES, RECEIPT_ADDRESSES, RECEIPT_HEX_FIELDS
    )
    logs = cleaned.get("logs")
    if isinstance(logs, list):
        cleaned["logs"] = [normalize_log(log, receipt_log=True) for log in logs]
    block_number = cleaned.get("blockNumber")
    if block_number is not None:
        cleaned["byzantium"] = block_number >= BYZANTIUM_BLOCK
    return _build(TransactionReceipt, cleaned, "transaction receipt")


def normalize_block(raw: object, return_transaction_objects: bool = False) -> Block:
    """Normalize an eth_getBlockByNumber / eth_getBlockByHash result.

    Args:
        raw: Raw block object
        return_transaction_objects: Whether the block was requested with full
            transactions. When False, ``transactions`` must be hashes; when
            True, every entry is normalized as a Transaction.

    Returns:
        Block: Canonical block

    Raises:
        MalformedResponse: If mandatory fields are missing, or the
            transactions list does not match return_transaction_objects
    """
    payload = _require_mapping(raw, "block")
    cleaned = _clean_fields(payload, BLOCK_QUANTITIES, BLOCK_ADDRESSES, BLOCK_HEX_FIELDS)

    transactions = cleaned.get("transactions")
    if isinstance(transactions, list):
        if return_transaction_objects:
            if any(not isinstance(entry, Mapping) for entry in transactions):
                raise MalformedResponse(
                    "block", "expected transaction objects, got transaction hashes"
                )
            cleaned["transactions"] = [
                normalize_transaction(entry) for entry in transactions
            ]
        else:
            if any(not isinstance(entry, str) for entry in transactions):
                raise MalformedResponse(
                    "block", "expected transaction hashes, got transaction objects"
                )
            cleaned["transactions"] = _lower_all(transactions, "transactions")

    if "uncles" in cleaned and cleaned["uncles"] is not None:
        cleaned["uncles"] = _lower_all(cleaned["uncles"], "uncles")
    elif "uncles" in cleaned:
        del cleaned["uncles"]

    withdrawals = cleaned.get("withdrawals")
    if withdrawals is not None:
        if not isinstance(withdrawals, list):
            raise MalformedResponse("withdrawals", f"expected a list, got {withdrawals!r}")
        cleaned["withdrawals"] = [normalize_withdrawal(entry) for entry in withdrawals]

    return _build(Block, cleaned, "block")


__all__ = [
    "normalize_block",
    "normalize_log",
    "normalize_transaction",
    "normalize_transaction_receipt",
    "normalize_withdrawal",
]
