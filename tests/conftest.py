"""Pytest configuration and shared raw node payloads."""

import copy

import pytest

from typing import Any


TX_HASH = "0x9014ae6ef92464338355a79e5150e542ff9a83e2323318b21f40d6a3e65b4789"
BLOCK_HASH = "0x876810a013dbcd140f6fd6048c1dc33abbb901f1f96b394c2fa63aef3cb40b5d"
PARENT_HASH = "0x5e2b4a1d0c55cd6f7b51a1e3e0e79d9cbb1f0d5c3e8b3a1c0a9d8e7f6a5b4c3d"
SENDER = "0xdfd9de5f6fa60bd70636c0900752e93a6144aed4"
SENDER_CHECKSUM = "0xdfD9dE5f6FA60BD70636c0900752E93a6144AEd4"
RECIPIENT = "0x39b72d136ba3e4cef35f48cd09587ffab754dd8b"
RECIPIENT_CHECKSUM = "0x39B72d136ba3e4ceF35F48CD09587ffaB754DD8B"
MINER = "0xea674fdde714fd979de3edf0f56aa9716b898ec8"
TOKEN = "0x0edf9bc41bbc1354c70e2107f80c42cae7fbbca8"
TOKEN_CHECKSUM = "0x0eDF9bc41Bbc1354c70e2107F80C42caE7FBBcA8"
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
LOGS_BLOOM = "0x" + "0" * 512

RAW_LOG: dict[str, Any] = {
    "address": TOKEN,
    "blockHash": BLOCK_HASH,
    "blockNumber": "0xde726e",
    "data": "0x0000000000000000000000000000000000000000000003A12EC797B5484968C1",
    "logIndex": "0x2a",
    "removed": False,
    "topics": [
        TRANSFER_TOPIC,
        "0x00000000000000000000000039B72D136BA3E4CEF35F48CD09587FFAB754DD8B",
        "0x000000000000000000000000dfd9de5f6fa60bd70636c0900752e93a6144aed4",
    ],
    "transactionHash": TX_HASH,
    "transactionIndex": "0x1d",
}

RAW_TRANSACTION: dict[str, Any] = {
    "accessList": [],
    "blockHash": BLOCK_HASH,
    "blockNumber": "0xde726e",
    "chainId": "0x1",
    "from": SENDER,
    "gas": "0x1b623",
    "gasPrice": "0xb5055976a",
    "hash": TX_HASH,
    "input": "0x83259F17000000000000000000000000000000000000000000000000000000000000002A",
    "maxFeePerGas": "0xfc21e1832",
    "maxPriorityFeePerGas": "0x59682f00",
    "nonce": "0x81",
    "r": "0x59a7c15b12c18cd68d6c440963d959bff3e73831ffc938e75ecad07f7ee43fbc",
    "s": "0x1ebaf05f0d9273b16c2a7748b150a79d22533a8cd74552611cbe620fee3dcf1c",
    "to": RECIPIENT,
    "transactionIndex": "0x1d",
    "type": "0x2",
    "v": "0x0",
    "value": "0x0",
}

RAW_RECEIPT: dict[str, Any] = {
    "blockHash": BLOCK_HASH,
    "blockNumber": "0xde726e",
    "contractAddress": None,
    "cumulativeGasUsed": "0x2ed045",
    "effectiveGasPrice": "0xb5055976a",
    "from": SENDER,
    "gasUsed": "0x1b623",
    "logs": [RAW_LOG],
    "logsBloom": LOGS_BLOOM,
    "status": "0x1",
    "to": RECIPIENT,
    "transactionHash": TX_HASH,
    "transactionIndex": "0x1d",
    "type": "0x2",
}

RAW_BLOCK: dict[str, Any] = {
    "baseFeePerGas": "0xa0e2b2f9c",
    "difficulty": "0x2ee5d9e5c8f2e4",
    "extraData": "0x457468657265756D",
    "gasLimit": "0x1ca35ef",
    "gasUsed": "0x1c9c1a7",
    "hash": BLOCK_HASH,
    "logsBloom": LOGS_BLOOM,
    "miner": MINER,
    "mixHash": "0x1b6c3a5e2a4f1f6a0f5b9c8d7e6f5a4b3c2d1e0f9a8b7c6d5e4f3a2b1c0d9e8f",
    "nonce": "0x9C3A6E2B5D4F1A08",
    "number": "0xde726e",
    "parentHash": PARENT_HASH,
    "receiptsRoot": "0x3e8b1f5a2c4d6e8f0a1b3c5d7e9f1a2b4c6d8e0f1a3b5c7d9e1f2a4b6c8d0e1f",
    "sha3Uncles": "0x1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347",
    "size": "0x2c2a1",
    "stateRoot": "0x7a1f3e5c2b4d6f8a0c1e3b5d7f9a1c2e4b6d8f0a1c3e5b7d9f1a2c4e6b8d0f1a",
    "timestamp": "0x62521a9b",
    "totalDifficulty": "0x9fa5b2a1f5d6e9b3c1a",
    "transactions": [TX_HASH.upper().replace("0X", "0x")],
    "transactionsRoot": "0x4c2e6a8b0d1f3e5a7c9b1d3f5e7a9c1b3d5f7e9a1c3b5d7f9e1a3c5b7d9f1e3a",
    "uncles": [],
}


@pytest.fixture
def raw_log() -> dict[str, Any]:
    """Raw eth_getLogs entry."""
    return copy.deepcopy(RAW_LOG)


@pytest.fixture
def raw_transaction() -> dict[str, Any]:
    """Raw EIP-1559 transaction as returned by eth_getTransactionByHash."""
    return copy.deepcopy(RAW_TRANSACTION)


@pytest.fixture
def raw_receipt() -> dict[str, Any]:
    """Raw eth_getTransactionReceipt result with one log."""
    return copy.deepcopy(RAW_RECEIPT)


@pytest.fixture
def raw_block() -> dict[str, Any]:
    """Raw block requested without transaction objects."""
    return copy.deepcopy(RAW_BLOCK)


@pytest.fixture
def raw_block_with_transactions() -> dict[str, Any]:
    """Raw block requested with transaction objects."""
    block = copy.deepcopy(RAW_BLOCK)
    block["transactions"] = [copy.deepcopy(RAW_TRANSACTION)]
    return block
