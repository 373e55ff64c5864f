"""Tests for raw payload normalization."""

import pytest

from typing import Any

from eth_utils import to_checksum_address

from conftest import (
    BLOCK_HASH,
    MINER,
    RECIPIENT,
    RECIPIENT_CHECKSUM,
    SENDER_CHECKSUM,
    TOKEN_CHECKSUM,
    TRANSFER_TOPIC,
    TX_HASH,
)
from ethrpc.helpers.errors import MalformedResponse
from ethrpc.numeric.big_number import BigNumber
from ethrpc.providers.models import Log, Transaction, Withdrawal
from ethrpc.providers.normalizers import (
    normalize_block,
    normalize_log,
    normalize_transaction,
    normalize_transaction_receipt,
)


class TestNormalizeTransaction:
    """Tests for normalize_transaction function."""

    def test_mined_transaction(self, raw_transaction: dict[str, Any]) -> None:
        """Test every field kind of a mined EIP-1559 transaction."""
        tx = normalize_transaction(raw_transaction)

        assert tx.hash == TX_HASH
        assert tx.from_ == SENDER_CHECKSUM
        assert tx.to == RECIPIENT_CHECKSUM
        assert tx.nonce == 129
        assert tx.gas == 112163
        assert tx.gas_price == BigNumber.from_int(48592426858)
        assert tx.max_fee_per_gas == 67681261618
        assert tx.max_priority_fee_per_gas == 1500000000
        assert tx.value == 0
        assert tx.block_number == 14578286
        assert tx.transaction_index == 29
        assert tx.chain_id == 1
        assert tx.type == 2
        assert tx.input == raw_transaction["input"].lower()
        assert tx.access_list == []
        assert tx.confirmations == 0

    def test_quantities_are_big_numbers(self, raw_transaction: dict[str, Any]) -> None:
        """Test that no numeric field is left as a hex string or int."""
        tx = normalize_transaction(raw_transaction)

        for value in (tx.nonce, tx.gas, tx.value, tx.block_number, tx.v):
            assert isinstance(value, BigNumber)

    def test_pending_transaction(self, raw_transaction: dict[str, Any]) -> None:
        """Test that a pending transaction has no block fields."""
        raw_transaction.update(blockHash=None, blockNumber=None, transactionIndex=None)
        tx = normalize_transaction(raw_transaction)

        assert tx.block_hash is None
        assert tx.block_number is None
        assert tx.transaction_index is None

    @pytest.mark.parametrize("to", [None, ""])
    def test_contract_creation_has_no_recipient(
        self, raw_transaction: dict[str, Any], to: str | None
    ) -> None:
        """Test that null and empty recipients both become None."""
        raw_transaction["to"] = to
        assert normalize_transaction(raw_transaction).to is None

    def test_legacy_transaction_without_fee_market_fields(
        self, raw_transaction: dict[str, Any]
    ) -> None:
        """Test that absent optional fields default to None."""
        for key in ("maxFeePerGas", "maxPriorityFeePerGas", "accessList", "chainId"):
            del raw_transaction[key]
        tx = normalize_transaction(raw_transaction)

        assert tx.max_fee_per_gas is None
        assert tx.access_list is None
        assert tx.chain_id is None

    def test_unknown_fields_are_kept(self, raw_transaction: dict[str, Any]) -> None:
        """Test that node specific extras survive verbatim."""
        raw_transaction["sourceHash"] = "0x00"
        tx = normalize_transaction(raw_transaction)

        assert tx.model_extra == {"sourceHash": "0x00"}

    def test_blob_transaction(self, raw_transaction: dict[str, Any]) -> None:
        """Test that type 3 fields are typed and nothing is left as extra."""
        blob_hash = "0x01" + "AB" * 31
        raw_transaction.update(
            type="0x3",
            yParity="0x1",
            maxFeePerBlobGas="0x3b9aca00",
            blobVersionedHashes=[blob_hash],
        )
        tx = normalize_transaction(raw_transaction)

        assert isinstance(tx.y_parity, BigNumber)
        assert tx.y_parity == 1
        assert isinstance(tx.max_fee_per_blob_gas, BigNumber)
        assert tx.max_fee_per_blob_gas == 10**9
        assert tx.blob_versioned_hashes == [blob_hash.lower()]
        assert tx.model_extra == {}

    def test_invalid_blob_hashes_raise(self, raw_transaction: dict[str, Any]) -> None:
        """Test that a non-list blobVersionedHashes is malformed."""
        raw_transaction["blobVersionedHashes"] = "0x01"
        with pytest.raises(MalformedResponse, match="Malformed blobVersionedHashes"):
            normalize_transaction(raw_transaction)

    def test_missing_mandatory_field_raises(
        self, raw_transaction: dict[str, Any]
    ) -> None:
        """Test that a transaction without hash is malformed."""
        del raw_transaction["hash"]
        with pytest.raises(MalformedResponse, match="Malformed transaction"):
            normalize_transaction(raw_transaction)

    def test_invalid_address_raises(self, raw_transaction: dict[str, Any]) -> None:
        """Test that an unparsable address is malformed."""
        raw_transaction["from"] = "0x1234"
        with pytest.raises(MalformedResponse, match="Malformed from"):
            normalize_transaction(raw_transaction)

    def test_invalid_quantity_raises(self, raw_transaction: dict[str, Any]) -> None:
        """Test that a decimal nonce is malformed."""
        raw_transaction["nonce"] = "129"
        with pytest.raises(MalformedResponse, match="Malformed nonce"):
            normalize_transaction(raw_transaction)

    @pytest.mark.parametrize("raw", [None, "0x1", ["0x1"]])
    def test_non_object_raises(self, raw: object) -> None:
        """Test that a non-object payload is malformed."""
        with pytest.raises(MalformedResponse, match="expected an object"):
            normalize_transaction(raw)


class TestNormalizeLog:
    """Tests for normalize_log function."""

    def test_log(self, raw_log: dict[str, Any]) -> None:
        """Test a log returned by eth_getLogs."""
        log = normalize_log(raw_log)

        assert log.address == TOKEN_CHECKSUM
        assert log.topics[0] == TRANSFER_TOPIC
        assert log.topics[1] == raw_log["topics"][1].lower()
        assert log.data == raw_log["data"].lower()
        assert log.block_number == 14578286
        assert log.block_hash == BLOCK_HASH
        assert log.log_index == 42
        assert log.removed is False

    def test_receipt_log_drops_removed(self, raw_log: dict[str, Any]) -> None:
        """Test that the removed flag is dropped for receipt logs."""
        assert normalize_log(raw_log, receipt_log=True).removed is None

    def test_topics_must_be_strings(self, raw_log: dict[str, Any]) -> None:
        """Test that null topics are malformed."""
        raw_log["topics"] = [TRANSFER_TOPIC, None]
        with pytest.raises(MalformedResponse, match="Malformed topics"):
            normalize_log(raw_log)

    def test_missing_address_raises(self, raw_log: dict[str, Any]) -> None:
        """Test that a log without address is malformed."""
        del raw_log["address"]
        with pytest.raises(MalformedResponse, match="Malformed log"):
            normalize_log(raw_log)


class TestNormalizeTransactionReceipt:
    """Tests for normalize_transaction_receipt function."""

    def test_receipt(self, raw_receipt: dict[str, Any]) -> None:
        """Test a post-Byzantium receipt with one log."""
        receipt = normalize_transaction_receipt(raw_receipt)

        assert receipt.transaction_hash == TX_HASH
        assert receipt.from_ == SENDER_CHECKSUM
        assert receipt.to == RECIPIENT_CHECKSUM
        assert receipt.contract_address is None
        assert receipt.cumulative_gas_used == 3067973
        assert receipt.gas_used == 112163
        assert receipt.effective_gas_price == 48592426858
        assert receipt.status == 1
        assert receipt.byzantium is True
        assert receipt.confirmations == 0
        assert len(receipt.logs) == 1
        assert isinstance(receipt.logs[0], Log)
        assert receipt.logs[0].removed is None
        assert receipt.logs[0].address == TOKEN_CHECKSUM

    def test_pre_byzantium_receipt(self, raw_receipt: dict[str, Any]) -> None:
        """Test a receipt mined before Byzantium carries a state root."""
        root = "0x" + "ab" * 32
        raw_receipt.update(blockNumber="0x102ca0", root=root.upper().replace("0X", "0x"))
        del raw_receipt["status"]
        receipt = normalize_transaction_receipt(raw_receipt)

        assert receipt.byzantium is False
        assert receipt.status is None
        assert receipt.root == root

    def test_byzantium_boundary(self, raw_receipt: dict[str, Any]) -> None:
        """Test that the Byzantium block itself is Byzantium."""
        raw_receipt["blockNumber"] = hex(4_370_000)
        assert normalize_transaction_receipt(raw_receipt).byzantium is True
        raw_receipt["blockNumber"] = hex(4_369_999)
        assert normalize_transaction_receipt(raw_receipt).byzantium is False

    def test_contract_creation_receipt(self, raw_receipt: dict[str, Any]) -> None:
        """Test that a created contract address is checksummed."""
        raw_receipt.update(to=None, contractAddress=TOKEN_CHECKSUM.lower())
        receipt = normalize_transaction_receipt(raw_receipt)

        assert receipt.to is None
        assert receipt.contract_address == TOKEN_CHECKSUM

    def test_blob_receipt(self, raw_receipt: dict[str, Any]) -> None:
        """Test that blob gas fields of a type 3 receipt are typed."""
        raw_receipt.update(type="0x3", blobGasUsed="0x20000", blobGasPrice="0x1")
        receipt = normalize_transaction_receipt(raw_receipt)

        assert isinstance(receipt.blob_gas_used, BigNumber)
        assert receipt.blob_gas_used == 131072
        assert isinstance(receipt.blob_gas_price, BigNumber)
        assert receipt.blob_gas_price == 1
        assert receipt.model_extra == {}

    def test_missing_block_number_raises(self, raw_receipt: dict[str, Any]) -> None:
        """Test that a receipt without block number is malformed."""
        del raw_receipt["blockNumber"]
        with pytest.raises(MalformedResponse, match="Malformed transaction receipt"):
            normalize_transaction_receipt(raw_receipt)


class TestNormalizeBlock:
    """Tests for normalize_block function."""

    def test_block_with_hashes(self, raw_block: dict[str, Any]) -> None:
        """Test a block requested without transaction objects."""
        block = normalize_block(raw_block)

        assert block.number == 14578286
        assert block.hash == BLOCK_HASH
        assert block.timestamp == 1649547931
        assert block.gas_limit == 30029295
        assert block.gas_used == 29999527
        assert block.miner == to_checksum_address(MINER)
        assert block.nonce == raw_block["nonce"].lower()
        assert block.extra_data == raw_block["extraData"].lower()
        assert block.transactions == [TX_HASH]
        assert block.uncles == []

    def test_block_with_transaction_objects(
        self, raw_block_with_transactions: dict[str, Any]
    ) -> None:
        """Test a block requested with transaction objects."""
        block = normalize_block(raw_block_with_transactions, return_transaction_objects=True)

        assert len(block.transactions) == 1
        tx = block.transactions[0]
        assert isinstance(tx, Transaction)
        assert tx.from_ == SENDER_CHECKSUM

    def test_objects_when_hashes_expected_raises(
        self, raw_block_with_transactions: dict[str, Any]
    ) -> None:
        """Test a transactions list that contradicts the request flag."""
        with pytest.raises(MalformedResponse, match="expected transaction hashes"):
            normalize_block(raw_block_with_transactions, return_transaction_objects=False)

    def test_hashes_when_objects_expected_raises(self, raw_block: dict[str, Any]) -> None:
        """Test hashes returned when full transactions were requested."""
        with pytest.raises(MalformedResponse, match="expected transaction objects"):
            normalize_block(raw_block, return_transaction_objects=True)

    def test_null_uncles_become_empty(self, raw_block: dict[str, Any]) -> None:
        """Test that a null uncles list is treated as empty."""
        raw_block["uncles"] = None
        assert normalize_block(raw_block).uncles == []

    def test_pending_block(self, raw_block: dict[str, Any]) -> None:
        """Test a pending block without hash, nonce or miner."""
        raw_block.update(hash=None, nonce=None, miner=None)
        block = normalize_block(raw_block)

        assert block.hash is None
        assert block.nonce is None
        assert block.miner is None

    def test_post_cancun_block(self, raw_block: dict[str, Any]) -> None:
        """Test withdrawals, blob gas and beacon root fields of a Cancun block."""
        withdrawals_root = "0x" + "CD" * 32
        beacon_root = "0x" + "EF" * 32
        raw_block.update(
            withdrawalsRoot=withdrawals_root,
            withdrawals=[
                {
                    "index": "0x2a0b1c",
                    "validatorIndex": "0x10f2",
                    "address": RECIPIENT,
                    "amount": "0x1236a0e",
                }
            ],
            blobGasUsed="0x60000",
            excessBlobGas="0x4b00000",
            parentBeaconBlockRoot=beacon_root,
        )
        block = normalize_block(raw_block)

        assert block.withdrawals_root == withdrawals_root.lower()
        assert block.parent_beacon_block_root == beacon_root.lower()
        assert isinstance(block.blob_gas_used, BigNumber)
        assert block.blob_gas_used == 393216
        assert isinstance(block.excess_blob_gas, BigNumber)
        assert block.excess_blob_gas == 78643200
        assert block.model_extra == {}

        assert block.withdrawals is not None
        withdrawal = block.withdrawals[0]
        assert isinstance(withdrawal, Withdrawal)
        assert isinstance(withdrawal.index, BigNumber)
        assert withdrawal.index == 2755356
        assert withdrawal.validator_index == 4338
        assert withdrawal.amount == 19098126
        assert withdrawal.address == RECIPIENT_CHECKSUM
        assert withdrawal.model_extra == {}

    def test_pre_shanghai_block_has_no_withdrawals(self, raw_block: dict[str, Any]) -> None:
        """Test that absent post-merge fields default to None."""
        block = normalize_block(raw_block)

        assert block.withdrawals is None
        assert block.blob_gas_used is None
        assert block.parent_beacon_block_root is None

    def test_malformed_withdrawal_raises(self, raw_block: dict[str, Any]) -> None:
        """Test that a withdrawal with an invalid address is malformed."""
        raw_block["withdrawals"] = [
            {"index": "0x0", "validatorIndex": "0x0", "address": "0x1234", "amount": "0x0"}
        ]
        with pytest.raises(MalformedResponse, match="Malformed address"):
            normalize_block(raw_block)

    def test_missing_number_raises(self, raw_block: dict[str, Any]) -> None:
        """Test that a block without number is malformed."""
        del raw_block["number"]
        with pytest.raises(MalformedResponse, match="Malformed block"):
            normalize_block(raw_block)

    def test_normalize_is_pure(self, raw_block: dict[str, Any]) -> None:
        """Test that the raw payload is left untouched."""
        original = dict(raw_block)
        normalize_block(raw_block)

        assert raw_block == original
