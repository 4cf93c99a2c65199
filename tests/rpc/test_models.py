"""Tests for chain entity models."""

import pytest
from pydantic import ValidationError

from evm_rpc.rpc.models import (
    Block,
    CallParams,
    LogEntry,
    LogFilter,
    Transaction,
    TransactionReceipt,
)


TX_HASH = "0x" + "ab" * 32


class TestBlock:
    """Tests for Block model."""

    def test_create_from_rpc_payload(self, make_block) -> None:
        """Test creating a block from camelCase RPC fields."""
        block = Block.model_validate(make_block(100))

        assert block.number == "0x64"
        assert block.block_number == 100
        assert block.parent_hash == "0x" + f"{99:064x}"
        assert block.gas_limit == "0x1c9c380"
        assert block.transactions == []

    def test_transaction_hashes(self, make_block) -> None:
        """Test hash-only transaction lists stay strings."""
        block = Block.model_validate(make_block(1, transactions=[TX_HASH]))

        assert block.transactions == [TX_HASH]

    def test_full_transactions(self, make_block) -> None:
        """Test full transaction objects become Transaction models."""
        block = Block.model_validate(
            make_block(1, transactions=[{"hash": TX_HASH, "blockNumber": "0x1"}])
        )

        tx = block.transactions[0]
        assert isinstance(tx, Transaction)
        assert tx.hash == TX_HASH

    def test_pending_block_has_no_number(self, make_block) -> None:
        """Test the pending block decodes with a null number."""
        block = Block.model_validate(make_block(None))

        assert block.block_number is None

    def test_extra_fields_preserved(self, make_block) -> None:
        """Test unknown fields survive a dump."""
        block = Block.model_validate(make_block(1, baseFeePerGas="0x7"))

        assert block.model_dump(by_alias=True)["baseFeePerGas"] == "0x7"

    def test_missing_required_field(self) -> None:
        """Test a payload without header fields is rejected."""
        with pytest.raises(ValidationError):
            Block.model_validate({"number": "0x1"})


class TestTransaction:
    """Tests for Transaction model."""

    def test_pending_transaction(self) -> None:
        """Test null block fields mark a pending transaction."""
        tx = Transaction.model_validate({
            "hash": TX_HASH,
            "blockHash": None,
            "blockNumber": None,
            "transactionIndex": None,
            "from": "0x" + "1" * 40,
        })

        assert tx.is_pending
        assert tx.from_address == "0x" + "1" * 40

    def test_mined_transaction(self) -> None:
        """Test set block fields mark an included transaction."""
        tx = Transaction.model_validate({
            "hash": TX_HASH,
            "blockHash": "0x" + "2" * 64,
            "blockNumber": "0x10",
            "transactionIndex": "0x0",
        })

        assert not tx.is_pending


class TestTransactionReceipt:
    """Tests for TransactionReceipt model."""

    def test_status_and_logs(self) -> None:
        """Test status decoding and ordered logs."""
        receipt = TransactionReceipt.model_validate({
            "transactionHash": TX_HASH,
            "status": "0x1",
            "logs": [
                {"address": "0x" + "3" * 40, "topics": [], "data": "0x", "logIndex": "0x0"},
                {"address": "0x" + "4" * 40, "topics": [], "data": "0x", "logIndex": "0x1"},
            ],
        })

        assert receipt.succeeded is True
        assert [log.log_index for log in receipt.logs] == ["0x0", "0x1"]

    def test_failed_status(self) -> None:
        """Test a 0x0 status is a failed execution."""
        receipt = TransactionReceipt.model_validate({"transactionHash": TX_HASH, "status": "0x0"})

        assert receipt.succeeded is False

    def test_missing_status(self) -> None:
        """Test pre-Byzantium receipts have no outcome."""
        receipt = TransactionReceipt.model_validate({"transactionHash": TX_HASH})

        assert receipt.succeeded is None


class TestLogEntry:
    """Tests for LogEntry model."""

    def test_removed_flag_kept(self) -> None:
        """Test reorged logs are decoded, not dropped."""
        log = LogEntry.model_validate({
            "address": "0x" + "3" * 40,
            "topics": [TX_HASH],
            "data": "0x",
            "removed": True,
        })

        assert log.removed is True

    def test_at_most_four_topics(self) -> None:
        """Test more than four topics is rejected."""
        with pytest.raises(ValidationError):
            LogEntry.model_validate({"address": "0x0", "topics": [TX_HASH] * 5, "data": "0x"})


class TestCallParams:
    """Tests for CallParams wire form."""

    def test_to_rpc_omits_unset(self) -> None:
        """Test only set fields are sent, with camelCase keys."""
        params = CallParams(to="0x" + "5" * 40, data="0x18160ddd", gas_price="0x1")

        assert params.to_rpc() == {
            "to": "0x" + "5" * 40,
            "data": "0x18160ddd",
            "gasPrice": "0x1",
        }

    def test_from_alias(self) -> None:
        """Test the sender is serialized as "from"."""
        params = CallParams.model_validate({"to": "0x1", "from": "0x2"})

        assert params.to_rpc() == {"to": "0x1", "from": "0x2"}


class TestLogFilter:
    """Tests for LogFilter wire form."""

    def test_to_rpc(self) -> None:
        """Test range filters with topic alternatives and wildcards."""
        log_filter = LogFilter(
            from_block="0x1",
            to_block="latest",
            address=["0x" + "6" * 40],
            topics=[TX_HASH, None, [TX_HASH, "0x" + "cd" * 32]],
        )

        assert log_filter.to_rpc() == {
            "fromBlock": "0x1",
            "toBlock": "latest",
            "address": ["0x" + "6" * 40],
            "topics": [TX_HASH, None, [TX_HASH, "0x" + "cd" * 32]],
        }
