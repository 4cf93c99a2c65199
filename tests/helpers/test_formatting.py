"""Tests for output rendering."""

import json

import pytest

from evm_rpc.helpers.formatting import (
    format_balance,
    format_chain_info,
    render,
    to_jsonable,
)
from evm_rpc.rpc.models import Block, ChainInfo, Transaction


class TestRenderPretty:
    """Tests for pretty mode."""

    def test_quantity_gets_decimal_annotation(self) -> None:
        """Test a bare quantity renders as hex plus decimal."""
        assert render("0x15f5a48") == "0x15f5a48 (23026248)"
        assert render("0x15f5a48", "pretty") == "0x15f5a48 (23026248)"

    @pytest.mark.parametrize("quantity", ["0x0", "0x1", "0xff", "0x" + "f" * 40])
    def test_annotation_matches_integer_value(self, quantity: str) -> None:
        """Test annotation is the exact arbitrary-precision decimal."""
        assert render(quantity, "pretty") == f"{quantity} ({int(quantity, 16)})"

    def test_regular_strings_unchanged(self) -> None:
        """Test non-quantity strings are printed as-is."""
        assert render("hello world") == "hello world"
        assert render("0x") == "0x"
        assert render("1") == "1"
        assert render("0x1\n") == "0x1\n"

    def test_objects_render_as_json(self) -> None:
        """Test objects fall back to indented JSON."""
        obj = {"test": "value", "number": 42}
        assert render(obj, "pretty") == json.dumps(obj, indent=2)

    def test_nested_quantities_not_annotated(self) -> None:
        """Test only a top-level string is annotated."""
        output = render({"number": "0x10", "list": ["0x20"]}, "pretty")

        assert '"number": "0x10"' in output
        assert "(16)" not in output
        assert "(32)" not in output

    def test_none_renders_as_null(self) -> None:
        """Test null results."""
        assert render(None, "pretty") == "null"


class TestRenderJson:
    """Tests for json mode."""

    def test_quantity_is_quoted_string(self) -> None:
        """Test json mode never annotates."""
        assert render("0x15f5a48", "json") == '"0x15f5a48"'

    def test_two_space_indent(self) -> None:
        """Test stable 2-space indentation."""
        assert render({"a": {"b": 1}}, "json") == '{\n  "a": {\n    "b": 1\n  }\n}'

    def test_round_trip(self) -> None:
        """Test parsing json output reproduces the value."""
        obj = {
            "hash": "0xabc123",
            "number": "0x15f5a48",
            "nested": {"value": 42, "items": [1, "two", None, {"deep": True}]},
            "missing": None,
            "ratio": 1.5,
        }
        assert json.loads(render(obj, "json")) == obj

    def test_non_ascii_kept(self) -> None:
        """Test unicode is not escaped."""
        assert render("héllo", "json") == '"héllo"'


class TestModels:
    """Tests for rendering pydantic models."""

    def test_models_use_wire_names(self) -> None:
        """Test models are dumped with the node's camelCase names."""
        block = Block.model_validate({
            "number": "0x1",
            "hash": "0x" + "1" * 64,
            "parentHash": "0x" + "0" * 64,
            "timestamp": "0x0",
            "gasLimit": "0x10",
            "gasUsed": "0x0",
            "baseFeePerGas": "0x7",
        })

        data = to_jsonable(block)

        assert data["parentHash"] == "0x" + "0" * 64
        assert data["baseFeePerGas"] == "0x7"
        assert "parent_hash" not in data
        assert "miner" not in data

    def test_list_of_models(self) -> None:
        """Test lists of models are converted element-wise."""
        txs = [Transaction(hash="0x" + "a" * 64, blockHash=None)]

        assert to_jsonable(txs) == [{"hash": "0x" + "a" * 64, "blockHash": None}]


class TestFormatBalance:
    """Tests for balance output."""

    def test_pretty_shows_ether(self) -> None:
        """Test pretty balance includes the ether amount."""
        assert (
            format_balance("0xde0b6b3a7640000")
            == "Balance: 0xde0b6b3a7640000 wei (1 ETH)"
        )

    def test_json_is_plain(self) -> None:
        """Test json balance is the raw quantity."""
        assert format_balance("0x0", "json") == '"0x0"'


def test_format_chain_info() -> None:
    """Test chain info fields are annotated."""
    info = ChainInfo(block_number="0x10", chain_id="0x1", gas_price="0x3b9aca00")

    data = json.loads(format_chain_info(info))

    assert data == {
        "blockNumber": "0x10 (16)",
        "chainId": "0x1 (1)",
        "gasPrice": "0x3b9aca00 (1 gwei)",
    }
