"""Tests for MetadataSnapshot indexes and lookups."""

import pytest

from btcturk.exceptions import (
    CurrencyNotFound,
    DuplicateCurrency,
    DuplicateSymbol,
    SymbolNotFound,
)
from btcturk.metadata.snapshot import MetadataSnapshot
from btcturk.metadata.store import parse_exchange_info


class TestSymbolLookup:
    """Lookup by normalized name, exchange name, or id, ignoring case."""

    @pytest.mark.parametrize("ref", ["btc_try", "BTC_TRY", "Btc_Try", "btctry", "BTCTRY", 1, "1"])
    def test_all_references_resolve_btctry(self, snapshot: MetadataSnapshot, ref) -> None:
        assert snapshot.lookup_symbol(ref).id == 1

    def test_surrounding_whitespace_ignored(self, snapshot: MetadataSnapshot) -> None:
        assert snapshot.lookup_symbol("  xtz_btc ").id == 60

    def test_unknown_name(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(SymbolNotFound) as exc_info:
            snapshot.lookup_symbol("DOGE_TRY")
        assert exc_info.value.ref == "DOGE_TRY"

    def test_unknown_id(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(SymbolNotFound):
            snapshot.lookup_symbol(12345)

    def test_partial_match_is_not_a_match(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(SymbolNotFound):
            snapshot.lookup_symbol("BTC")


class TestOrdering:
    def test_symbols_sorted_by_order_field(self, snapshot: MetadataSnapshot) -> None:
        assert [s.name for s in snapshot.symbols] == ["XTZBTC", "BTCTRY", "ETHTRY", "SHIBTRY"]

    def test_len(self, snapshot: MetadataSnapshot) -> None:
        assert len(snapshot) == 4


class TestUniqueness:
    """Duplicate keys fail the whole load."""

    def test_duplicate_id(self, exchange_info: dict) -> None:
        exchange_info["symbols"][1]["id"] = 1
        with pytest.raises(DuplicateSymbol):
            parse_exchange_info(exchange_info)

    def test_duplicate_name_differing_in_case(self, exchange_info: dict) -> None:
        exchange_info["symbols"][1]["name"] = "btctry"
        with pytest.raises(DuplicateSymbol):
            parse_exchange_info(exchange_info)

    def test_duplicate_normalized_name(self, exchange_info: dict) -> None:
        exchange_info["symbols"][1]["nameNormalized"] = "BTC_TRY"
        with pytest.raises(DuplicateSymbol):
            parse_exchange_info(exchange_info)

    def test_duplicate_currency_differing_in_case(self, exchange_info: dict) -> None:
        exchange_info["currencies"][3]["symbol"] = "btc"
        with pytest.raises(DuplicateCurrency) as exc_info:
            parse_exchange_info(exchange_info)
        assert exc_info.value.symbol == "btc"


class TestCurrencies:
    """Currency lookup and operation blocks."""

    def test_lookup_ignores_case(self, snapshot: MetadataSnapshot) -> None:
        assert snapshot.lookup_currency("btc").id == 1
        assert snapshot.lookup_currency("Try").symbol == "TRY"

    def test_unknown_currency(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(CurrencyNotFound):
            snapshot.lookup_currency("DOGE")

    def test_operation_blocks_match_mixed_case(self, snapshot: MetadataSnapshot) -> None:
        block = snapshot.operation_block("BTC")
        assert block is not None
        assert block.currency_symbol == "Btc"
        assert block.deposit_disabled
        assert snapshot.operation_block("try") is None

    def test_can_withdraw_and_deposit(self, snapshot: MetadataSnapshot) -> None:
        assert snapshot.can_withdraw("BTC")
        assert not snapshot.can_deposit("BTC")
        assert not snapshot.can_withdraw("xrp")
        assert snapshot.can_deposit("xrp")
        assert snapshot.can_withdraw("TRY")
        assert snapshot.can_deposit("TRY")

    def test_can_withdraw_unknown_currency(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(CurrencyNotFound):
            snapshot.can_withdraw("DOGE")

    def test_symbols_for_currency(self, snapshot: MetadataSnapshot) -> None:
        assert [s.name for s in snapshot.symbols_for_currency("btc")] == ["XTZBTC", "BTCTRY"]
        assert [s.name for s in snapshot.symbols_for_currency("TRY")] == [
            "BTCTRY",
            "ETHTRY",
            "SHIBTRY",
        ]
        assert snapshot.symbols_for_currency("DOGE") == []


class TestImmutability:
    def test_indexes_are_read_only(self, snapshot: MetadataSnapshot) -> None:
        with pytest.raises(TypeError):
            snapshot.operation_blocks["DOGE"] = None  # type: ignore[index]

    def test_empty_snapshot(self) -> None:
        empty = MetadataSnapshot(symbols=())
        assert len(empty) == 0
        assert empty.timezone == "UTC"
        with pytest.raises(SymbolNotFound):
            empty.lookup_symbol("BTCTRY")
