"""Tests for the pure stock-impact rules."""

from decimal import Decimal

import pytest

from stockledger.core.entities import TxType
from stockledger.core.exceptions import InvalidQuantityError, InvalidTransactionTypeError
from stockledger.core.services.stock_impact import (
    MAX_AMOUNT,
    compute_new_stock,
    fold_stock,
    parse_quantity,
    parse_tx_type,
    quantize,
    to_decimal,
    within_limit,
)

D = Decimal


class TestComputeNewStock:
    def test_entry_adds(self):
        assert compute_new_stock(TxType.ENTRY, D("50"), D("0")) == D("50.000")

    def test_usage_subtracts(self):
        assert compute_new_stock(TxType.USAGE, D("20"), D("50")) == D("30.000")

    def test_usage_may_go_negative(self):
        # The ledger rejects this; the rule itself just computes
        assert compute_new_stock(TxType.USAGE, D("5"), D("2")) == D("-3.000")

    def test_adjustment_is_absolute(self):
        assert compute_new_stock(TxType.ADJUSTMENT, D("12"), D("30")) == D("12.000")

    def test_adjustment_twice_is_idempotent(self):
        once = compute_new_stock(TxType.ADJUSTMENT, D("5"), D("40"))
        assert compute_new_stock(TxType.ADJUSTMENT, D("5"), once) == D("5.000")


class TestFoldStock:
    def test_worked_example(self):
        movements = [
            (TxType.ENTRY, D("50")),
            (TxType.USAGE, D("20")),
            (TxType.ADJUSTMENT, D("12")),
            (TxType.ENTRY, D("0.5")),
        ]
        assert fold_stock(movements) == D("12.500")

    def test_empty_keeps_initial(self):
        assert fold_stock([], D("7")) == D("7")

    def test_matches_step_by_step(self):
        movements = [(TxType.ENTRY, D("3.333")), (TxType.USAGE, D("1.111"))] * 4
        stock = D("0")
        for tx_type, qty in movements:
            stock = compute_new_stock(tx_type, qty, stock)
        assert fold_stock(movements) == stock == D("8.888")


class TestParseQuantity:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("10", D("10.000")),
            (10, D("10.000")),
            (0.1, D("0.100")),
            ("2.0005", D("2.001")),
            ("0.0005", D("0.001")),
            (D("7.25"), D("7.250")),
        ],
    )
    def test_valid(self, raw, expected):
        assert parse_quantity(raw) == expected

    @pytest.mark.parametrize("raw", [0, "-1", "0.0004", "NaN", "inf", "", "ten", None, False, [1]])
    def test_invalid(self, raw):
        with pytest.raises(InvalidQuantityError):
            parse_quantity(raw)

    @pytest.mark.parametrize("raw", ["1e30", "-1e30", "1e15", 10**20, "9" * 40])
    def test_too_large(self, raw):
        with pytest.raises(InvalidQuantityError) as exc_info:
            parse_quantity(raw)
        assert "less than" in exc_info.value.message

    def test_largest_accepted(self):
        assert parse_quantity("999999999999999.999") == D("999999999999999.999")


class TestParseTxType:
    @pytest.mark.parametrize("raw", ["ENTRY", "USAGE", "ADJUSTMENT"])
    def test_valid(self, raw):
        assert parse_tx_type(raw) == TxType(raw)

    def test_enum_passthrough(self):
        assert parse_tx_type(TxType.USAGE) is TxType.USAGE

    @pytest.mark.parametrize("raw", ["entry", "Usage", " ENTRY", "RETURN", None, 3])
    def test_invalid(self, raw):
        with pytest.raises(InvalidTransactionTypeError):
            parse_tx_type(raw)


def test_to_decimal_rejects_bool():
    assert to_decimal(True) is None


def test_quantize_half_up():
    assert quantize(D("1.0025")) == D("1.003")
    assert quantize(D("-1.0025")) == D("-1.003")


def test_within_limit_bounds():
    assert within_limit(MAX_AMOUNT - D("0.001"))
    assert not within_limit(MAX_AMOUNT)
    assert not within_limit(-MAX_AMOUNT)


def test_entry_past_limit_still_computes():
    # Sum of two maximal amounts stays exact inside the decimal context
    top = D("999999999999999.999")
    assert compute_new_stock(TxType.ENTRY, top, top) == D("1999999999999999.998")
