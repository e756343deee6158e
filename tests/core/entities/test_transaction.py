"""Tests for ledger entities."""

from decimal import Decimal

import pytest

from stockledger.core.entities import Transaction, TransactionPage, TxType


def _tx(tx_id: int) -> Transaction:
    return Transaction(
        id=tx_id,
        material_id="mat-1",
        tx_type=TxType.ENTRY,
        quantity=Decimal("1.000"),
    )


def test_tx_type_is_case_sensitive():
    assert TxType("ADJUSTMENT") is TxType.ADJUSTMENT
    with pytest.raises(ValueError):
        TxType("adjustment")


def test_transaction_defaults():
    tx = _tx(1)
    assert tx.supplier_id is None
    assert tx.notes is None
    assert tx.tx_date.tzinfo is not None


class TestTransactionPage:
    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (101, 50, 3)],
    )
    def test_total_pages(self, total, page_size, expected):
        page = TransactionPage(total=total, page=1, page_size=page_size)
        assert page.total_pages == expected

    def test_has_more(self):
        assert TransactionPage(items=[_tx(2), _tx(1)], total=3, page=1, page_size=2).has_more
        assert not TransactionPage(items=[_tx(3)], total=3, page=2, page_size=2).has_more

    def test_empty(self):
        page = TransactionPage()
        assert page.items == []
        assert not page.has_more
