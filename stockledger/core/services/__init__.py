"""
Core business logic services.

Layer-pure services that depend only on:
- stockledger/core/entities/*
- stockledger/core/interfaces/*
- stockledger/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
"""

from stockledger.core.services.keyed_lock import KeyedLock, LockTimeoutError
from stockledger.core.services.material_catalog import MaterialCatalog
from stockledger.core.services.stock_impact import (
    compute_new_stock,
    fold_stock,
    parse_quantity,
    parse_tx_type,
)
from stockledger.core.services.stock_ledger import StockLedger
from stockledger.core.services.supplier_catalog import SupplierCatalog

__all__ = [
    # Ledger
    "StockLedger",
    "compute_new_stock",
    "fold_stock",
    "parse_quantity",
    "parse_tx_type",
    # Catalog
    "MaterialCatalog",
    "SupplierCatalog",
    # Concurrency
    "KeyedLock",
    "LockTimeoutError",
]
