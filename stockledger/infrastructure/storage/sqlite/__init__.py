"""SQLite storage implementations."""

from stockledger.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    get_write_transaction,
    storage_operation,
)
from stockledger.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore
from stockledger.infrastructure.storage.sqlite.project_store import SQLiteProjectStore
from stockledger.infrastructure.storage.sqlite.supplier_store import SQLiteSupplierStore
from stockledger.infrastructure.storage.sqlite.transaction_store import (
    SQLiteStockUnitOfWork,
    SQLiteTransactionStore,
)

get_connection_pool = get_pool
close_connection_pool = close_pool

# Singleton instances
_material_store: SQLiteMaterialStore | None = None
_project_store: SQLiteProjectStore | None = None
_supplier_store: SQLiteSupplierStore | None = None
_transaction_store: SQLiteTransactionStore | None = None


async def get_material_store() -> SQLiteMaterialStore:
    """Get singleton material store instance."""
    global _material_store
    if _material_store is None:
        _material_store = SQLiteMaterialStore()
    return _material_store


async def get_project_store() -> SQLiteProjectStore:
    """Get singleton project store instance."""
    global _project_store
    if _project_store is None:
        _project_store = SQLiteProjectStore()
    return _project_store


async def get_supplier_store() -> SQLiteSupplierStore:
    """Get singleton supplier store instance."""
    global _supplier_store
    if _supplier_store is None:
        _supplier_store = SQLiteSupplierStore()
    return _supplier_store


async def get_transaction_store() -> SQLiteTransactionStore:
    """Get singleton transaction store instance."""
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteTransactionStore()
    return _transaction_store


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_write_transaction",
    "storage_operation",
    "get_connection_pool",
    "close_connection_pool",
    # Store classes
    "SQLiteMaterialStore",
    "SQLiteProjectStore",
    "SQLiteStockUnitOfWork",
    "SQLiteSupplierStore",
    "SQLiteTransactionStore",
    # Factory functions
    "get_material_store",
    "get_project_store",
    "get_supplier_store",
    "get_transaction_store",
]
