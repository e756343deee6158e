"""Storage infrastructure implementations."""

from stockledger.infrastructure.storage.sqlite import (
    SQLiteMaterialStore,
    SQLiteProjectStore,
    SQLiteTransactionStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
    get_write_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteMaterialStore",
    "SQLiteProjectStore",
    "SQLiteTransactionStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    "get_write_transaction",
]
