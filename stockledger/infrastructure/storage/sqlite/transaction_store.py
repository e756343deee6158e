"""
SQLite implementation of the stock ledger storage.

A unit of work runs inside BEGIN IMMEDIATE: the write lock is held from
the material read until commit, and the stock update is additionally
conditioned on the version that was read.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.material import Material
from stockledger.core.entities.transaction import Transaction, TxType
from stockledger.core.exceptions import ConcurrentModificationError, MaterialNotFoundError
from stockledger.core.interfaces.transaction_store import IStockUnitOfWork, ITransactionStore
from stockledger.infrastructure.storage.sqlite.codecs import (
    decode_decimal,
    decode_timestamp,
    encode_decimal,
    encode_timestamp,
)
from stockledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_write_transaction,
    storage_operation,
)
from stockledger.infrastructure.storage.sqlite.material_store import SQLiteMaterialStore

logger = get_logger(__name__)


class SQLiteStockUnitOfWork(IStockUnitOfWork):
    """Ledger append and stock write bound to one open write transaction."""

    def __init__(self, conn: aiosqlite.Connection, material: Material | None):
        self._conn = conn
        self.material = material

    async def append(self, transaction: Transaction) -> Transaction:
        """Insert the ledger row and return it with its persisted id."""
        cursor = await self._conn.execute(
            """
            INSERT INTO inventory_transactions (
                material_id, tx_type, quantity, supplier_id, notes,
                previous_stock, new_stock, tx_date
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                transaction.material_id,
                transaction.tx_type.value,
                encode_decimal(transaction.quantity),
                transaction.supplier_id,
                transaction.notes,
                encode_decimal(transaction.previous_stock)
                if transaction.previous_stock is not None
                else None,
                encode_decimal(transaction.new_stock)
                if transaction.new_stock is not None
                else None,
                encode_timestamp(transaction.tx_date),
            ),
        )
        transaction.id = cursor.lastrowid
        return transaction

    async def set_stock(self, new_stock: Decimal) -> None:
        """Write the new balance if the version is still the one read at start."""
        if self.material is None:
            raise MaterialNotFoundError("unknown")

        expected_version = self.material.version
        cursor = await self._conn.execute(
            """
            UPDATE materials
            SET stock = ?, version = version + 1, updated_at = ?
            WHERE id = ? AND version = ?
            """,
            (
                encode_decimal(new_stock),
                encode_timestamp(datetime.now(UTC)),
                self.material.id,
                expected_version,
            ),
        )
        if cursor.rowcount != 1:
            logger.warning(
                "stock_version_conflict",
                material_id=self.material.id,
                expected_version=expected_version,
            )
            raise ConcurrentModificationError(self.material.id, expected_version)

        self.material.stock = new_stock
        self.material.version = expected_version + 1


class SQLiteTransactionStore(ITransactionStore):
    """SQLite implementation of stock balance and ledger storage."""

    @asynccontextmanager
    async def stock_unit_of_work(self, material_id: str) -> AsyncIterator[SQLiteStockUnitOfWork]:
        """Open a write transaction and load the material row under it."""
        async with storage_operation("register_transaction"):
            async with get_write_transaction() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM materials WHERE id = ?", (material_id,)
                )
                row = await cursor.fetchone()
                material = SQLiteMaterialStore._row_to_material(row) if row else None
                yield SQLiteStockUnitOfWork(conn, material)

    async def get_stock(self, material_id: str) -> Decimal | None:
        """Get the current stock, or None if the material does not exist."""
        async with storage_operation("get_stock"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT stock FROM materials WHERE id = ?", (material_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return decode_decimal(row["stock"])

    @staticmethod
    def _filter(
        material_id: str,
        from_date: datetime | None,
        to_date: datetime | None,
    ) -> tuple[str, list[Any]]:
        clause = "material_id = ?"
        params: list[Any] = [material_id]
        if from_date is not None:
            clause += " AND tx_date >= ?"
            params.append(encode_timestamp(from_date))
        if to_date is not None:
            clause += " AND tx_date <= ?"
            params.append(encode_timestamp(to_date))
        return clause, params

    async def list_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Transaction]:
        """List ledger rows, most recent first."""
        clause, params = self._filter(material_id, from_date, to_date)
        async with storage_operation("list_transactions"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    f"""
                    SELECT * FROM inventory_transactions
                    WHERE {clause}
                    ORDER BY tx_date DESC, id DESC
                    LIMIT ? OFFSET ?
                    """,
                    (*params, limit, offset),
                )
                rows = await cursor.fetchall()
        return [self._row_to_transaction(row) for row in rows]

    async def count_transactions(
        self,
        material_id: str,
        from_date: datetime | None = None,
        to_date: datetime | None = None,
    ) -> int:
        """Count ledger rows matching the same filter as list_transactions."""
        clause, params = self._filter(material_id, from_date, to_date)
        async with storage_operation("count_transactions"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    f"SELECT COUNT(*) FROM inventory_transactions WHERE {clause}",
                    params,
                )
                row = await cursor.fetchone()
        return int(row[0]) if row else 0

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row) -> Transaction:
        """Convert a database row to a Transaction entity."""
        return Transaction(
            id=row["id"],
            material_id=row["material_id"],
            tx_type=TxType(row["tx_type"]),
            quantity=decode_decimal(row["quantity"]),
            supplier_id=row["supplier_id"],
            notes=row["notes"],
            previous_stock=decode_decimal(row["previous_stock"]),
            new_stock=decode_decimal(row["new_stock"]),
            tx_date=decode_timestamp(row["tx_date"]),
        )
