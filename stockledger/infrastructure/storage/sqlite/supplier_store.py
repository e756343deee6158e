"""SQLite implementation of supplier catalog storage."""

import uuid

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.supplier import Supplier
from stockledger.core.exceptions import DuplicateSupplierError
from stockledger.core.interfaces.supplier_store import ISupplierStore
from stockledger.infrastructure.storage.sqlite.codecs import (
    decode_timestamp,
    encode_timestamp,
)
from stockledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    storage_operation,
)

logger = get_logger(__name__)


class SQLiteSupplierStore(ISupplierStore):
    """SQLite implementation of supplier catalog storage."""

    async def create_supplier(self, supplier: Supplier) -> Supplier:
        if not supplier.id:
            supplier.id = str(uuid.uuid4())
        async with storage_operation("create_supplier"):
            try:
                async with get_transaction() as conn:
                    await conn.execute(
                        """
                        INSERT INTO suppliers (
                            id, name, ruc, phone, email, created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            supplier.id,
                            supplier.name,
                            supplier.ruc,
                            supplier.phone,
                            supplier.email,
                            encode_timestamp(supplier.created_at),
                            encode_timestamp(supplier.updated_at),
                        ),
                    )
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e) and supplier.ruc:
                    raise DuplicateSupplierError(supplier.ruc) from e
                raise
        logger.info("supplier_created", supplier_id=supplier.id)
        return supplier

    async def get_supplier(self, supplier_id: str) -> Supplier | None:
        async with storage_operation("get_supplier"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM suppliers WHERE id = ?", (supplier_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_supplier(row)

    async def list_suppliers(self) -> list[Supplier]:
        async with storage_operation("list_suppliers"):
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT * FROM suppliers ORDER BY name, id")
                rows = await cursor.fetchall()
        return [self._row_to_supplier(row) for row in rows]

    async def update_supplier(self, supplier: Supplier) -> Supplier | None:
        async with storage_operation("update_supplier"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        UPDATE suppliers
                        SET name = ?, ruc = ?, phone = ?, email = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            supplier.name,
                            supplier.ruc,
                            supplier.phone,
                            supplier.email,
                            encode_timestamp(supplier.updated_at),
                            supplier.id,
                        ),
                    )
                    if cursor.rowcount == 0:
                        return None
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e) and supplier.ruc:
                    raise DuplicateSupplierError(supplier.ruc) from e
                raise
        return supplier

    @staticmethod
    def _row_to_supplier(row: aiosqlite.Row) -> Supplier:
        return Supplier(
            id=row["id"],
            name=row["name"],
            ruc=row["ruc"],
            phone=row["phone"],
            email=row["email"],
            created_at=decode_timestamp(row["created_at"]),
            updated_at=decode_timestamp(row["updated_at"]),
        )
