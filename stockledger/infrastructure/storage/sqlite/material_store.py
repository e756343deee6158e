"""
SQLite implementation of material catalog storage.

Stock columns are written only by the transaction store.
"""

import uuid
from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.material import Material, MaterialStatus
from stockledger.core.exceptions import DuplicateMaterialError
from stockledger.core.interfaces.material_store import IMaterialStore
from stockledger.infrastructure.storage.sqlite.codecs import (
    decode_decimal,
    decode_timestamp,
    encode_decimal,
    encode_timestamp,
)
from stockledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    storage_operation,
)

logger = get_logger(__name__)


def _generate_id() -> str:
    """Generate a new UUID text ID."""
    return str(uuid.uuid4())


class SQLiteMaterialStore(IMaterialStore):
    """SQLite implementation of material catalog storage."""

    async def create_material(self, material: Material) -> Material:
        """Create a new material record with zero stock."""
        if not material.id:
            material.id = _generate_id()
        material.stock = Decimal("0.000")
        material.version = 1
        async with storage_operation("create_material"):
            try:
                async with get_transaction() as conn:
                    await conn.execute(
                        """
                        INSERT INTO materials (
                            id, project_id, name, unit, stock, min_level,
                            status, version, created_at, updated_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                        """,
                        (
                            material.id,
                            material.project_id,
                            material.name,
                            material.unit,
                            encode_decimal(material.stock),
                            encode_decimal(material.min_level),
                            material.status.value,
                            material.version,
                            encode_timestamp(material.created_at),
                            encode_timestamp(material.updated_at),
                        ),
                    )
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateMaterialError(material.project_id, material.name) from e
                raise
        logger.info(
            "material_created",
            material_id=material.id,
            project_id=material.project_id,
        )
        return material

    async def get_material(self, material_id: str) -> Material | None:
        """Get material by ID."""
        async with storage_operation("get_material"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM materials WHERE id = ?", (material_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_material(row)

    async def list_by_project(
        self, project_id: str, include_archived: bool = False
    ) -> list[Material]:
        """List materials of a project ordered by name."""
        query = "SELECT * FROM materials WHERE project_id = ?"
        params: list[str] = [project_id]
        if not include_archived:
            query += " AND status = ?"
            params.append(MaterialStatus.ACTIVE.value)
        query += " ORDER BY name"

        async with storage_operation("list_materials"):
            async with get_connection() as conn:
                cursor = await conn.execute(query, params)
                rows = await cursor.fetchall()
        return [self._row_to_material(row) for row in rows]

    async def list_low_stock(self, project_id: str) -> list[Material]:
        """List active materials whose stock is at or below min_level."""
        async with storage_operation("list_low_stock"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    """
                    SELECT * FROM materials
                    WHERE project_id = ?
                      AND status = ?
                      AND CAST(stock AS REAL) <= CAST(min_level AS REAL)
                    ORDER BY name
                    """,
                    (project_id, MaterialStatus.ACTIVE.value),
                )
                rows = await cursor.fetchall()
        # Exact decimal re-check; the SQL filter compares floats
        return [m for m in (self._row_to_material(row) for row in rows) if m.is_low_stock]

    async def set_status(
        self, material_id: str, status: MaterialStatus
    ) -> Material | None:
        """Change material status. Stock and version are untouched."""
        async with storage_operation("set_material_status"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    "UPDATE materials SET status = ?, updated_at = ? WHERE id = ?",
                    (status.value, encode_timestamp(datetime.now(UTC)), material_id),
                )
                if cursor.rowcount == 0:
                    return None
                cursor = await conn.execute(
                    "SELECT * FROM materials WHERE id = ?", (material_id,)
                )
                row = await cursor.fetchone()
        return self._row_to_material(row)

    async def update_material(self, material: Material) -> Material | None:
        """Overwrite name, unit and min_level. Stock and version are untouched."""
        async with storage_operation("update_material"):
            try:
                async with get_transaction() as conn:
                    cursor = await conn.execute(
                        """
                        UPDATE materials
                        SET name = ?, unit = ?, min_level = ?, updated_at = ?
                        WHERE id = ?
                        """,
                        (
                            material.name,
                            material.unit,
                            encode_decimal(material.min_level),
                            encode_timestamp(material.updated_at),
                            material.id,
                        ),
                    )
                    if cursor.rowcount == 0:
                        return None
                    cursor = await conn.execute(
                        "SELECT * FROM materials WHERE id = ?", (material.id,)
                    )
                    row = await cursor.fetchone()
            except aiosqlite.IntegrityError as e:
                if "UNIQUE" in str(e):
                    raise DuplicateMaterialError(material.project_id, material.name) from e
                raise
        return self._row_to_material(row)

    @staticmethod
    def _row_to_material(row: aiosqlite.Row) -> Material:
        """Convert a database row to a Material entity."""
        return Material(
            id=row["id"],
            project_id=row["project_id"],
            name=row["name"],
            unit=row["unit"],
            stock=decode_decimal(row["stock"]),
            min_level=decode_decimal(row["min_level"]),
            status=MaterialStatus(row["status"]),
            version=row["version"],
            created_at=decode_timestamp(row["created_at"]),
            updated_at=decode_timestamp(row["updated_at"]),
        )
