"""SQLite-backed project ownership lookups."""

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.material import Project
from stockledger.core.interfaces.authorization import IAuthorizationContext
from stockledger.infrastructure.storage.sqlite.codecs import decode_timestamp, encode_timestamp
from stockledger.infrastructure.storage.sqlite.connection import (
    get_connection,
    get_transaction,
    storage_operation,
)

logger = get_logger(__name__)


class SQLiteProjectStore(IAuthorizationContext):
    """
    Read side of the projects table.

    Projects are owned by the surrounding system; create_project exists
    for seeding and tests.
    """

    async def create_project(self, project: Project) -> Project:
        async with storage_operation("create_project"):
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO projects (id, name, owner_user_id, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (
                        project.id,
                        project.name,
                        project.owner_user_id,
                        encode_timestamp(project.created_at),
                    ),
                )
        logger.info("project_created", project_id=project.id)
        return project

    async def get_project(self, project_id: str) -> Project | None:
        async with storage_operation("get_project"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM projects WHERE id = ?", (project_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_project(row)

    async def is_project_owner(self, user_id: str, project_id: str) -> bool:
        """Return True if user_id owns project_id."""
        async with storage_operation("resolve_project_owner"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT 1 FROM projects WHERE id = ? AND owner_user_id = ?",
                    (project_id, user_id),
                )
                row = await cursor.fetchone()
        return row is not None

    @staticmethod
    def _row_to_project(row: aiosqlite.Row) -> Project:
        return Project(
            id=row["id"],
            name=row["name"],
            owner_user_id=row["owner_user_id"],
            created_at=decode_timestamp(row["created_at"]),
        )
