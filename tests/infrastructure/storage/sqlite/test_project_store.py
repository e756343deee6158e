"""Tests for SQLite project ownership lookups."""

from stockledger.core.entities import Project
from stockledger.infrastructure.storage.sqlite import SQLiteProjectStore


class TestSQLiteProjectStore:
    async def test_create_and_get(self, migrated_db):
        store = SQLiteProjectStore()
        await store.create_project(Project(id="p-1", name="Bridge", owner_user_id="u-1"))

        project = await store.get_project("p-1")

        assert project is not None
        assert project.name == "Bridge"
        assert project.owner_user_id == "u-1"

    async def test_get_missing(self, migrated_db):
        assert await SQLiteProjectStore().get_project("nope") is None

    async def test_is_project_owner(self, migrated_db):
        store = SQLiteProjectStore()
        await store.create_project(Project(id="p-1", owner_user_id="u-1"))

        assert await store.is_project_owner("u-1", "p-1") is True
        assert await store.is_project_owner("u-2", "p-1") is False
        assert await store.is_project_owner("u-1", "p-404") is False
