"""
Versioned schema migrations for the ledger database.

Migration files live next to this module and are named ``vNNN_name.sql``.
Each applied version is recorded in ``schema_migrations`` together with a
checksum of the file; an applied file must never change afterwards; a
schema change always ships as a new version.

Also provides the status and integrity reports behind ``stockledger-migrate``.
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import aiosqlite

from stockledger.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
MIGRATION_FILE_RE = re.compile(r"^v(\d+)_(\w+)\.sql$")

REQUIRED_TABLES = [
    "projects",
    "materials",
    "suppliers",
    "inventory_transactions",
    "schema_migrations",
]

# Materials whose stock differs from the new_stock of their latest ledger row
STOCK_DRIFT_QUERY = """
SELECT m.id FROM materials m
JOIN inventory_transactions t ON t.id = (
    SELECT id FROM inventory_transactions
    WHERE material_id = m.id
    ORDER BY id DESC LIMIT 1
)
WHERE t.new_stock IS NOT NULL AND t.new_stock != m.stock
ORDER BY m.id
"""


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


@dataclass(frozen=True)
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = MIGRATION_FILE_RE.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )

    def read_sql(self) -> str:
        return self.path.read_text(encoding="utf-8")


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map of applied version -> recorded checksum. Empty on a fresh database."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    """Highest applied version, or None."""
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations(migrations_dir: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in version order. Misnamed files are logged and skipped."""
    found: list[MigrationInfo] = []
    for path in migrations_dir.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("skipping_invalid_migration", path=str(path))
    return sorted(found, key=lambda m: m.version)


def plan_migrations(
    migrations: list[MigrationInfo], applied: dict[str, str]
) -> list[MigrationInfo]:
    """
    Select the migrations still to run.

    Planning stops at the first applied migration whose file no longer
    matches its recorded checksum; nothing after it is run.
    """
    pending: list[MigrationInfo] = []
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            logger.error(
                "migration_checksum_changed",
                version=migration.version,
                recorded=recorded,
                actual=migration.checksum,
            )
            break
    return pending


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it. Failures are returned, not raised."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    try:
        await conn.executescript(migration.read_sql())
        await conn.execute(
            """
            INSERT INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, _elapsed_ms(started)),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    elapsed = _elapsed_ms(started)
    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file next to itself with a timestamp suffix."""
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """
    Bring the database up to the latest schema version.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Copy an existing database aside first; the copy
            is restored if migrating raises and removed if every step succeeds
        migrations_dir: Directory holding the vNNN_name.sql files

    Returns:
        One result per migration attempted. Stops after the first failure.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")

            migrations = discover_migrations(migrations_dir)
            if not migrations:
                logger.warning("no_migrations_found", migrations_dir=str(migrations_dir))
            pending = plan_migrations(migrations, await get_applied_migrations(conn))

            for migration in pending:
                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info(
        "database_initialized",
        applied=sum(r.success for r in results),
        failed=sum(not r.success for r in results),
    )
    return results


# Name used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict[str, Any]:
    """Applied and pending versions for the database at db_path."""
    db_path = db_path or get_settings().storage.db_path
    discovered = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": discovered,
            "total_migrations": len(discovered),
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": sorted(applied),
        "pending_migrations": [v for v in discovered if v not in applied],
        "total_migrations": len(discovered),
    }


async def _check_foreign_keys(conn: aiosqlite.Connection) -> dict[str, Any]:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    violations = await cursor.fetchall()
    return {
        "check": "foreign_keys",
        "status": "FAIL" if violations else "PASS",
        "violations": len(violations),
    }


async def _check_integrity(conn: aiosqlite.Connection) -> dict[str, Any]:
    cursor = await conn.execute("PRAGMA integrity_check")
    (result,) = await cursor.fetchone()
    return {
        "check": "integrity",
        "status": "PASS" if result == "ok" else "FAIL",
        "result": result,
    }


async def _table_names(conn: aiosqlite.Connection) -> set[str]:
    cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
    return {name for (name,) in await cursor.fetchall()}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict[str, Any]]:
    """
    Run the database health checks.

    Each entry has ``check`` and ``status`` ("PASS"/"FAIL") plus
    check-specific fields. ``stock_matches_ledger`` lists the ids of
    materials whose stock disagrees with their latest ledger row.
    """
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        checks = [await _check_foreign_keys(conn), await _check_integrity(conn)]

        missing = [t for t in REQUIRED_TABLES if t not in await _table_names(conn)]
        checks.append({
            "check": "required_tables",
            "status": "FAIL" if missing else "PASS",
            "missing": missing,
        })

        drifted: list[str] = []
        if not missing:
            cursor = await conn.execute(STOCK_DRIFT_QUERY)
            drifted = [material_id for (material_id,) in await cursor.fetchall()]
        checks.append({
            "check": "stock_matches_ledger",
            "status": "FAIL" if drifted else "PASS",
            "materials": drifted,
        })

    failed = [c["check"] for c in checks if c["status"] != "PASS"]
    if failed:
        logger.warning("schema_integrity_failed", checks=failed)
    return checks


def _print_status(status: dict[str, Any]) -> None:
    print(f"Database exists:    {status['exists']}")
    print(f"Current version:    {status['current_version'] or '-'}")
    print(f"Applied migrations: {', '.join(status['applied_migrations']) or '-'}")
    print(f"Pending migrations: {', '.join(status['pending_migrations']) or '-'}")


def _print_checks(checks: list[dict[str, Any]]) -> None:
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] == "PASS":
            continue
        for key, value in check.items():
            if key not in ("check", "status"):
                print(f"       {key}: {value}")


def _print_results(results: list[MigrationResult]) -> None:
    if not results:
        print("Schema is up to date")
    for result in results:
        label = "OK" if result.success else "FAILED"
        print(f"[{label}] v{result.version} {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"       error: {result.error}")


def main() -> None:
    """Entry point for ``stockledger-migrate``."""
    import argparse

    parser = argparse.ArgumentParser(description="Stock ledger database migrations")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--status", action="store_true", help="Show applied and pending versions")
    action.add_argument("--verify", action="store_true", help="Run integrity checks")
    parser.add_argument("--no-backup", action="store_true", help="Do not back up before migrating")
    args = parser.parse_args()

    configure_logging()

    if args.status:
        _print_status(asyncio.run(get_migration_status(args.db_path)))
        return

    if args.verify:
        checks = asyncio.run(verify_schema_integrity(args.db_path))
        _print_checks(checks)
        if any(c["status"] != "PASS" for c in checks):
            raise SystemExit(1)
        return

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    _print_results(results)
    if any(not r.success for r in results):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
