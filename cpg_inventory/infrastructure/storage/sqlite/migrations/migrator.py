"""
Versioned schema migrations for the inventory database.

Migration files live next to this module as ``vNNN_name.sql`` and are
applied in version order. Each applied file is recorded in
``schema_migrations`` with a checksum; editing an applied file stops
the run instead of silently diverging.

Besides migrating, the module audits a live database: schema integrity,
stock that went negative behind the CHECK constraint, and items whose
stored quantity no longer equals the sum of their ledger.
"""

import asyncio
import hashlib
import re
import shutil
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from cpg_inventory.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(\d+)_(.+)\.sql")

REQUIRED_TABLES = [
    "companies",
    "customers",
    "custom_fields",
    "inventory_items",
    "inventory_transactions",
    "orders",
    "order_items",
    "shipments",
    "shipment_items",
    "schema_migrations",
]


@dataclass
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        sql = path.read_text(encoding="utf-8")
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=hashlib.sha256(sql.encode()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _db_path(db_path: Path | None) -> Path:
    return db_path or get_settings().storage.db_path


@asynccontextmanager
async def _open(db_path: Path) -> AsyncIterator[aiosqlite.Connection]:
    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA foreign_keys=ON")
        yield conn


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum recorded when they ran."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        # Fresh database
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; misnamed files are skipped."""
    migrations = []
    for path in sorted(MIGRATIONS_DIR.glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    start = time.perf_counter()

    def elapsed() -> int:
        return int((time.perf_counter() - start) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            """
            INSERT OR REPLACE INTO schema_migrations (version, name, checksum, execution_time_ms)
            VALUES (?, ?, ?, ?)
            """,
            (migration.version, migration.name, migration.checksum, elapsed()),
        )
        await conn.commit()

        cursor = await conn.execute("PRAGMA foreign_key_check")
        violations = await cursor.fetchall()
        if violations:
            raise RuntimeError(f"{len(violations)} foreign key violations after migration")

    except Exception as e:
        await conn.rollback()
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed(),
            error=str(e),
        )

    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed(),
    )
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed(),
    )


def create_backup(db_path: Path) -> Path:
    """Copy the database file aside before touching its schema."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{timestamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def _apply_pending(conn: aiosqlite.Connection) -> list[MigrationResult]:
    applied = await get_applied_migrations(conn)
    results: list[MigrationResult] = []

    for migration in discover_migrations():
        recorded = applied.get(migration.version)
        if recorded == migration.checksum:
            continue
        if recorded is not None:
            logger.error(
                "migration_checksum_mismatch",
                version=migration.version,
                recorded=recorded,
                on_disk=migration.checksum,
            )
            break

        result = await apply_migration(conn, migration)
        results.append(result)
        if not result.success:
            break

    return results


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to the newest schema.

    An existing database file is backed up first; the backup is removed
    once every pending migration succeeds and restored if the run raises.

    Returns:
        Results for the migrations attempted in this run
    """
    db_path = _db_path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = None
    if create_backup_before and db_path.exists():
        backup_path = create_backup(db_path)

    try:
        async with _open(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            results = await _apply_pending(conn)
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if backup_path and all(r.success for r in results):
        backup_path.unlink()

    logger.info(
        "database_ready",
        applied=len([r for r in results if r.success]),
        failed=len([r for r in results if not r.success]),
    )
    return results


run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migration versions."""
    db_path = _db_path(db_path)
    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": [],
        }

    discovered = discover_migrations()
    async with _open(db_path) as conn:
        applied = await get_applied_migrations(conn)

    return {
        "exists": True,
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


async def audit_ledger(db_path: Path | None = None) -> list[dict]:
    """
    Compare every item's stored quantity with the sum of its ledger.

    Items with no transactions at all predate the ledger and are not
    audited.

    Returns:
        One entry per drifting item, empty when the ledger is consistent
    """
    async with _open(_db_path(db_path)) as conn:
        cursor = await conn.execute(
            """
            SELECT i.company_id, i.id, i.name, i.quantity,
                   COALESCE(SUM(t.quantity), 0) AS ledger_quantity,
                   COUNT(t.id) AS transaction_count
            FROM inventory_items i
            LEFT JOIN inventory_transactions t
                ON t.inventory_item_id = i.id AND t.company_id = i.company_id
            GROUP BY i.id
            HAVING transaction_count > 0 AND i.quantity != ledger_quantity
            ORDER BY i.company_id, i.id
            """
        )
        rows = await cursor.fetchall()

    drift = [
        {
            "company_id": company_id,
            "item_id": item_id,
            "name": name,
            "stored_quantity": stored,
            "ledger_quantity": ledger,
            "drift": stored - ledger,
        }
        for company_id, item_id, name, stored, ledger, _count in rows
    ]
    logger.info("ledger_audit_completed", drifting_items=len(drift))
    return drift


async def _check_foreign_keys(conn: aiosqlite.Connection, tables: set[str]) -> dict:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    violations = await cursor.fetchall()
    return {
        "check": "foreign_keys",
        "status": "FAIL" if violations else "PASS",
        "violations": len(violations),
    }


async def _check_integrity(conn: aiosqlite.Connection, tables: set[str]) -> dict:
    cursor = await conn.execute("PRAGMA integrity_check")
    result = (await cursor.fetchone())[0]
    return {
        "check": "integrity",
        "status": "PASS" if result == "ok" else "FAIL",
        "result": result,
    }


async def _check_required_tables(conn: aiosqlite.Connection, tables: set[str]) -> dict:
    missing = [t for t in REQUIRED_TABLES if t not in tables]
    return {
        "check": "required_tables",
        "status": "FAIL" if missing else "PASS",
        "missing": missing,
    }


async def _check_non_negative_stock(conn: aiosqlite.Connection, tables: set[str]) -> dict:
    # Only reachable when the CHECK constraint was bypassed
    negative = 0
    if "inventory_items" in tables:
        cursor = await conn.execute("SELECT COUNT(*) FROM inventory_items WHERE quantity < 0")
        negative = (await cursor.fetchone())[0]
    return {
        "check": "non_negative_stock",
        "status": "FAIL" if negative else "PASS",
        "negative_items": negative,
    }


_INTEGRITY_CHECKS = (
    _check_foreign_keys,
    _check_integrity,
    _check_required_tables,
    _check_non_negative_stock,
)


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """Run every integrity check; each result has ``check`` and ``status`` keys."""
    async with _open(_db_path(db_path)) as conn:
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
        tables = {row[0] for row in await cursor.fetchall()}
        return [await check(conn, tables) for check in _INTEGRITY_CHECKS]


def _print_status(status: dict) -> None:
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")


def _print_checks(checks: list[dict]) -> None:
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")


def _print_drift(drift: list[dict]) -> None:
    if not drift:
        print("Ledger consistent")
    for entry in drift:
        print(
            f"[DRIFT] company {entry['company_id']} item {entry['item_id']} "
            f"({entry['name']}): stored {entry['stored_quantity']}, "
            f"ledger {entry['ledger_quantity']}"
        )


def _print_results(results: list[MigrationResult]) -> None:
    if not results:
        print("Schema up to date")
    for result in results:
        outcome = "SUCCESS" if result.success else "FAILED"
        print(f"[{outcome}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")


def main() -> None:
    """CLI entry point: migrate, or inspect with --status/--verify/--audit-ledger."""
    import argparse

    parser = argparse.ArgumentParser(description="CPG inventory database migrator")
    parser.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="Show migration status")
    mode.add_argument("--verify", action="store_true", help="Verify schema integrity")
    mode.add_argument(
        "--audit-ledger",
        action="store_true",
        help="Report items whose quantity differs from their ledger",
    )
    parser.add_argument("--no-backup", action="store_true", help="Skip backup before migrating")
    args = parser.parse_args()

    if args.status:
        _print_status(asyncio.run(get_migration_status(args.db_path)))
    elif args.verify:
        _print_checks(asyncio.run(verify_schema_integrity(args.db_path)))
    elif args.audit_ledger:
        _print_drift(asyncio.run(audit_ledger(args.db_path)))
    else:
        results = asyncio.run(
            initialize_database(args.db_path, create_backup_before=not args.no_backup)
        )
        _print_results(results)


if __name__ == "__main__":
    main()
