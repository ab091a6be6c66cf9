"""Database migrations module.

Schema changes for databases that predate the current models live here as
versioned SQL files named ``<version>_<description>.sql``. They are applied
in version order and recorded in the ``schema_migrations`` table.
"""
import logging
from pathlib import Path
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).parent


def _ensure_migrations_table(conn: Connection) -> None:
    conn.execute(
        text(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                description TEXT
            )
            """
        )
    )


def _split_statements(sql: str) -> list[str]:
    """Split a migration file into individual statements, dropping comments."""
    lines = [line for line in sql.splitlines() if not line.strip().startswith("--")]
    return [stmt.strip() for stmt in "\n".join(lines).split(";") if stmt.strip()]


def list_migrations() -> list[dict[str, Any]]:
    """List all migration files.

    Returns:
        List of migration info dicts with version, filename, description
        and path, sorted by version.
    """
    migrations = []
    for path in MIGRATIONS_DIR.glob("*.sql"):
        version_str, _, description = path.stem.partition("_")
        if not version_str.isdigit():
            logger.warning(f"Skipping migration with invalid name: {path.name}")
            continue
        migrations.append(
            {
                "version": int(version_str),
                "filename": path.name,
                "description": description.replace("_", " "),
                "path": path,
            }
        )
    return sorted(migrations, key=lambda m: m["version"])


def get_current_version(engine: Engine) -> int:
    """Get the current migration version from the database."""
    with engine.begin() as conn:
        _ensure_migrations_table(conn)
        result = conn.execute(
            text("SELECT COALESCE(MAX(version), 0) FROM schema_migrations")
        ).scalar()
    return int(result) if result else 0


def get_pending_migrations(engine: Engine) -> list[dict[str, Any]]:
    """Get migrations newer than the database's current version."""
    current = get_current_version(engine)
    return [m for m in list_migrations() if m["version"] > current]


def apply_migration(engine: Engine, version: int, sql: str, description: str = "") -> bool:
    """Apply a single migration.

    Args:
        engine: Engine for the target database.
        version: The migration version number.
        sql: The SQL to execute.
        description: Optional description of the migration.

    Returns:
        True if migration was applied, False if already applied.
    """
    if version <= get_current_version(engine):
        logger.debug(f"Migration {version} already applied")
        return False

    try:
        with engine.begin() as conn:
            for statement in _split_statements(sql):
                conn.execute(text(statement))
            conn.execute(
                text(
                    "INSERT INTO schema_migrations (version, description) "
                    "VALUES (:version, :description)"
                ),
                {"version": version, "description": description},
            )
    except Exception as e:
        logger.error(f"Failed to apply migration {version}: {e}")
        raise

    logger.info(f"Applied migration {version}: {description}")
    return True


def apply_pending_migrations(engine: Engine) -> list[int]:
    """Apply every pending migration in order. Returns the applied versions."""
    applied = []
    for migration in get_pending_migrations(engine):
        sql = migration["path"].read_text(encoding="utf-8")
        if apply_migration(engine, migration["version"], sql, migration["description"]):
            applied.append(migration["version"])
    return applied


def stamp_migrations(engine: Engine) -> None:
    """Mark every known migration as applied without running it.

    Used when the schema was created directly from the current models.
    """
    with engine.begin() as conn:
        _ensure_migrations_table(conn)
        recorded = set(conn.execute(text("SELECT version FROM schema_migrations")).scalars())
        for migration in list_migrations():
            if migration["version"] in recorded:
                continue
            conn.execute(
                text(
                    "INSERT INTO schema_migrations (version, description) "
                    "VALUES (:version, :description)"
                ),
                {"version": migration["version"], "description": migration["description"]},
            )
