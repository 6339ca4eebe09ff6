"""Database schema initialization and backup."""

import os
import sqlite3
from pathlib import Path


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_db_path() -> Path:
    """Get the default database path (XDG compliant)."""
    return get_xdg_data_home() / "intime" / "intime.db"


def database_exists(db_path: Path | None = None) -> bool:
    """Check if the database file exists.

    Args:
        db_path: Path to check. If None, uses default location.

    Returns:
        True if database exists, False otherwise.
    """
    if db_path is None:
        db_path = get_db_path()
    return db_path.exists()


def init_database(db_path: Path | None = None) -> None:
    """Initialize the database with the required schema.

    Safe to run on an existing database: tables and indexes are only created
    if missing.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database initialization fails.
    """
    if db_path is None:
        db_path = get_db_path()

    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    try:
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                uid TEXT NOT NULL UNIQUE,
                email TEXT NOT NULL UNIQUE,
                monthly_salary REAL,
                weekly_hours REAL,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS purchases (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL REFERENCES users(id),
                value INTEGER NOT NULL,
                time_hours INTEGER NOT NULL,
                time_minutes INTEGER NOT NULL,
                description TEXT,
                type TEXT NOT NULL CHECK (type IN ('ocr', 'manual')),
                image_path TEXT,
                created_at TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """
        )

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_purchase_user_created ON purchases(user_id, created_at)")

        conn.commit()

    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def count_rows(db_path: Path | None = None) -> dict[str, int]:
    """Count users and purchases in the database.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Mapping of table name to row count.
    """
    if db_path is None:
        db_path = get_db_path()

    conn = sqlite3.connect(db_path)
    try:
        return {table: conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0] for table in ("users", "purchases")}
    finally:
        conn.close()


def backup_database(destination: Path, db_path: Path | None = None) -> None:
    """Copy the database to destination using sqlite's online backup.

    The copy is consistent even if another connection is writing.

    Args:
        destination: File to write the backup to. Overwritten if it exists.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If the backup fails.
    """
    if db_path is None:
        db_path = get_db_path()

    destination.parent.mkdir(parents=True, exist_ok=True)

    source = sqlite3.connect(db_path)
    target = sqlite3.connect(destination)
    try:
        source.backup(target)
    finally:
        target.close()
        source.close()
