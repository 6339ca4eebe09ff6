"""Database query functions."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Any

from intime.domain.models import Description, Money
from intime.domain.purchases import Purchase, PurchaseDraft
from intime.store.schema import get_db_path

logger = logging.getLogger(__name__)

USER_COLUMNS = "id, uid, email, monthly_salary, weekly_hours, created_at"
PURCHASE_COLUMNS = "id, user_id, value, time_hours, time_minutes, description, type, image_path, created_at"
UPDATABLE_USER_FIELDS = ("email", "monthly_salary", "weekly_hours")


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def _row_to_purchase(row: sqlite3.Row) -> Purchase:
    created_at = row["created_at"]
    return Purchase(
        id=row["id"],
        user_id=row["user_id"],
        value=Money(row["value"]),
        time_hours=row["time_hours"],
        time_minutes=row["time_minutes"],
        type=row["type"],
        description=Description(row["description"]) if row["description"] else None,
        image_path=row["image_path"],
        created_at=datetime.fromisoformat(created_at) if created_at else None,
    )


def get_user(user_id: int, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a user by database ID.

    Args:
        user_id: User ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        User dictionary or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_user_by_uid(uid: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """Get a user by external uid.

    Args:
        uid: User uid.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        User dictionary or None if not found.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(f"SELECT {USER_COLUMNS} FROM users WHERE uid = ?", (uid,))
        row = cursor.fetchone()
        return dict(row) if row else None


def create_user(
    uid: str,
    email: str,
    monthly_salary: float | None = None,
    weekly_hours: float | None = None,
    db_path: Path | None = None,
) -> dict[str, Any]:
    """Create a user, or return the existing one if the uid is taken.

    Args:
        uid: User uid.
        email: User email.
        monthly_salary: Optional monthly salary in reais.
        weekly_hours: Optional weekly work hours.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        User dictionary.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    existing = get_user_by_uid(uid, db_path)
    if existing:
        return existing

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO users (uid, email, monthly_salary, weekly_hours) VALUES (?, ?, ?, ?)",
                (uid, email, monthly_salary, weekly_hours),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise

    logger.debug("Created user %s", uid)
    user = get_user_by_uid(uid, db_path)
    assert user is not None
    return user


def update_user(uid: str, db_path: Path | None = None, **updates: Any) -> dict[str, Any] | None:
    """Update a user's email or salary profile.

    Args:
        uid: User uid.
        db_path: Path to the database file. If None, uses default location.
        **updates: Any of email, monthly_salary, weekly_hours.

    Returns:
        Updated user dictionary or None if the user doesn't exist.

    Raises:
        ValueError: If an unknown field is given.
        sqlite3.Error: If database operation fails.
    """
    unknown = set(updates) - set(UPDATABLE_USER_FIELDS)
    if unknown:
        raise ValueError(f"Cannot update user fields: {', '.join(sorted(unknown))}")

    if get_user_by_uid(uid, db_path) is None:
        return None

    if updates:
        assignments = ", ".join(f"{field} = ?" for field in updates)
        with _connect(db_path) as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(f"UPDATE users SET {assignments} WHERE uid = ?", (*updates.values(), uid))
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise

    return get_user_by_uid(uid, db_path)


def get_purchases_by_user_id(user_id: int, db_path: Path | None = None) -> list[Purchase]:
    """Get all purchases of a user.

    Args:
        user_id: User ID.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        List of purchases ordered newest first.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute(
            f"SELECT {PURCHASE_COLUMNS} FROM purchases WHERE user_id = ? ORDER BY created_at DESC, id DESC",
            (user_id,),
        )
        return [_row_to_purchase(row) for row in cursor.fetchall()]


def create_purchase(
    draft: PurchaseDraft, db_path: Path | None = None, created_at: datetime | None = None
) -> Purchase:
    """Insert a purchase.

    Args:
        draft: Purchase data.
        db_path: Path to the database file. If None, uses default location.
        created_at: Creation timestamp. If None, uses the current local time.

    Returns:
        The stored purchase.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    if created_at is None:
        created_at = datetime.now()

    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                """
                INSERT INTO purchases
                    (user_id, value, time_hours, time_minutes, description, type, image_path, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    draft.user_id,
                    draft.value,
                    draft.time_hours,
                    draft.time_minutes,
                    draft.description,
                    draft.type,
                    draft.image_path,
                    created_at.isoformat(sep=" ", timespec="seconds"),
                ),
            )
            conn.commit()
            purchase_id = cursor.lastrowid
        except sqlite3.Error:
            conn.rollback()
            raise

        cursor.execute(f"SELECT {PURCHASE_COLUMNS} FROM purchases WHERE id = ?", (purchase_id,))
        logger.debug("Created %s purchase %s for user %s", draft.type, purchase_id, draft.user_id)
        return _row_to_purchase(cursor.fetchone())


def delete_purchase(purchase_id: int, user_id: int, db_path: Path | None = None) -> bool:
    """Delete a purchase owned by the given user.

    Args:
        purchase_id: Purchase ID.
        user_id: Owner's user ID. Purchases of other users are left alone.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a purchase was deleted, False if not found for this user.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM purchases WHERE id = ? AND user_id = ?", (purchase_id, user_id))
            conn.commit()
            return cursor.rowcount > 0
        except sqlite3.Error:
            conn.rollback()
            raise
