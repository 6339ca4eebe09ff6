"""Database store layer - provides persistence for the application.

This module re-exports all public database functions for easy importing.
"""

from intime.store.queries import (
    create_purchase,
    create_user,
    delete_purchase,
    get_purchases_by_user_id,
    get_user,
    get_user_by_uid,
    update_user,
)
from intime.store.schema import backup_database, count_rows, database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "backup_database",
    "count_rows",
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "create_purchase",
    "create_user",
    "delete_purchase",
    "get_purchases_by_user_id",
    "get_user",
    "get_user_by_uid",
    "update_user",
]
