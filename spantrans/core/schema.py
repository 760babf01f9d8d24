"""
Database Schema Management Module

This module handles database initialization and migrations.
For CRUD operations, see core/database.py
"""

import sqlite3

# Import database module to use DB_FILE and get_connection dynamically
# This ensures monkeypatching in tests works correctly
import spantrans.core.database as db

DB_VERSION = 1


def get_connection():
    """Get a database connection using the database module's DB_FILE."""
    return db.get_connection()


def get_db_version() -> int:
    """Get current database version."""
    try:
        with get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT version FROM db_version LIMIT 1")
            row = cursor.fetchone()
            return row[0] if row else 0
    except sqlite3.OperationalError:
        return 0


def set_db_version(version: int):
    """Set database version."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("CREATE TABLE IF NOT EXISTS db_version (version INTEGER)")
        cursor.execute("DELETE FROM db_version")
        cursor.execute("INSERT INTO db_version (version) VALUES (?)", (version,))
        conn.commit()


def initialize_database():
    """Initializes the database and creates the tables."""
    if db.DB_FILE.exists():
        current_version = get_db_version()
        if current_version < DB_VERSION:
            migrate_database(current_version, DB_VERSION)
        return

    ensure_app_config_schema()
    set_db_version(DB_VERSION)


def ensure_app_config_schema():
    """Create the app_config table if it is missing."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
        """)
        conn.commit()


def migrate_database(from_version: int, to_version: int):
    """
    Migrate database from one version to another.

    Only the app_config table exists so far; any mismatch just makes sure it is
    present before stamping the new version.
    """
    from spantrans.logger import get_logger
    logger = get_logger(__name__)

    logger.info(f"Migrating database from version {from_version} to {to_version}")

    ensure_app_config_schema()
    set_db_version(to_version)
    logger.info(f"Database migration completed: now at version {to_version}")
