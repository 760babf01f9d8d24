"""
Database Operations Module

This module handles the app_config key/value store that backs the
application settings (provider credentials, language pair, options).

For schema management and migrations, see core/schema.py
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

DB_FILE = Path(__file__).parent.parent / "translations.db"


def get_connection():
    """Get a database connection."""
    return sqlite3.connect(DB_FILE)


def _ensure_app_config_table(cursor):
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_config (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)


# ============================================================
# App Config CRUD Operations
# ============================================================

def get_app_config(key: str) -> Optional[str]:
    """Get a configuration value by key."""
    with get_connection() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM app_config WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None


def set_app_config(key: str, value: str):
    """Set a configuration value."""
    with get_connection() as conn:
        cursor = conn.cursor()
        _ensure_app_config_table(cursor)
        cursor.execute("""
            INSERT OR REPLACE INTO app_config (key, value, updated_at)
            VALUES (?, ?, ?)
        """, (key, value, datetime.now().isoformat(sep=' ')))
        conn.commit()

