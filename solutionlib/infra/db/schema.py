"""Module: schema.py.

Author: Michael Economou
Date: 2026-03-06

Solution store schema creation and inspection.

A solution file holds three tables:
- schema_version: layout version of the file
- item_type: the item-type snapshot (code, name) written with every save
- solution_item: one row per tree node, linked to its parent

Older layouts are detected, never migrated.
"""

import sqlite3

from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

SCHEMA_VERSION = 1

REQUIRED_TABLES = frozenset({"schema_version", "item_type", "solution_item"})


def create_schema(cursor: sqlite3.Cursor) -> None:
    """Create all solution tables and indexes."""
    cursor.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_version (
            version INTEGER PRIMARY KEY
        )
    """
    )

    # 1. Item-type snapshot
    cursor.execute(
        """
        CREATE TABLE IF NOT EXISTS item_type (
            code INTEGER PRIMARY KEY,
            name TEXT NOT NULL
        )
    """
    )

    # 2. Solution hierarchy; parents always have a lower id than their children
    cursor.execute(
        """
        CREATE TABLE IF NOT EXISTS solution_item (
            id INTEGER PRIMARY KEY,
            parent_id INTEGER,
            sort_order INTEGER NOT NULL DEFAULT 0,
            level INTEGER NOT NULL DEFAULT 0,
            item_type INTEGER NOT NULL,
            display_name TEXT NOT NULL,
            is_expanded BOOLEAN NOT NULL DEFAULT FALSE,
            metadata_json TEXT,
            FOREIGN KEY (parent_id) REFERENCES solution_item (id) ON DELETE CASCADE,
            FOREIGN KEY (item_type) REFERENCES item_type (code)
        )
    """
    )

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_solution_item_parent "
        "ON solution_item (parent_id, sort_order)"
    )
    cursor.execute(f"INSERT OR REPLACE INTO schema_version (version) VALUES ({SCHEMA_VERSION})")

    logger.debug("[schema] Schema v%d created", SCHEMA_VERSION, extra={"dev_only": True})


def drop_schema(cursor: sqlite3.Cursor) -> None:
    """Drop all solution tables (children before parents)."""
    cursor.execute("DROP INDEX IF EXISTS idx_solution_item_parent")
    cursor.execute("DROP TABLE IF EXISTS solution_item")
    cursor.execute("DROP TABLE IF EXISTS item_type")
    cursor.execute("DROP TABLE IF EXISTS schema_version")


def existing_tables(cursor: sqlite3.Cursor) -> set[str]:
    cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
    return {row[0] for row in cursor.fetchall()}


def read_schema_version(cursor: sqlite3.Cursor) -> int | None:
    """Stored layout version, or None when the file has no version row."""
    cursor.execute("SELECT MAX(version) FROM schema_version")
    row = cursor.fetchone()
    return row[0] if row else None
