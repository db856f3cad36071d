"""Lightweight schema migrations for SQLite databases."""

from __future__ import annotations

import logging

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def _add_missing_column(connection: Connection, table_name: str, column_name: str, ddl: str) -> bool:
    if column_name in _sqlite_column_names(connection, table_name):
        return False
    connection.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {ddl}"))
    logger.info("[MIGRATIONS] Added %s.%s", table_name, column_name)
    return True


def ensure_sqlite_schema(engine: Engine) -> None:
    """Apply lightweight schema updates for legacy SQLite databases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}

        if "promotion_banners" in table_names:
            _add_missing_column(connection, "promotion_banners", "background_color", "VARCHAR(16)")
            _add_missing_column(connection, "promotion_banners", "text_color", "VARCHAR(16)")
            connection.execute(
                text(
                    "UPDATE promotion_banners SET background_color = '#FF9500' WHERE background_color IS NULL"
                )
            )
            connection.execute(
                text("UPDATE promotion_banners SET text_color = '#FFFFFF' WHERE text_color IS NULL")
            )

        if "restaurants" in table_names:
            _add_missing_column(
                connection,
                "restaurants",
                "logo_style",
                "VARCHAR(16) NOT NULL DEFAULT 'circular'",
            )
            _add_missing_column(connection, "restaurants", "timezone", "VARCHAR(64)")
            _add_missing_column(connection, "restaurants", "ingredient_categories", "JSON")
