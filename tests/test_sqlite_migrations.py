"""Tests for lightweight SQLite schema migrations."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from menuscarta.core.config import settings
from menuscarta.db import session as db_session
from menuscarta.db.migrations import ensure_sqlite_schema
from menuscarta.main import app


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _create_legacy_tables(engine: Engine) -> None:
    with engine.begin() as connection:
        connection.execute(
            text(
                """
                CREATE TABLE restaurants (
                    id INTEGER NOT NULL,
                    slug VARCHAR(64) NOT NULL,
                    name VARCHAR(255) NOT NULL,
                    password_hash VARCHAR(255) NOT NULL,
                    subscription_status VARCHAR(9) NOT NULL,
                    owner_email VARCHAR(255),
                    currency VARCHAR(3),
                    theme_id VARCHAR(32),
                    logo_url VARCHAR(500),
                    is_admin BOOLEAN NOT NULL,
                    is_demo BOOLEAN NOT NULL,
                    created_at DATETIME NOT NULL,
                    updated_at DATETIME NOT NULL,
                    PRIMARY KEY (id),
                    UNIQUE (slug)
                )
                """
            )
        )
        connection.execute(
            text(
                """
                CREATE TABLE promotion_banners (
                    id INTEGER NOT NULL,
                    restaurant_id INTEGER NOT NULL,
                    title VARCHAR(255) NOT NULL,
                    subtitle VARCHAR(255),
                    is_visible BOOLEAN NOT NULL,
                    updated_at DATETIME NOT NULL,
                    PRIMARY KEY (id),
                    UNIQUE (restaurant_id),
                    FOREIGN KEY(restaurant_id) REFERENCES restaurants (id)
                )
                """
            )
        )
        connection.execute(
            text(
                """
                INSERT INTO restaurants (id, slug, name, password_hash, subscription_status,
                                         is_admin, is_demo, created_at, updated_at)
                VALUES (1, 'la-esquina', 'La Esquina', 'hash', 'active', 0, 0,
                        CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
                """
            )
        )
        connection.execute(
            text(
                """
                INSERT INTO promotion_banners (restaurant_id, title, is_visible, updated_at)
                VALUES (1, 'Happy hour', 1, CURRENT_TIMESTAMP)
                """
            )
        )


def _column_names(engine: Engine, table_name: str) -> set[str]:
    with engine.begin() as connection:
        rows = connection.execute(text(f"PRAGMA table_info({table_name})")).mappings().all()
    return {str(row["name"]) for row in rows}


def test_ensure_sqlite_schema_adds_missing_columns(tmp_path: Path) -> None:
    engine = _build_test_engine(tmp_path / "legacy_schema.db")
    _create_legacy_tables(engine)

    ensure_sqlite_schema(engine)
    ensure_sqlite_schema(engine)

    assert {"logo_style", "timezone", "ingredient_categories"} <= _column_names(engine, "restaurants")
    assert {"background_color", "text_color"} <= _column_names(engine, "promotion_banners")

    with engine.begin() as connection:
        logo_style = connection.execute(text("SELECT logo_style FROM restaurants WHERE id = 1")).scalar_one()
        colors = connection.execute(
            text("SELECT background_color, text_color FROM promotion_banners WHERE restaurant_id = 1")
        ).one()

    assert logo_style == "circular"
    assert tuple(colors) == ("#FF9500", "#FFFFFF")


def test_startup_upgrades_legacy_database(tmp_path: Path, monkeypatch) -> None:
    engine = _build_test_engine(tmp_path / "legacy_startup.db")
    _create_legacy_tables(engine)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "admin_password", "admin-secret")
    monkeypatch.setattr(settings, "data_dir", str(tmp_path / "data"))

    with TestClient(app) as client:
        banner = client.get("/api/restaurants/la-esquina/banner")
        theme = client.get("/api/restaurants/la-esquina/theme")

    assert banner.status_code == 200
    assert banner.json()["message"] == "Happy hour"
    assert banner.json()["background_color"] == "#FF9500"
    assert theme.status_code == 200
    assert theme.json()["logo_style"] == "circular"
