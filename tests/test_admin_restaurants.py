"""Superadmin restaurant management tests."""

import base64
from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from menuscarta.core.config import settings
from menuscarta.core.security import get_password_hash, verify_password
from menuscarta.db import session as db_session
from menuscarta.db.base import Base
from menuscarta.main import app
from menuscarta.models import Restaurant

ADMIN_PASSWORD = "admin-secret"
PNG_DATA_URL = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n" + b"\x00" * 24).decode("ascii")


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _setup_database(tmp_path: Path, monkeypatch, name: str) -> sessionmaker:
    engine = _build_test_engine(tmp_path / name)
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "data_dir", str(tmp_path / "data"))
    return testing_session_local


def _login_admin(client: TestClient) -> None:
    response = client.post(
        "/api/auth/login",
        json={"slug": settings.admin_slug, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200


def _create(client: TestClient, slug: str, **overrides):
    payload = {"name": f"Local {slug}", "slug": slug, "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/admin/restaurants", json=payload)


def test_admin_creates_lists_and_new_tenant_can_login(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_admin_create.db")

    with TestClient(app) as client:
        _login_admin(client)
        created = _create(client, "la-esquina", currency="clp", timezone="America/Santiago")
        listed = client.get("/api/admin/restaurants")

    with TestClient(app) as client:
        tenant_login = client.post("/api/auth/login", json={"slug": "la-esquina", "password": "secret123"})

    assert created.status_code == 201
    restaurant = created.json()["restaurant"]
    assert restaurant["slug"] == "la-esquina"
    assert restaurant["currency"] == "CLP"
    assert restaurant["subscription_status"] == "active"
    assert "password_hash" not in restaurant

    slugs = [row["slug"] for row in listed.json()["restaurants"]]
    assert slugs == ["la-esquina"]
    assert settings.admin_slug not in slugs

    assert tenant_login.status_code == 200

    with session_local() as db:
        stored = db.scalar(select(Restaurant).where(Restaurant.slug == "la-esquina"))
        assert stored is not None
        assert stored.password_hash != "secret123"
        assert verify_password("secret123", stored.password_hash)


def test_create_rejects_missing_reserved_invalid_and_duplicate_slugs(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch, "test_admin_slug_rules.db")

    with TestClient(app) as client:
        _login_admin(client)
        missing = client.post("/api/admin/restaurants", json={"name": "Sin slug", "password": "x"})
        reserved = _create(client, settings.admin_slug)
        invalid = _create(client, "Mi Resto")
        first = _create(client, "duplicado")
        duplicate = _create(client, "duplicado")
        bad_currency = _create(client, "moneda-rara", currency="XYZ")

    assert missing.status_code == 400
    assert missing.json()["error"] == "Nombre, slug y contraseña son requeridos"
    assert reserved.status_code == 400
    assert "reservado" in reserved.json()["error"]
    assert invalid.status_code == 400
    assert invalid.json()["field"] == "slug"
    assert first.status_code == 201
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "El slug ya está en uso. Elige otro.", "field": "slug"}
    assert bad_currency.status_code == 400


def test_patch_updates_fields_and_guards_slug(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch, "test_admin_patch.db")

    with TestClient(app) as client:
        _login_admin(client)
        first_id = _create(client, "primero").json()["restaurant"]["id"]
        _create(client, "segundo")
        renamed = client.patch(
            f"/api/admin/restaurants/{first_id}",
            json={"name": "Primero Renovado", "password": "nueva-clave"},
        )
        taken = client.patch(f"/api/admin/restaurants/{first_id}", json={"slug": "segundo"})
        reserved = client.patch(f"/api/admin/restaurants/{first_id}", json={"slug": settings.admin_slug})
        missing = client.patch("/api/admin/restaurants/9999", json={"name": "Nadie"})

    with TestClient(app) as client:
        new_password_login = client.post(
            "/api/auth/login",
            json={"slug": "primero", "password": "nueva-clave"},
        )

    assert renamed.status_code == 200
    assert renamed.json()["restaurant"]["name"] == "Primero Renovado"
    assert taken.status_code == 400
    assert taken.json()["error"] == "El slug ya está en uso. Elige otro."
    assert reserved.status_code == 400
    assert missing.status_code == 404
    assert new_password_login.status_code == 200


def test_delete_is_a_soft_cancel(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_admin_delete.db")

    with TestClient(app) as client:
        _login_admin(client)
        restaurant_id = _create(client, "la-esquina").json()["restaurant"]["id"]
        deleted = client.delete(f"/api/admin/restaurants/{restaurant_id}")

    with TestClient(app) as client:
        public_menu = client.get("/api/restaurants/la-esquina/menu")
        login = client.post("/api/auth/login", json={"slug": "la-esquina", "password": "secret123"})

    assert deleted.status_code == 200
    assert deleted.json()["restaurant"]["subscription_status"] == "cancelled"
    assert public_menu.status_code == 404
    assert login.status_code == 403

    with session_local() as db:
        assert db.get(Restaurant, restaurant_id) is not None


def test_admin_endpoints_require_admin_session(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_admin_guard.db")
    with session_local() as db:
        db.add(
            Restaurant(
                slug="la-esquina",
                name="La Esquina",
                password_hash=get_password_hash("secret123"),
            )
        )
        db.commit()

    with TestClient(app) as client:
        anonymous = client.get("/api/admin/restaurants")
        client.post("/api/auth/login", json={"slug": "la-esquina", "password": "secret123"})
        as_tenant = client.get("/api/admin/restaurants")
        create_as_tenant = _create(client, "intruso")

    assert anonymous.status_code == 401
    assert as_tenant.status_code == 403
    assert as_tenant.json() == {"error": "No autorizado. Solo administradores."}
    assert create_as_tenant.status_code == 403


def test_slug_rename_moves_stored_images(tmp_path: Path, monkeypatch) -> None:
    _setup_database(tmp_path, monkeypatch, "test_admin_rename_images.db")
    restaurants_dir = tmp_path / "data" / "restaurants"

    with TestClient(app) as client:
        _login_admin(client)
        restaurant_id = _create(client, "viejo-nombre").json()["restaurant"]["id"]
        client.post("/api/auth/logout")

        client.post("/api/auth/login", json={"slug": "viejo-nombre", "password": "secret123"})
        logo_url = client.post(
            "/api/restaurants/viejo-nombre/theme",
            json={"logo_url": PNG_DATA_URL},
        ).json()["logo_url"]
        category_id = client.post(
            "/api/restaurants/viejo-nombre/categories",
            json=[{"name": "Entradas"}],
        ).json()[0]["id"]
        client.post(
            "/api/restaurants/viejo-nombre/items",
            json=[{"category_id": category_id, "name": "Empanada", "base_price": 2500, "image_url": PNG_DATA_URL}],
        )
        client.post("/api/auth/logout")

        _login_admin(client)
        renamed = client.patch(f"/api/admin/restaurants/{restaurant_id}", json={"slug": "nuevo-nombre"})
        client.post("/api/auth/logout")

        client.post("/api/auth/login", json={"slug": "nuevo-nombre", "password": "secret123"})
        theme = client.get("/api/restaurants/nuevo-nombre/theme").json()
        items = client.get("/api/restaurants/nuevo-nombre/items").json()
        served_logo = client.get(theme["logo_url"])
        served_item = client.get(items[0]["image_url"])

    assert logo_url.startswith("/api/restaurants/viejo-nombre/images/")
    assert renamed.status_code == 200
    assert theme["logo_url"] == logo_url.replace("viejo-nombre", "nuevo-nombre")
    assert items[0]["image_url"].startswith("/api/restaurants/nuevo-nombre/images/item-")
    assert served_logo.status_code == 200
    assert served_item.status_code == 200
    assert not (restaurants_dir / "viejo-nombre" / "images").exists()
    assert len(list((restaurants_dir / "nuevo-nombre" / "images").iterdir())) == 2
