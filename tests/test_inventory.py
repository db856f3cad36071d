"""Ingredient catalogue and out-of-stock endpoint tests."""

from pathlib import Path

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from menuscarta.core.config import settings
from menuscarta.core.security import get_password_hash
from menuscarta.db import session as db_session
from menuscarta.db.base import Base
from menuscarta.main import app
from menuscarta.models import Restaurant, UnavailableIngredient
from menuscarta.utils.slugify import generate_ingredient_id, slugify


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
    monkeypatch.setattr(settings, "admin_password", "admin-secret")
    monkeypatch.setattr(settings, "data_dir", str(tmp_path / "data"))
    return testing_session_local


def _seed_and_login(session_local: sessionmaker, client: TestClient) -> None:
    with session_local() as db:
        db.add(Restaurant(slug="la-esquina", name="La Esquina", password_hash=get_password_hash("secret123")))
        db.commit()
    response = client.post("/api/auth/login", json={"slug": "la-esquina", "password": "secret123"})
    assert response.status_code == 200


def test_slug_helpers() -> None:
    assert slugify("Carne de Cerdo") == "carne-de-cerdo"
    assert slugify("Jalapeño   Picante!") == "jalapeno-picante"
    assert generate_ingredient_id("Tomate", {"tomate"}) == "tomate-2"
    assert generate_ingredient_id("Tomate", {"tomate", "tomate-2"}) == "tomate-3"


def test_replace_ingredients_generates_unique_slug_ids(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_ingredients.db")

    with TestClient(app) as client:
        _seed_and_login(session_local, client)
        saved = client.post(
            "/api/restaurants/la-esquina/ingredients",
            json={
                "ingredients": [
                    {"name": "Tomate", "category": "vegetales"},
                    {"name": "Tomate", "category": "VEGETALES"},
                    {"id": "3f2b8c1e-0a4d-4c3e-9b7a-1d2e3f4a5b6c", "name": "Queso Azul", "category": "LACTEOS",
                     "isCommonAllergen": True},
                    {"id": "pollo-organico", "name": "Pollo", "category": "CARNES"},
                ]
            },
        )
        public = client.get("/api/restaurants/la-esquina/ingredients")

    assert saved.status_code == 200
    body = public.json()
    by_id = {ingredient["id"]: ingredient for ingredient in body["ingredients"]}
    assert set(by_id) == {"tomate", "tomate-2", "queso-azul", "pollo-organico"}
    assert by_id["tomate"]["category"] == "VEGETALES"
    assert by_id["queso-azul"]["is_allergen"] is True
    assert body["categories"]["LACTEOS"] == "Lácteos"


def test_update_and_delete_single_ingredient(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_ingredient_edit.db")

    with TestClient(app) as client:
        _seed_and_login(session_local, client)
        client.post(
            "/api/restaurants/la-esquina/ingredients",
            json={"ingredients": [{"name": "Tomate", "category": "VEGETALES"}, {"name": "Sal", "category": "OTROS"}]},
        )
        updated = client.put(
            "/api/restaurants/la-esquina/ingredients",
            json={"id": "sal", "updates": {"name": "Sal de mar", "category": "condimentos"}},
        )
        unknown_update = client.put(
            "/api/restaurants/la-esquina/ingredients",
            json={"id": "azafran", "updates": {"name": "Azafrán"}},
        )
        deleted = client.delete("/api/restaurants/la-esquina/ingredients", params={"id": "tomate"})
        missing_id = client.delete("/api/restaurants/la-esquina/ingredients")
        unknown_delete = client.delete("/api/restaurants/la-esquina/ingredients", params={"id": "tomate"})

    assert updated.status_code == 200
    sal = next(ingredient for ingredient in updated.json()["ingredients"] if ingredient["id"] == "sal")
    assert sal["name"] == "Sal de mar"
    assert sal["category"] == "CONDIMENTOS"
    assert unknown_update.status_code == 404
    assert unknown_update.json() == {"error": "Ingrediente no encontrado"}

    assert deleted.status_code == 200
    assert [ingredient["id"] for ingredient in deleted.json()["ingredients"]] == ["sal"]
    assert missing_id.status_code == 400
    assert unknown_delete.status_code == 404


def test_unavailable_ingredients_set_keeps_existing_marks(tmp_path: Path, monkeypatch) -> None:
    session_local = _setup_database(tmp_path, monkeypatch, "test_unavailable.db")

    with TestClient(app) as client:
        _seed_and_login(session_local, client)
        first = client.post(
            "/api/restaurants/la-esquina/unavailable-ingredients",
            json={"ingredient_ids": ["tomate", "queso-azul", "tomate"], "reason": "Sin stock"},
        )
        with session_local() as db:
            tomate_marked_at = db.scalar(
                select(UnavailableIngredient.marked_at).where(UnavailableIngredient.ingredient_id == "tomate")
            )
        second = client.post(
            "/api/restaurants/la-esquina/unavailable-ingredients",
            json={"ingredient_ids": ["tomate", "palta"]},
        )
        public = client.get("/api/restaurants/la-esquina/unavailable-ingredients")

    assert first.json()["ingredient_ids"] == ["queso-azul", "tomate"]
    assert second.json()["ingredient_ids"] == ["palta", "tomate"]
    assert public.json()["ingredient_ids"] == ["palta", "tomate"]

    with session_local() as db:
        tomate = db.scalar(select(UnavailableIngredient).where(UnavailableIngredient.ingredient_id == "tomate"))
        assert tomate is not None
        assert tomate.marked_at == tomate_marked_at
        assert tomate.reason == "Sin stock"
