"""Ingredient catalogue and out-of-stock markers."""

from __future__ import annotations

import logging
import re

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from menuscarta.core.errors import NotFound, ValidationError
from menuscarta.models.inventory import Ingredient, UnavailableIngredient
from menuscarta.models.restaurant import Restaurant
from menuscarta.schemas.inventory import IngredientChanges, IngredientPayload, IngredientResponse
from menuscarta.utils.slugify import generate_ingredient_id, is_valid_slug
from menuscarta.utils.time import utcnow

logger = logging.getLogger(__name__)

DEFAULT_INGREDIENT_CATEGORIES: dict[str, str] = {
    "CARNES": "Carnes",
    "PESCADOS": "Pescados y Mariscos",
    "VEGETALES": "Vegetales",
    "LACTEOS": "Lácteos",
    "CEREALES": "Cereales y Granos",
    "FRUTAS": "Frutas",
    "CONDIMENTOS": "Condimentos y Especias",
    "OTROS": "Otros",
}
FALLBACK_INGREDIENT_ID: str = "ingrediente"
UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


def ingredient_categories(restaurant: Restaurant) -> dict[str, str]:
    return dict(restaurant.ingredient_categories or DEFAULT_INGREDIENT_CATEGORIES)


def list_ingredients(db: Session, restaurant_id: int) -> list[Ingredient]:
    return list(
        db.scalars(
            select(Ingredient)
            .where(Ingredient.restaurant_id == restaurant_id)
            .order_by(Ingredient.category.asc(), Ingredient.name.asc())
        ).all()
    )


def to_response(ingredient: Ingredient) -> IngredientResponse:
    return IngredientResponse(
        id=ingredient.ingredient_id,
        name=ingredient.name,
        category=ingredient.category.upper(),
        is_allergen=ingredient.is_allergen,
    )


def _category_key(value: str | None, field: str) -> str:
    key = (value or "").strip().upper()
    if not key:
        raise ValidationError("La categoría del ingrediente es requerida", field=field)
    return key


def _normalize_categories(categories: dict[str, str]) -> dict[str, str]:
    normalized: dict[str, str] = {}
    for key, label in categories.items():
        clean_key = key.strip().upper()
        if not clean_key or not str(label).strip():
            raise ValidationError("Categorías de ingredientes inválidas", field="categories")
        normalized[clean_key] = str(label).strip()
    return normalized


def replace_ingredients(
    db: Session,
    restaurant: Restaurant,
    payloads: list[IngredientPayload],
    categories: dict[str, str] | None = None,
) -> list[Ingredient]:
    """Replace the catalogue. Ids that are already slugs are kept, others are generated."""
    used_ids: set[str] = set()
    ingredients: list[Ingredient] = []
    for index, payload in enumerate(payloads):
        name = payload.name.strip()
        if not name:
            raise ValidationError("El nombre del ingrediente es requerido", field=f"ingredients[{index}].name")
        ingredient_id = (payload.id or "").strip()
        if not ingredient_id or UUID_PATTERN.match(ingredient_id) or not is_valid_slug(ingredient_id):
            ingredient_id = generate_ingredient_id(name, used_ids) or generate_ingredient_id(
                FALLBACK_INGREDIENT_ID, used_ids
            )
        elif ingredient_id in used_ids:
            ingredient_id = generate_ingredient_id(ingredient_id, used_ids)
        used_ids.add(ingredient_id)
        ingredients.append(
            Ingredient(
                restaurant_id=restaurant.id,
                ingredient_id=ingredient_id,
                name=name,
                category=_category_key(payload.category, f"ingredients[{index}].category").lower(),
                is_allergen=payload.is_allergen,
            )
        )

    restaurant.ingredient_categories = _normalize_categories(
        categories if categories is not None else DEFAULT_INGREDIENT_CATEGORIES
    )
    db.execute(delete(Ingredient).where(Ingredient.restaurant_id == restaurant.id))
    db.add_all(ingredients)
    db.commit()
    logger.info("[INVENTORY] Saved %d ingredients for slug=%s", len(ingredients), restaurant.slug)
    return list_ingredients(db, restaurant.id)


def _get_ingredient(db: Session, restaurant_id: int, ingredient_id: str) -> Ingredient:
    ingredient = db.scalar(
        select(Ingredient)
        .where(Ingredient.restaurant_id == restaurant_id, Ingredient.ingredient_id == ingredient_id)
        .limit(1)
    )
    if ingredient is None:
        raise NotFound("Ingrediente no encontrado")
    return ingredient


def update_ingredient(
    db: Session,
    restaurant: Restaurant,
    ingredient_id: str,
    changes: IngredientChanges | None,
) -> list[Ingredient]:
    if not ingredient_id or changes is None:
        raise ValidationError("Faltan el id o los cambios del ingrediente")
    ingredient = _get_ingredient(db, restaurant.id, ingredient_id)
    if changes.name is not None:
        if not changes.name.strip():
            raise ValidationError("El nombre del ingrediente es requerido", field="updates.name")
        ingredient.name = changes.name.strip()
    if changes.category is not None:
        ingredient.category = _category_key(changes.category, "updates.category").lower()
    if changes.is_allergen is not None:
        ingredient.is_allergen = changes.is_allergen
    db.commit()
    return list_ingredients(db, restaurant.id)


def delete_ingredient(db: Session, restaurant: Restaurant, ingredient_id: str | None) -> list[Ingredient]:
    if not ingredient_id:
        raise ValidationError("Falta el id del ingrediente", field="id")
    ingredient = _get_ingredient(db, restaurant.id, ingredient_id)
    db.delete(ingredient)
    db.commit()
    return list_ingredients(db, restaurant.id)


def list_unavailable_ids(db: Session, restaurant_id: int) -> list[str]:
    return sorted(
        db.scalars(
            select(UnavailableIngredient.ingredient_id).where(UnavailableIngredient.restaurant_id == restaurant_id)
        ).all()
    )


def set_unavailable_ingredients(
    db: Session,
    restaurant: Restaurant,
    ingredient_ids: list[str],
    reason: str | None = None,
) -> list[str]:
    """Make the out-of-stock set equal ``ingredient_ids``; kept entries keep their ``marked_at``."""
    wanted = {value.strip() for value in ingredient_ids if value and value.strip()}
    current = {
        row.ingredient_id: row
        for row in db.scalars(
            select(UnavailableIngredient).where(UnavailableIngredient.restaurant_id == restaurant.id)
        ).all()
    }

    for ingredient_id, row in current.items():
        if ingredient_id not in wanted:
            db.delete(row)
    for ingredient_id in sorted(wanted - current.keys()):
        db.add(
            UnavailableIngredient(
                restaurant_id=restaurant.id,
                ingredient_id=ingredient_id,
                reason=reason,
                marked_at=utcnow(),
            )
        )
    db.commit()
    return list_unavailable_ids(db, restaurant.id)
