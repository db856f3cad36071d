"""Ingredient catalogue and out-of-stock endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from menuscarta.auth import get_current_session
from menuscarta.core.security import SessionData
from menuscarta.db.session import get_db
from menuscarta.models.inventory import Ingredient
from menuscarta.models.restaurant import Restaurant
from menuscarta.schemas.inventory import (
    IngredientsResponse,
    IngredientsUpdate,
    IngredientUpdateRequest,
    UnavailableIngredientsResponse,
    UnavailableIngredientsUpdate,
)
from menuscarta.services.inventory_service import (
    delete_ingredient,
    ingredient_categories,
    list_ingredients,
    list_unavailable_ids,
    replace_ingredients,
    set_unavailable_ingredients,
    to_response,
    update_ingredient,
)
from menuscarta.services.restaurant_service import get_public_restaurant, get_tenant_for_write
from menuscarta.utils.time import utcnow

router: APIRouter = APIRouter()


def _catalogue(restaurant: Restaurant, ingredients: list[Ingredient]) -> IngredientsResponse:
    return IngredientsResponse(
        categories=ingredient_categories(restaurant),
        ingredients=[to_response(ingredient) for ingredient in ingredients],
        updated_at=utcnow(),
    )


@router.get("/{slug}/ingredients", response_model=IngredientsResponse)
def get_ingredients(slug: str, db: Session = Depends(get_db)) -> IngredientsResponse:
    restaurant = get_public_restaurant(db, slug)
    return _catalogue(restaurant, list_ingredients(db, restaurant.id))


@router.post("/{slug}/ingredients", response_model=IngredientsResponse)
def post_ingredients(
    slug: str,
    payload: IngredientsUpdate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> IngredientsResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    ingredients = replace_ingredients(db, restaurant, payload.ingredients, payload.categories)
    return _catalogue(restaurant, ingredients)


@router.put("/{slug}/ingredients", response_model=IngredientsResponse)
def put_ingredient(
    slug: str,
    payload: IngredientUpdateRequest,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> IngredientsResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    ingredients = update_ingredient(db, restaurant, payload.id, payload.updates)
    return _catalogue(restaurant, ingredients)


@router.delete("/{slug}/ingredients", response_model=IngredientsResponse)
def remove_ingredient(
    slug: str,
    ingredient_id: str | None = Query(default=None, alias="id"),
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> IngredientsResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    ingredients = delete_ingredient(db, restaurant, ingredient_id)
    return _catalogue(restaurant, ingredients)


@router.get("/{slug}/unavailable-ingredients", response_model=UnavailableIngredientsResponse)
def get_unavailable_ingredients(slug: str, db: Session = Depends(get_db)) -> UnavailableIngredientsResponse:
    restaurant = get_public_restaurant(db, slug)
    return UnavailableIngredientsResponse(ingredient_ids=list_unavailable_ids(db, restaurant.id), updated_at=utcnow())


@router.post("/{slug}/unavailable-ingredients", response_model=UnavailableIngredientsResponse)
def post_unavailable_ingredients(
    slug: str,
    payload: UnavailableIngredientsUpdate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> UnavailableIngredientsResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    ingredient_ids = set_unavailable_ingredients(db, restaurant, payload.ingredient_ids, payload.reason)
    return UnavailableIngredientsResponse(ingredient_ids=ingredient_ids, updated_at=utcnow())
