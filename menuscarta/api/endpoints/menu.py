"""Public menu plus category and item editor endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from menuscarta.auth import get_current_session
from menuscarta.core.security import SessionData
from menuscarta.db.session import get_db
from menuscarta.schemas.menu import (
    CategoryPayload,
    CategoryResponse,
    MenuItemPayload,
    MenuItemResponse,
    MenuResponse,
)
from menuscarta.services.menu_service import (
    build_public_menu,
    category_responses,
    item_response,
    list_categories,
    list_items,
    replace_items,
    save_categories,
)
from menuscarta.services.restaurant_service import get_public_restaurant, get_tenant_for_write

router: APIRouter = APIRouter()


@router.get("/{slug}/menu", response_model=MenuResponse)
def get_menu(
    slug: str,
    at: datetime | None = Query(default=None, description="Evaluate prices at this moment (ISO-8601)."),
    db: Session = Depends(get_db),
) -> MenuResponse:
    """Public menu with prices derived for ``at`` (default: now)."""
    restaurant = get_public_restaurant(db, slug)
    return build_public_menu(db, restaurant, now=at)


@router.get("/{slug}/categories", response_model=list[CategoryResponse])
def get_categories(slug: str, db: Session = Depends(get_db)) -> list[CategoryResponse]:
    restaurant = get_public_restaurant(db, slug)
    return category_responses(list_categories(db, restaurant.id))


@router.post("/{slug}/categories", response_model=list[CategoryResponse])
def post_categories(
    slug: str,
    payload: list[CategoryPayload],
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> list[CategoryResponse]:
    restaurant = get_tenant_for_write(db, session, slug)
    return category_responses(save_categories(db, restaurant, payload))


@router.get("/{slug}/items", response_model=list[MenuItemResponse])
def get_items(slug: str, db: Session = Depends(get_db)) -> list[MenuItemResponse]:
    restaurant = get_public_restaurant(db, slug)
    return [item_response(item) for item in list_items(db, restaurant.id)]


@router.post("/{slug}/items", response_model=list[MenuItemResponse])
def post_items(
    slug: str,
    payload: list[MenuItemPayload],
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> list[MenuItemResponse]:
    restaurant = get_tenant_for_write(db, session, slug)
    return [item_response(item) for item in replace_items(db, restaurant, payload)]
