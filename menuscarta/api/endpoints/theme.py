"""Branding endpoints and the static theme and currency catalogues."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from menuscarta.auth import get_current_session
from menuscarta.core.currencies import list_currencies
from menuscarta.core.security import SessionData
from menuscarta.core.themes import list_themes
from menuscarta.db.session import get_db
from menuscarta.schemas.theme import CurrencyListResponse, ThemeConfigResponse, ThemeListResponse, ThemeUpdate
from menuscarta.services.restaurant_service import (
    build_theme_config,
    get_public_restaurant,
    get_tenant_for_write,
    update_theme,
)

router: APIRouter = APIRouter()


@router.get("/restaurants/{slug}/theme", response_model=ThemeConfigResponse)
def get_theme(slug: str, db: Session = Depends(get_db)) -> ThemeConfigResponse:
    restaurant = get_public_restaurant(db, slug)
    return build_theme_config(restaurant)


@router.post("/restaurants/{slug}/theme", response_model=ThemeConfigResponse)
def post_theme(
    slug: str,
    payload: ThemeUpdate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> ThemeConfigResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    return build_theme_config(update_theme(db, restaurant, payload))


@router.get("/themes", response_model=ThemeListResponse)
def get_themes() -> ThemeListResponse:
    return ThemeListResponse(themes=list_themes())


@router.get("/currencies", response_model=CurrencyListResponse)
def get_currencies() -> CurrencyListResponse:
    return CurrencyListResponse(currencies=list_currencies())
