"""Tenant lookup, lifecycle and branding operations."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from menuscarta.core.config import settings
from menuscarta.core.currencies import DEFAULT_RESTAURANT_CURRENCY_CODE, get_currency, is_known_currency
from menuscarta.core.errors import Conflict, Forbidden, NotFound, ValidationError
from menuscarta.core.security import SessionData, get_password_hash, require_tenant_match
from menuscarta.core.themes import THEME_PRESETS, resolve_theme
from menuscarta.models.menu import MenuItem
from menuscarta.models.restaurant import SUBSCRIPTION_STATUSES, Restaurant
from menuscarta.schemas.restaurant import RestaurantCreate, RestaurantUpdate
from menuscarta.schemas.theme import ThemeConfigResponse, ThemeUpdate
from menuscarta.services import image_store
from menuscarta.utils.slugify import is_valid_slug
from menuscarta.utils.time import get_zone

logger = logging.getLogger(__name__)

SLUG_IN_USE_MESSAGE: str = "El slug ya está en uso. Elige otro."


def get_restaurant_by_slug(db: Session, slug: str) -> Restaurant | None:
    return db.scalar(select(Restaurant).where(Restaurant.slug == slug).limit(1))


def get_public_restaurant(db: Session, slug: str) -> Restaurant:
    """Tenant visible to anonymous readers: must exist, be active and not be the admin row."""
    restaurant = get_restaurant_by_slug(db, slug)
    if restaurant is None or restaurant.is_admin or not restaurant.is_active:
        raise NotFound("Restaurante no encontrado")
    return restaurant


def get_tenant_for_write(db: Session, session: SessionData, slug: str) -> Restaurant:
    """Authorize a tenant-scoped write and return the target restaurant."""
    require_tenant_match(session, slug)
    restaurant = get_restaurant_by_slug(db, slug)
    if restaurant is None or restaurant.is_admin:
        raise NotFound("Restaurante no encontrado")
    if not restaurant.is_active:
        raise Forbidden("Esta cuenta está desactivada o suspendida")
    return restaurant


def restaurant_timezone(restaurant: Restaurant) -> str:
    return restaurant.timezone or settings.default_timezone


def restaurant_currency(restaurant: Restaurant) -> str:
    return restaurant.currency or DEFAULT_RESTAURANT_CURRENCY_CODE


def validate_tenant_slug(slug: str) -> str:
    value = (slug or "").strip()
    if not value:
        raise ValidationError("El slug es requerido", field="slug")
    if value == settings.admin_slug:
        raise ValidationError(f'El slug "{settings.admin_slug}" está reservado', field="slug")
    if not is_valid_slug(value):
        raise ValidationError(
            "El slug solo puede contener letras minúsculas, números, guiones y guiones bajos",
            field="slug",
        )
    return value


def _validate_status(status: str) -> str:
    if status not in SUBSCRIPTION_STATUSES:
        raise ValidationError("Estado de suscripción inválido", field="subscription_status")
    return status


def _commit_unique(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict(SLUG_IN_USE_MESSAGE, field="slug") from exc


def list_restaurants(db: Session) -> list[Restaurant]:
    """All tenants except the superadmin row, newest first."""
    return list(
        db.scalars(
            select(Restaurant)
            .where(Restaurant.is_admin.is_(False))
            .order_by(Restaurant.created_at.desc(), Restaurant.id.desc())
        ).all()
    )


def get_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None or restaurant.is_admin:
        raise NotFound("Restaurante no encontrado")
    return restaurant


def create_restaurant(db: Session, payload: RestaurantCreate) -> Restaurant:
    name = payload.name.strip()
    if not name or not payload.slug.strip() or not payload.password:
        raise ValidationError("Nombre, slug y contraseña son requeridos")
    slug = validate_tenant_slug(payload.slug)
    if payload.currency is not None and not is_known_currency(payload.currency):
        raise ValidationError("Moneda no soportada", field="currency")
    if payload.timezone is not None:
        get_zone(payload.timezone)

    if get_restaurant_by_slug(db, slug) is not None:
        raise Conflict(SLUG_IN_USE_MESSAGE, field="slug")

    restaurant = Restaurant(
        name=name,
        slug=slug,
        password_hash=get_password_hash(payload.password),
        subscription_status=_validate_status(payload.subscription_status),
        owner_email=payload.owner_email,
        currency=payload.currency.strip().upper() if payload.currency else None,
        timezone=payload.timezone,
        is_admin=False,
        is_demo=False,
    )
    db.add(restaurant)
    _commit_unique(db)
    db.refresh(restaurant)
    logger.info("[ADMIN] Restaurant created: slug=%s", slug)
    return restaurant


def update_restaurant(db: Session, restaurant_id: int, payload: RestaurantUpdate) -> Restaurant:
    restaurant = get_restaurant(db, restaurant_id)
    old_slug = restaurant.slug
    if payload.name is not None:
        if not payload.name.strip():
            raise ValidationError("El nombre es requerido", field="name")
        restaurant.name = payload.name.strip()
    if payload.slug is not None:
        restaurant.slug = validate_tenant_slug(payload.slug)
    if payload.subscription_status is not None:
        restaurant.subscription_status = _validate_status(payload.subscription_status)
    if payload.owner_email is not None:
        restaurant.owner_email = payload.owner_email or None
    if payload.password:
        restaurant.password_hash = get_password_hash(payload.password)

    renamed = restaurant.slug != old_slug
    if renamed:
        _rebase_image_urls(db, restaurant, old_slug)
    _commit_unique(db)
    if renamed:
        image_store.move_images(old_slug, restaurant.slug)
    db.refresh(restaurant)
    logger.info("[ADMIN] Restaurant updated: id=%s slug=%s", restaurant.id, restaurant.slug)
    return restaurant


def _rebase_image_urls(db: Session, restaurant: Restaurant, old_slug: str) -> None:
    restaurant.logo_url = image_store.rebase_url(old_slug, restaurant.slug, restaurant.logo_url)
    for item in db.scalars(select(MenuItem).where(MenuItem.restaurant_id == restaurant.id)):
        item.image_url = image_store.rebase_url(old_slug, restaurant.slug, item.image_url)


def cancel_restaurant(db: Session, restaurant_id: int) -> Restaurant:
    """Soft delete: the row and its data stay, the tenant stops being served."""
    restaurant = get_restaurant(db, restaurant_id)
    restaurant.subscription_status = "cancelled"
    db.commit()
    db.refresh(restaurant)
    logger.info("[ADMIN] Restaurant cancelled: id=%s slug=%s", restaurant.id, restaurant.slug)
    return restaurant


def build_theme_config(restaurant: Restaurant) -> ThemeConfigResponse:
    resolved_theme = resolve_theme(restaurant.theme_id)
    resolved_currency = get_currency(restaurant.currency or DEFAULT_RESTAURANT_CURRENCY_CODE)
    return ThemeConfigResponse(
        theme_id=resolved_theme.theme.id,
        theme_source=resolved_theme.source,
        theme=resolved_theme.theme.config,
        currency=resolved_currency.currency.code,
        currency_source="configured" if restaurant.currency and not resolved_currency.is_default else "default",
        restaurant_name=restaurant.name,
        logo_url=restaurant.logo_url,
        logo_style=restaurant.logo_style or "circular",
        timezone=restaurant_timezone(restaurant),
        updated_at=restaurant.updated_at,
    )


def update_theme(db: Session, restaurant: Restaurant, payload: ThemeUpdate) -> Restaurant:
    """Save branding. Unknown theme ids and currencies are rejected."""
    if payload.theme_id is not None and payload.theme_id not in THEME_PRESETS:
        raise ValidationError("Tema desconocido", field="theme_id")
    if payload.currency is not None and not is_known_currency(payload.currency):
        raise ValidationError("Moneda no soportada", field="currency")
    if payload.timezone is not None:
        get_zone(payload.timezone)
    if payload.restaurant_name is not None and not payload.restaurant_name.strip():
        raise ValidationError("El nombre es requerido", field="restaurant_name")

    if payload.logo_url is not None:
        restaurant.logo_url = image_store.replace_image(
            restaurant.slug,
            restaurant.logo_url,
            payload.logo_url,
            prefix="logo",
        )
    if payload.theme_id is not None:
        restaurant.theme_id = payload.theme_id
    if payload.currency is not None:
        restaurant.currency = payload.currency.strip().upper()
    if payload.timezone is not None:
        restaurant.timezone = payload.timezone
    if payload.restaurant_name is not None:
        restaurant.name = payload.restaurant_name.strip()
    if payload.logo_style is not None:
        restaurant.logo_style = payload.logo_style

    db.commit()
    db.refresh(restaurant)
    return restaurant
