"""Scheduled discounts and the promotion banner."""

from __future__ import annotations

import logging
import re
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from menuscarta.core.errors import ValidationError
from menuscarta.models.menu import Category
from menuscarta.models.promotion import (
    DEFAULT_BANNER_BACKGROUND,
    DEFAULT_BANNER_MESSAGE,
    DEFAULT_BANNER_TEXT_COLOR,
    DEFAULT_BANNER_TITLE,
    PromotionBanner,
    ScheduledDiscount,
)
from menuscarta.models.restaurant import Restaurant
from menuscarta.schemas.promotion import (
    BannerResponse,
    BannerUpdate,
    ScheduledDiscountPayload,
    ScheduledDiscountResponse,
)
from menuscarta.services.pricing import validate_percentage
from menuscarta.services.schedule import describe_days, is_discount_active, next_activation
from menuscarta.utils.time import parse_hhmm_time, utcnow

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def list_scheduled_discounts(db: Session, restaurant_id: int) -> list[ScheduledDiscount]:
    return list(
        db.scalars(
            select(ScheduledDiscount)
            .where(ScheduledDiscount.restaurant_id == restaurant_id)
            .order_by(ScheduledDiscount.id.asc())
        ).all()
    )


def _validated_discount(
    restaurant_id: int,
    payload: ScheduledDiscountPayload,
    category_ids: set[int],
    index: int,
) -> ScheduledDiscount:
    field_prefix = f"discounts[{index}]"
    name = payload.name.strip()
    if not name:
        raise ValidationError("El nombre del descuento es requerido", field=f"{field_prefix}.name")
    if payload.category_id not in category_ids:
        raise ValidationError("La categoría no pertenece a este restaurante", field=f"{field_prefix}.category_id")
    percentage = validate_percentage(payload.discount_percentage, f"{field_prefix}.discount_percentage")

    days = sorted(set(payload.days_of_week))
    if any(day < 0 or day > 6 for day in days):
        raise ValidationError("Los días deben estar entre 0 (domingo) y 6 (sábado)", field=f"{field_prefix}.days_of_week")

    start = parse_hhmm_time(payload.start_time, f"{field_prefix}.start_time")
    end = parse_hhmm_time(payload.end_time, f"{field_prefix}.end_time")
    if start == end:
        raise ValidationError("La hora de inicio y de término no pueden ser iguales", field=f"{field_prefix}.end_time")

    return ScheduledDiscount(
        restaurant_id=restaurant_id,
        category_id=payload.category_id,
        name=name,
        discount_percentage=percentage,
        days_of_week=days,
        start_time=payload.start_time,
        end_time=payload.end_time,
        is_active=payload.is_active,
    )


def replace_scheduled_discounts(
    db: Session,
    restaurant: Restaurant,
    payloads: list[ScheduledDiscountPayload],
) -> list[ScheduledDiscount]:
    """Replace all scheduled discounts of a tenant in one transaction."""
    category_ids = set(db.scalars(select(Category.id).where(Category.restaurant_id == restaurant.id)).all())
    discounts = [
        _validated_discount(restaurant.id, payload, category_ids, index) for index, payload in enumerate(payloads)
    ]

    db.execute(delete(ScheduledDiscount).where(ScheduledDiscount.restaurant_id == restaurant.id))
    db.add_all(discounts)
    db.commit()
    logger.info("[PROMOTIONS] Saved %d scheduled discounts for slug=%s", len(discounts), restaurant.slug)
    return list_scheduled_discounts(db, restaurant.id)


def describe_discount(discount: ScheduledDiscount, now: datetime, timezone_name: str) -> ScheduledDiscountResponse:
    upcoming = next_activation(discount, now, timezone_name)
    return ScheduledDiscountResponse(
        id=discount.id,
        category_id=discount.category_id,
        name=discount.name,
        discount_percentage=float(discount.discount_percentage),
        days_of_week=list(discount.days_of_week or []),
        days_label=describe_days(discount.days_of_week or []),
        start_time=discount.start_time,
        end_time=discount.end_time,
        is_active=discount.is_active,
        is_active_now=is_discount_active(discount, now, timezone_name),
        next_change_at=upcoming.moment,
    )


def get_banner_row(db: Session, restaurant_id: int) -> PromotionBanner | None:
    return db.scalar(select(PromotionBanner).where(PromotionBanner.restaurant_id == restaurant_id).limit(1))


def get_banner(db: Session, restaurant_id: int) -> BannerResponse:
    """Current banner, or the hidden default before the first save."""
    banner = get_banner_row(db, restaurant_id)
    if banner is None:
        return BannerResponse(
            enabled=False,
            message=DEFAULT_BANNER_MESSAGE,
            background_color=DEFAULT_BANNER_BACKGROUND,
            text_color=DEFAULT_BANNER_TEXT_COLOR,
            updated_at=utcnow(),
        )
    message = banner.title + (f" - {banner.subtitle}" if banner.subtitle else "")
    return BannerResponse(
        enabled=banner.is_visible,
        message=message,
        background_color=banner.background_color or DEFAULT_BANNER_BACKGROUND,
        text_color=banner.text_color or DEFAULT_BANNER_TEXT_COLOR,
        updated_at=banner.updated_at,
    )


def _color(value: str | None, default: str, field: str) -> str:
    if not value:
        return default
    if not HEX_COLOR_PATTERN.match(value):
        raise ValidationError("Color inválido, usa el formato #RRGGBB", field=field)
    return value


def save_banner(db: Session, restaurant: Restaurant, payload: BannerUpdate) -> BannerResponse:
    background = _color(payload.background_color, DEFAULT_BANNER_BACKGROUND, "background_color")
    text_color = _color(payload.text_color, DEFAULT_BANNER_TEXT_COLOR, "text_color")

    banner = get_banner_row(db, restaurant.id)
    if banner is None:
        banner = PromotionBanner(restaurant_id=restaurant.id)
        db.add(banner)
    banner.title = (payload.message or "").strip() or DEFAULT_BANNER_TITLE
    banner.subtitle = None
    banner.is_visible = payload.enabled
    banner.background_color = background
    banner.text_color = text_color
    banner.updated_at = utcnow()
    db.commit()
    return get_banner(db, restaurant.id)
