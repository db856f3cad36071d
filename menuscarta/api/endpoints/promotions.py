"""Scheduled discounts and promotion banner endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from menuscarta.auth import get_current_session
from menuscarta.core.security import SessionData
from menuscarta.db.session import get_db
from menuscarta.models.restaurant import Restaurant
from menuscarta.schemas.promotion import (
    BannerResponse,
    BannerUpdate,
    ScheduledDiscountsResponse,
    ScheduledDiscountsUpdate,
)
from menuscarta.services.promotion_service import (
    describe_discount,
    get_banner,
    list_scheduled_discounts,
    replace_scheduled_discounts,
    save_banner,
)
from menuscarta.services.restaurant_service import get_public_restaurant, get_tenant_for_write, restaurant_timezone
from menuscarta.utils.time import utcnow

router: APIRouter = APIRouter()


def _discounts_response(db: Session, restaurant: Restaurant, at: datetime | None) -> ScheduledDiscountsResponse:
    moment = at or utcnow()
    timezone_name = restaurant_timezone(restaurant)
    discounts = list_scheduled_discounts(db, restaurant.id)
    return ScheduledDiscountsResponse(
        discounts=[describe_discount(discount, moment, timezone_name) for discount in discounts],
        timezone=timezone_name,
        updated_at=moment,
    )


@router.get("/{slug}/scheduled-discounts", response_model=ScheduledDiscountsResponse)
def get_scheduled_discounts(
    slug: str,
    at: datetime | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ScheduledDiscountsResponse:
    restaurant = get_public_restaurant(db, slug)
    return _discounts_response(db, restaurant, at)


@router.post("/{slug}/scheduled-discounts", response_model=ScheduledDiscountsResponse)
def post_scheduled_discounts(
    slug: str,
    payload: ScheduledDiscountsUpdate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> ScheduledDiscountsResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    replace_scheduled_discounts(db, restaurant, payload.discounts)
    return _discounts_response(db, restaurant, None)


@router.get("/{slug}/banner", response_model=BannerResponse)
def get_promotion_banner(slug: str, db: Session = Depends(get_db)) -> BannerResponse:
    restaurant = get_public_restaurant(db, slug)
    return get_banner(db, restaurant.id)


@router.post("/{slug}/banner", response_model=BannerResponse)
def post_promotion_banner(
    slug: str,
    payload: BannerUpdate,
    db: Session = Depends(get_db),
    session: SessionData = Depends(get_current_session),
) -> BannerResponse:
    restaurant = get_tenant_for_write(db, session, slug)
    return save_banner(db, restaurant, payload)
