"""Scheduled discount and promotion banner schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, Field


class ScheduledDiscountPayload(BaseModel):
    category_id: int
    name: str
    discount_percentage: Decimal
    days_of_week: list[int] = Field(default_factory=list)
    start_time: str
    end_time: str
    is_active: bool = True


class ScheduledDiscountsUpdate(BaseModel):
    """Full replacement of a tenant's scheduled discounts."""

    discounts: list[ScheduledDiscountPayload] = Field(default_factory=list)


class ScheduledDiscountResponse(BaseModel):
    id: int
    category_id: int
    name: str
    discount_percentage: float
    days_of_week: list[int]
    days_label: str
    start_time: str
    end_time: str
    is_active: bool
    is_active_now: bool
    next_change_at: datetime | None = None


class ScheduledDiscountsResponse(BaseModel):
    discounts: list[ScheduledDiscountResponse]
    timezone: str
    updated_at: datetime


class BannerUpdate(BaseModel):
    enabled: bool = False
    message: str | None = None
    background_color: str | None = Field(
        default=None, validation_alias=AliasChoices("background_color", "backgroundColor")
    )
    text_color: str | None = Field(default=None, validation_alias=AliasChoices("text_color", "textColor"))


class BannerResponse(BaseModel):
    enabled: bool
    message: str
    background_color: str
    text_color: str
    updated_at: datetime
