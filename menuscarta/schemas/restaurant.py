"""Restaurant (tenant) administration schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

SubscriptionStatus = Literal["active", "cancelled", "suspended"]


class RestaurantCreate(BaseModel):
    """Payload for creating a tenant from the superadmin panel."""

    name: str = ""
    slug: str = ""
    password: str = ""
    subscription_status: SubscriptionStatus = "active"
    owner_email: str | None = None
    currency: str | None = None
    timezone: str | None = None


class RestaurantUpdate(BaseModel):
    """Partial update; omitted fields are left untouched."""

    name: str | None = None
    slug: str | None = None
    password: str | None = None
    subscription_status: SubscriptionStatus | None = None
    owner_email: str | None = None


class RestaurantResponse(BaseModel):
    """Tenant as shown to the superadmin. Never includes the password hash."""

    id: int
    slug: str
    name: str
    subscription_status: str
    owner_email: str | None = None
    currency: str | None = None
    timezone: str | None = None
    theme_id: str | None = None
    logo_url: str | None = None
    logo_style: str
    is_demo: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RestaurantListResponse(BaseModel):
    restaurants: list[RestaurantResponse]


class RestaurantMutationResponse(BaseModel):
    success: bool = True
    restaurant: RestaurantResponse
