"""Menu editor and public menu schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from menuscarta.schemas.promotion import BannerResponse


class CategoryPayload(BaseModel):
    """One entry of the full ordered category list sent by the editor."""

    id: int | None = None
    name: str
    description: str | None = None
    icon: str | None = None
    position: int | None = None
    sort_order: int | None = None
    is_visible: bool = True


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    sort_order: int
    position: int
    is_visible: bool

    model_config = ConfigDict(from_attributes=True)


class MenuItemPayload(BaseModel):
    """One entry of the full item list; ``price`` is accepted as a legacy alias of ``base_price``."""

    id: int | None = None
    category_id: int
    name: str
    description: str | None = None
    base_price: Decimal | None = None
    price: Decimal | None = None
    discount_percentage: Decimal | None = None
    image_url: str | None = None
    position: int | None = None
    sort_order: int | None = None
    is_available: bool = True
    is_promotion: bool = False
    calories: int | None = Field(default=None, ge=0)
    preparation_time: int | None = Field(default=None, ge=0)
    spicy_level: int = Field(default=0, ge=0, le=5)
    is_vegetarian: bool = False
    is_vegan: bool = False
    is_gluten_free: bool = False
    allergens: list[str] | None = None
    ingredients: list[str] = Field(default_factory=list)


class MenuItemResponse(BaseModel):
    id: int
    category_id: int
    name: str
    description: str | None = None
    base_price: float
    price: float
    discount_percentage: float | None = None
    image_url: str | None = None
    sort_order: int
    position: int
    is_available: bool
    is_promotion: bool
    calories: int | None = None
    preparation_time: int | None = None
    spicy_level: int
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    allergens: list[str] | None = None
    ingredients: list[str]


class PublicMenuItem(BaseModel):
    """Item as rendered on the public menu, with its derived price."""

    id: int
    name: str
    description: str | None = None
    price: float
    final_price: float
    display_price: str
    display_base_price: str
    discount_percentage: float | None = None
    applied_discount_percentage: float | None = None
    discount_source: str | None = None
    scheduled_discount: str | None = None
    image_url: str | None = None
    is_promotion: bool
    calories: int | None = None
    preparation_time: int | None = None
    spicy_level: int
    is_vegetarian: bool
    is_vegan: bool
    is_gluten_free: bool
    allergens: list[str] | None = None
    ingredients: list[str]
    has_unavailable_ingredients: bool


class PublicCategory(BaseModel):
    id: int
    name: str
    description: str | None = None
    icon: str | None = None
    items: list[PublicMenuItem]


class PublicRestaurant(BaseModel):
    name: str
    slug: str
    logo_url: str | None = None
    logo_style: str
    theme_id: str
    currency: str
    timezone: str


class MenuResponse(BaseModel):
    restaurant: PublicRestaurant
    categories: list[PublicCategory]
    banner: BannerResponse
    unavailable_ingredients: list[str]
    generated_at: datetime
