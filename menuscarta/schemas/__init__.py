"""Schema exports."""

from menuscarta.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionResponse
from menuscarta.schemas.inventory import (
    IngredientPayload,
    IngredientResponse,
    IngredientsResponse,
    IngredientsUpdate,
    IngredientUpdateRequest,
    UnavailableIngredientsResponse,
    UnavailableIngredientsUpdate,
)
from menuscarta.schemas.menu import (
    CategoryPayload,
    CategoryResponse,
    MenuItemPayload,
    MenuItemResponse,
    MenuResponse,
)
from menuscarta.schemas.promotion import (
    BannerResponse,
    BannerUpdate,
    ScheduledDiscountPayload,
    ScheduledDiscountsResponse,
    ScheduledDiscountsUpdate,
)
from menuscarta.schemas.restaurant import (
    RestaurantCreate,
    RestaurantListResponse,
    RestaurantMutationResponse,
    RestaurantResponse,
    RestaurantUpdate,
)
from menuscarta.schemas.theme import CurrencyListResponse, ThemeConfigResponse, ThemeListResponse, ThemeUpdate

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "LogoutResponse",
    "SessionResponse",
    "IngredientPayload",
    "IngredientResponse",
    "IngredientsResponse",
    "IngredientsUpdate",
    "IngredientUpdateRequest",
    "UnavailableIngredientsResponse",
    "UnavailableIngredientsUpdate",
    "CategoryPayload",
    "CategoryResponse",
    "MenuItemPayload",
    "MenuItemResponse",
    "MenuResponse",
    "BannerResponse",
    "BannerUpdate",
    "ScheduledDiscountPayload",
    "ScheduledDiscountsResponse",
    "ScheduledDiscountsUpdate",
    "RestaurantCreate",
    "RestaurantListResponse",
    "RestaurantMutationResponse",
    "RestaurantResponse",
    "RestaurantUpdate",
    "CurrencyListResponse",
    "ThemeConfigResponse",
    "ThemeListResponse",
    "ThemeUpdate",
]
