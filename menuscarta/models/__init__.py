"""Application models package."""

from menuscarta.models.inventory import Ingredient, UnavailableIngredient
from menuscarta.models.menu import Category, ItemIngredient, MenuItem
from menuscarta.models.promotion import PromotionBanner, ScheduledDiscount
from menuscarta.models.restaurant import Restaurant

__all__ = [
    "Restaurant", "Category", "MenuItem", "ItemIngredient", "Ingredient", "UnavailableIngredient",
    "ScheduledDiscount", "PromotionBanner",
]
