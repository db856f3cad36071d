"""Ingredient catalogue and stock schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class IngredientPayload(BaseModel):
    """Catalogue entry; ``id`` is kept when it is already a slug key."""

    id: str | None = None
    name: str
    category: str = "OTROS"
    is_allergen: bool = Field(default=False, validation_alias=AliasChoices("is_allergen", "isCommonAllergen"))


class IngredientsUpdate(BaseModel):
    """Full replacement of the catalogue and optionally its category labels."""

    categories: dict[str, str] | None = None
    ingredients: list[IngredientPayload] = Field(default_factory=list)


class IngredientChanges(BaseModel):
    name: str | None = None
    category: str | None = None
    is_allergen: bool | None = Field(default=None, validation_alias=AliasChoices("is_allergen", "isCommonAllergen"))


class IngredientUpdateRequest(BaseModel):
    id: str = ""
    updates: IngredientChanges | None = None


class IngredientResponse(BaseModel):
    id: str
    name: str
    category: str
    is_allergen: bool


class IngredientsResponse(BaseModel):
    categories: dict[str, str]
    ingredients: list[IngredientResponse]
    updated_at: datetime


class UnavailableIngredientsUpdate(BaseModel):
    ingredient_ids: list[str] = Field(default_factory=list)
    reason: str | None = None


class UnavailableIngredientsResponse(BaseModel):
    ingredient_ids: list[str]
    updated_at: datetime
