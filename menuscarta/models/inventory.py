"""Ingredient catalogue and stock ORM models."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from menuscarta.db.base import Base


class Ingredient(Base):
    """Ingredient known to one restaurant, keyed by a slug."""

    __tablename__ = "ingredients"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "ingredient_id", name="uq_restaurant_ingredient"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    ingredient_id: Mapped[str] = mapped_column(String(128), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    is_allergen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class UnavailableIngredient(Base):
    """Marks an ingredient as temporarily out of stock for a restaurant."""

    __tablename__ = "unavailable_ingredients"
    __table_args__ = (
        UniqueConstraint("restaurant_id", "ingredient_id", name="uq_unavailable_ingredient"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    ingredient_id: Mapped[str] = mapped_column(String(128), nullable=False)
    reason: Mapped[str | None] = mapped_column(String(255), nullable=True)
    marked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
