"""Promotion ORM models: scheduled category discounts and the menu banner."""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from menuscarta.db.base import Base

DEFAULT_BANNER_TITLE: str = "Ofertas especiales"
DEFAULT_BANNER_MESSAGE: str = "Ofertas especiales disponibles"
DEFAULT_BANNER_BACKGROUND: str = "#FF9500"
DEFAULT_BANNER_TEXT_COLOR: str = "#FFFFFF"


class ScheduledDiscount(Base):
    """Recurring weekday/time window discount on one category."""

    __tablename__ = "scheduled_discounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    discount_percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    days_of_week: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class PromotionBanner(Base):
    """Singleton banner row per restaurant."""

    __tablename__ = "promotion_banners"

    id: Mapped[int] = mapped_column(primary_key=True)
    restaurant_id: Mapped[int] = mapped_column(ForeignKey("restaurants.id"), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_BANNER_TITLE)
    subtitle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    background_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    text_color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
