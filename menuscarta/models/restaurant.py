"""Restaurant (tenant) ORM model."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from menuscarta.db.base import Base

SUBSCRIPTION_STATUSES = ("active", "cancelled", "suspended")
LOGO_STYLES = ("circular", "rectangular", "none")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Restaurant(Base):
    """One tenant account, addressed publicly by its slug."""

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(primary_key=True)
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    subscription_status: Mapped[str] = mapped_column(
        Enum(*SUBSCRIPTION_STATUSES, name="subscription_status"),
        nullable=False,
        default="active",
    )
    owner_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    currency: Mapped[str | None] = mapped_column(String(3), nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(64), nullable=True)
    theme_id: Mapped[str | None] = mapped_column(String(32), nullable=True)
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    logo_style: Mapped[str] = mapped_column(String(16), nullable=False, default="circular")
    ingredient_categories: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_demo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    categories: Mapped[list["Category"]] = relationship(
        back_populates="restaurant",
        cascade="all, delete-orphan",
        order_by="Category.sort_order",
    )

    @property
    def is_active(self) -> bool:
        return self.subscription_status == "active"
