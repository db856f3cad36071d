"""Theme, currency and branding schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel

from menuscarta.core.currencies import Currency
from menuscarta.core.themes import ThemePreset


class ThemeUpdate(BaseModel):
    """Branding settings saved from the tenant dashboard.

    ``logo_url`` may be an inline ``data:image/...;base64,`` payload (stored
    and replaced by its public URL), an existing URL, or empty to remove it.
    """

    theme_id: str | None = None
    currency: str | None = None
    restaurant_name: str | None = None
    logo_url: str | None = None
    logo_style: Literal["circular", "rectangular", "none"] | None = None
    timezone: str | None = None


class ThemeConfigResponse(BaseModel):
    theme_id: str
    theme_source: Literal["configured", "default"]
    theme: dict[str, Any]
    currency: str
    currency_source: Literal["configured", "default"]
    restaurant_name: str
    logo_url: str | None = None
    logo_style: str
    timezone: str
    updated_at: datetime


class ThemeListResponse(BaseModel):
    themes: list[ThemePreset]


class CurrencyListResponse(BaseModel):
    currencies: list[Currency]
