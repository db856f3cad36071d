"""Built-in theme presets available to every restaurant."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

DEFAULT_THEME_ID: str = "elegant"


class ThemePreset(BaseModel):
    id: str
    name: str
    description: str
    is_active: bool = True
    config: dict[str, Any]

    model_config = ConfigDict(frozen=True)


class ResolvedTheme(BaseModel):
    """Theme lookup result tagged with where the value came from."""

    theme: ThemePreset
    source: Literal["configured", "default"]


def _config(
    colors: tuple[str, str, str, str, str, str],
    font_family: str,
    heading_size: str,
    border_radius: str,
    spacing: tuple[str, str, str],
) -> dict[str, Any]:
    primary, secondary, accent, background, text, text_secondary = colors
    small, medium, large = spacing
    return {
        "colors": {
            "primary": primary,
            "secondary": secondary,
            "accent": accent,
            "background": background,
            "text": text,
            "textSecondary": text_secondary,
        },
        "typography": {
            "fontFamily": font_family,
            "fontSize": {"heading": heading_size, "body": "1rem", "small": "0.875rem"},
        },
        "borderRadius": border_radius,
        "spacing": {"small": small, "medium": medium, "large": large},
    }


THEME_PRESETS: dict[str, ThemePreset] = {
    "elegant": ThemePreset(
        id="elegant",
        name="Elegante",
        description="Diseño clásico y sofisticado para restaurantes formales",
        config=_config(
            ("#1C1C1E", "#8E8E93", "#C9A86A", "#FFFFFF", "#1C1C1E", "#8E8E93"),
            "'Playfair Display', serif",
            "2rem",
            "8px",
            ("0.5rem", "1rem", "2rem"),
        ),
    ),
    "modern": ThemePreset(
        id="modern",
        name="Moderno",
        description="Limpio y minimalista, ideal para cafés y restaurantes contemporáneos",
        config=_config(
            ("#007AFF", "#5AC8FA", "#FF9500", "#F2F2F7", "#000000", "#8E8E93"),
            "'Inter', -apple-system, sans-serif",
            "1.75rem",
            "16px",
            ("0.5rem", "1rem", "1.5rem"),
        ),
    ),
    "vibrant": ThemePreset(
        id="vibrant",
        name="Vibrante",
        description="Colores llamativos y energéticos para restaurantes casuales",
        config=_config(
            ("#FF2D55", "#FF9500", "#FFCC00", "#FFFFFF", "#1C1C1E", "#8E8E93"),
            "'Poppins', sans-serif",
            "2rem",
            "20px",
            ("0.75rem", "1.25rem", "2rem"),
        ),
    ),
    "dark": ThemePreset(
        id="dark",
        name="Oscuro",
        description="Estilo nocturno elegante para bares y restaurantes premium",
        config=_config(
            ("#0A84FF", "#5E5CE6", "#FFD60A", "#000000", "#FFFFFF", "#98989D"),
            "'Montserrat', sans-serif",
            "2rem",
            "12px",
            ("0.5rem", "1rem", "2rem"),
        ),
    ),
}


def resolve_theme(theme_id: str | None) -> ResolvedTheme:
    if theme_id and theme_id in THEME_PRESETS:
        return ResolvedTheme(theme=THEME_PRESETS[theme_id], source="configured")
    return ResolvedTheme(theme=THEME_PRESETS[DEFAULT_THEME_ID], source="default")


def list_themes() -> list[ThemePreset]:
    return list(THEME_PRESETS.values())
