"""Slug helpers for tenant slugs and ingredient keys."""

from __future__ import annotations

import re
import unicodedata

SLUG_PATTERN = re.compile(r"^[a-z0-9_-]+$")


def slugify(text: str) -> str:
    """Convert text to a URL-friendly slug: "Carne de Cerdo" -> "carne-de-cerdo"."""
    normalized = unicodedata.normalize("NFD", str(text))
    stripped = "".join(char for char in normalized if unicodedata.category(char) != "Mn")
    value = stripped.lower().strip()
    value = re.sub(r"\s+", "-", value)
    value = re.sub(r"[^\w-]+", "", value, flags=re.ASCII)
    value = re.sub(r"-{2,}", "-", value)
    return value.strip("-")


def generate_ingredient_id(name: str, existing_ids: set[str] | list[str]) -> str:
    """Slug the name, appending -2, -3, ... until it is unused."""
    base_slug = slugify(name)
    if base_slug not in existing_ids:
        return base_slug
    counter = 2
    while f"{base_slug}-{counter}" in existing_ids:
        counter += 1
    return f"{base_slug}-{counter}"


def is_valid_slug(value: str) -> bool:
    return bool(SLUG_PATTERN.match(value))
