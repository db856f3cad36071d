"""Per-tenant image files under ``DATA_DIR/restaurants/<slug>/images``.

Uploads arrive as inline ``data:image/<type>;base64,<payload>`` strings and
are exposed through ``/api/restaurants/<slug>/images/<filename>``. Writes to
the same logo are last-write-wins.
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
from pathlib import Path
from uuid import uuid4

from menuscarta.core.config import settings
from menuscarta.core.errors import NotFound, ValidationError
from menuscarta.utils.slugify import is_valid_slug

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r"^data:image/([\w.+-]+);base64,(.+)$", re.DOTALL)
CACHE_CONTROL: str = "public, max-age=31536000, immutable"
MAX_IMAGE_BYTES: int = 5 * 1024 * 1024

CONTENT_TYPES: dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
}
_SUBTYPE_EXTENSIONS: dict[str, str] = {"jpeg": "jpg", "svg+xml": "svg"}


def images_dir(slug: str) -> Path:
    return Path(settings.data_dir) / "restaurants" / slug / "images"


def public_url(slug: str, filename: str) -> str:
    return f"/api/restaurants/{slug}/images/{filename}"


def is_data_url(value: str | None) -> bool:
    return bool(value) and value.startswith("data:image/")


def content_type_for(filename: str) -> str:
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return CONTENT_TYPES.get(extension, "application/octet-stream")


def save_data_url(slug: str, data_url: str, prefix: str = "image") -> str:
    """Decode and store an inline image, returning its public URL."""
    match = DATA_URL_PATTERN.match(data_url.strip())
    if match is None:
        raise ValidationError("Imagen con formato inválido", field="image")
    subtype = match.group(1).lower()
    extension = _SUBTYPE_EXTENSIONS.get(subtype, subtype)
    if extension not in CONTENT_TYPES:
        raise ValidationError("Formato de imagen no soportado", field="image")

    try:
        payload = base64.b64decode(match.group(2), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Imagen con formato inválido", field="image") from exc
    if not payload:
        raise ValidationError("Imagen vacía", field="image")
    if len(payload) > MAX_IMAGE_BYTES:
        raise ValidationError("La imagen supera el tamaño máximo de 5 MB", field="image")

    directory = images_dir(slug)
    directory.mkdir(parents=True, exist_ok=True)
    filename = f"{prefix}-{uuid4().hex[:12]}.{extension}"
    (directory / filename).write_bytes(payload)
    logger.info("[IMAGES] Stored %s (%d bytes) for slug=%s", filename, len(payload), slug)
    return public_url(slug, filename)


def delete_image(slug: str, url: str | None) -> None:
    """Remove a stored image; URLs outside the tenant's image folder are ignored."""
    prefix = public_url(slug, "")
    if not url or not url.startswith(prefix):
        return
    filename = url[len(prefix):]
    if not _is_safe_filename(filename):
        return
    (images_dir(slug) / filename).unlink(missing_ok=True)
    logger.info("[IMAGES] Deleted %s for slug=%s", filename, slug)


def rebase_url(old_slug: str, new_slug: str, url: str | None) -> str | None:
    """Point a stored image URL at the renamed tenant; other URLs pass through."""
    prefix = public_url(old_slug, "")
    if url and url.startswith(prefix):
        return public_url(new_slug, url[len(prefix):])
    return url


def move_images(old_slug: str, new_slug: str) -> None:
    """Move a tenant's stored images after a slug rename."""
    source = images_dir(old_slug)
    if not source.is_dir():
        return
    target = images_dir(new_slug)
    target.mkdir(parents=True, exist_ok=True)
    moved = 0
    for path in source.iterdir():
        path.replace(target / path.name)
        moved += 1
    source.rmdir()
    logger.info("[IMAGES] Moved %d images from slug=%s to slug=%s", moved, old_slug, new_slug)


def replace_image(slug: str, current_url: str | None, new_value: str | None, prefix: str = "image") -> str | None:
    """Apply an image field edit: upload, keep, swap to an external URL, or remove."""
    value = (new_value or "").strip()
    if is_data_url(value):
        stored_url = save_data_url(slug, value, prefix)
        delete_image(slug, current_url)
        return stored_url
    if not value:
        delete_image(slug, current_url)
        return None
    if current_url and current_url != value:
        delete_image(slug, current_url)
    return value


def _is_safe_filename(filename: str) -> bool:
    return bool(filename) and "/" not in filename and "\\" not in filename and filename not in {".", ".."}


def resolve_image_path(slug: str, filename: str) -> Path:
    """Locate a stored image; path separators in ``filename`` are rejected."""
    if not _is_safe_filename(filename) or not is_valid_slug(slug):
        raise ValidationError("Nombre de archivo inválido", field="filename")
    path = images_dir(slug) / filename
    if not path.is_file():
        raise NotFound("Imagen no encontrada")
    return path
