"""Credential verification and superadmin bootstrap."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from menuscarta.core.config import settings
from menuscarta.core.errors import Forbidden, InvalidCredentials, ValidationError
from menuscarta.core.security import SessionData, dummy_verify, get_password_hash, verify_password
from menuscarta.models.restaurant import Restaurant
from menuscarta.services.restaurant_service import get_restaurant_by_slug

logger = logging.getLogger(__name__)

DEV_ADMIN_PASSWORD: str = "admin123"


def session_for(restaurant: Restaurant) -> SessionData:
    return SessionData(
        restaurant_id=restaurant.id,
        slug=restaurant.slug,
        owner_id=restaurant.id,
        name=restaurant.name,
        is_demo=bool(restaurant.is_demo),
        is_admin=bool(restaurant.is_admin),
    )


def authenticate(db: Session, slug: str, password: str) -> SessionData:
    """Verify slug and password and return the session to issue.

    Unknown slug and wrong password fail identically and take the same time.
    The account status is only revealed after the password matched.
    """
    slug_value = (slug or "").strip()
    if not slug_value or not password:
        raise ValidationError("Slug y contraseña son requeridos")

    restaurant = get_restaurant_by_slug(db, slug_value)
    if restaurant is None:
        dummy_verify()
        logger.info("[AUTH] Failed login attempt")
        raise InvalidCredentials()
    if not verify_password(password, restaurant.password_hash):
        logger.info("[AUTH] Failed login attempt")
        raise InvalidCredentials()
    if not restaurant.is_active:
        logger.info("[AUTH] Login refused for inactive account slug=%s", restaurant.slug)
        raise Forbidden("Esta cuenta está desactivada o suspendida")

    logger.info("[AUTH] Login ok slug=%s admin=%s", restaurant.slug, restaurant.is_admin)
    return session_for(restaurant)


def _admin_password() -> str | None:
    if settings.admin_password:
        return settings.admin_password
    if settings.app_env == "dev":
        return DEV_ADMIN_PASSWORD
    return None


def ensure_default_admin(db: Session) -> bool:
    """Ensure the reserved superadmin row exists and is usable.

    Returns:
        bool: True when the admin row existed before this call.
    """
    existing_admin = db.scalar(select(Restaurant).where(Restaurant.slug == settings.admin_slug).limit(1))
    if existing_admin is not None:
        updates_applied = False
        if not existing_admin.is_admin:
            existing_admin.is_admin = True
            updates_applied = True
            logger.warning("[BOOTSTRAP] Reserved admin row was missing the admin flag; fixed.")
        if existing_admin.subscription_status != "active":
            existing_admin.subscription_status = "active"
            updates_applied = True
            logger.info("[BOOTSTRAP] Admin exists but was inactive; account re-activated.")
        if updates_applied:
            db.commit()
        logger.info("[BOOTSTRAP] Admin exists")
        return True

    password = _admin_password()
    if password is None:
        logger.warning("[BOOTSTRAP] ADMIN_PASSWORD not set; superadmin account not created.")
        return False

    admin = Restaurant(
        slug=settings.admin_slug,
        name=settings.admin_name,
        password_hash=get_password_hash(password),
        subscription_status="active",
        is_admin=True,
        is_demo=False,
    )
    db.add(admin)
    db.commit()
    if not settings.admin_password:
        logger.warning("[SECURITY] Superadmin created with the development password. Set ADMIN_PASSWORD.")
    else:
        logger.info("[BOOTSTRAP] Superadmin account created.")
    return False
