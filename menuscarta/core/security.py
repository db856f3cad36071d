"""Password hashing, session tokens and the authorization guards.

Guards take the session explicitly; only ``menuscarta.auth`` reads the
credential carrier from the request.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel
from pydantic import ValidationError as PayloadError

from menuscarta.core.config import settings
from menuscarta.core.errors import Forbidden, Unauthenticated

logger = logging.getLogger(__name__)

pwd_context: CryptContext = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__default_rounds=settings.password_hash_rounds,
)


class SessionData(BaseModel):
    """Identity carried by a session token.

    Tenant sessions are bound to one restaurant slug. The superadmin session
    has ``is_admin`` set and carries no tenant rights.
    """

    restaurant_id: int
    slug: str
    owner_id: int
    name: str
    is_demo: bool = False
    is_admin: bool = False


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("[AUTH] Stored password hash has an unknown format.")
        return False


def dummy_verify() -> None:
    """Spend the same time as a real verification when no hash exists."""
    pwd_context.dummy_verify()


def create_session_token(session: SessionData, expires_in: timedelta | None = None) -> str:
    """Sign the session claims into a JWT with an expiry."""
    lifetime = expires_in if expires_in is not None else timedelta(seconds=settings.session_max_age_seconds)
    to_encode: dict[str, Any] = session.model_dump()
    to_encode.update({"sub": session.slug, "exp": datetime.now(timezone.utc) + lifetime})
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> SessionData:
    """Decode and validate a session token."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.session_secret,
            algorithms=[settings.session_algorithm],
        )
    except JWTError as exc:
        raise Unauthenticated("Sesión inválida o expirada") from exc

    try:
        return SessionData.model_validate(payload)
    except PayloadError as exc:
        raise Unauthenticated("Sesión inválida o expirada") from exc


def require_session(token: str | None) -> SessionData:
    if not token:
        raise Unauthenticated()
    return decode_session_token(token)


def require_admin(session: SessionData) -> SessionData:
    if not session.is_admin:
        raise Forbidden("No autorizado. Solo administradores.")
    return session


def require_tenant_match(session: SessionData, slug: str) -> SessionData:
    """Allow only a tenant session bound to ``slug``; admin sessions are rejected too."""
    if session.is_admin or session.slug != slug:
        logger.info("[AUTH] Cross-tenant write rejected: session=%s target=%s", session.slug, slug)
        raise Forbidden()
    return session
