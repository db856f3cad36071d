"""Authentication-related request and response schemas."""

from pydantic import BaseModel

from menuscarta.core.security import SessionData


class LoginRequest(BaseModel):
    """Payload for tenant or superadmin login."""

    slug: str = ""
    password: str = ""


class SessionRestaurant(BaseModel):
    id: int
    name: str
    slug: str


class LoginResponse(BaseModel):
    """Login result; the session itself travels in the cookie."""

    success: bool = True
    is_demo: bool = False
    is_admin: bool = False
    restaurant: SessionRestaurant
    access_token: str
    token_type: str = "bearer"


class SessionResponse(BaseModel):
    session: SessionData | None = None


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Sesión cerrada correctamente"
