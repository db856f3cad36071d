"""Request-boundary session helpers.

The only place that reads the session cookie or the Authorization header.
"""

from fastapi import Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from menuscarta.core.config import settings
from menuscarta.core.errors import Unauthenticated
from menuscarta.core.security import SessionData, require_admin, require_session

bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)


def read_session_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def get_current_session(token: str | None = Depends(read_session_token)) -> SessionData:
    return require_session(token)


def get_optional_session(token: str | None = Depends(read_session_token)) -> SessionData | None:
    if not token:
        return None
    try:
        return require_session(token)
    except Unauthenticated:
        return None


def get_admin_session(session: SessionData = Depends(get_current_session)) -> SessionData:
    return require_admin(session)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )


def logout(response: Response) -> None:
    """Clear the session cookie; safe to call without a session."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
