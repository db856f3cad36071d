"""Session lifecycle endpoints: login, logout and the current session."""

import logging

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from menuscarta.auth import get_optional_session, logout, set_session_cookie
from menuscarta.core.security import SessionData, create_session_token
from menuscarta.db.session import get_db
from menuscarta.schemas.auth import LoginRequest, LoginResponse, LogoutResponse, SessionResponse, SessionRestaurant
from menuscarta.services.account_service import authenticate

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> LoginResponse:
    session = authenticate(db, payload.slug, payload.password)
    token = create_session_token(session)
    set_session_cookie(response, token)
    return LoginResponse(
        is_demo=session.is_demo,
        is_admin=session.is_admin,
        restaurant=SessionRestaurant(id=session.restaurant_id, name=session.name, slug=session.slug),
        access_token=token,
    )


@router.post("/logout", response_model=LogoutResponse)
def logout_endpoint(response: Response) -> LogoutResponse:
    logout(response)
    return LogoutResponse()


@router.get("/session", response_model=SessionResponse)
def current_session(session: SessionData | None = Depends(get_optional_session)) -> SessionResponse | JSONResponse:
    if session is None:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"session": None})
    return SessionResponse(session=session)
