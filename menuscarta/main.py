"""FastAPI application entrypoint."""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from menuscarta.api.api import api_router
from menuscarta.core.config import settings
from menuscarta.core.errors import AppError
from menuscarta.db import session as db_session
from menuscarta.db.base import Base
from menuscarta.db.migrations import ensure_sqlite_schema
from menuscarta.services.account_service import ensure_default_admin

logger = logging.getLogger(__name__)

HTTP_ERROR_MESSAGES: dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: "No autenticado",
    status.HTTP_403_FORBIDDEN: "No autorizado",
    status.HTTP_404_NOT_FOUND: "No encontrado",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Método no permitido",
}

app = FastAPI(title=settings.app_name, debug=settings.debug)
app.include_router(api_router, prefix="/api")


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("[ERROR] %s %s failed: %s", request.method, request.url.path, exc.message)
    content: dict[str, str] = {"error": exc.message}
    if exc.field:
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    content: dict[str, str] = {"error": "Datos inválidos"}
    if errors:
        location = [str(part) for part in errors[0].get("loc", ()) if part != "body"]
        if location:
            content["field"] = ".".join(location)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[ERROR] Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Error interno del servidor"},
    )


@app.on_event("startup")
def startup() -> None:
    secret_from_env = bool(os.getenv("SESSION_SECRET"))
    logger.info("Session secret source: %s", "env" if secret_from_env else "fallback")
    if not secret_from_env:
        logger.warning("SESSION_SECRET not set; using development fallback secret.")
    Base.metadata.create_all(bind=db_session.engine)
    ensure_sqlite_schema(db_session.engine)
    with db_session.SessionLocal() as session:
        try:
            admin_present = ensure_default_admin(session)
            logger.info("[BOOTSTRAP] superadmin present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Superadmin bootstrap failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
