"""Error taxonomy shared by services and the HTTP boundary.

Services raise these; ``menuscarta.main`` turns them into ``{"error": ...}``
JSON responses. Messages are user-facing and kept short and in Spanish.
"""

from __future__ import annotations


class AppError(Exception):
    """Base class for errors that map to a JSON error response."""

    status_code: int = 500
    default_message: str = "Error interno del servidor"

    def __init__(self, message: str | None = None, *, field: str | None = None) -> None:
        self.message = message or self.default_message
        self.field = field
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input: missing field, reserved slug, out-of-range value."""

    status_code = 400
    default_message = "Datos inválidos"


class NotFound(AppError):
    status_code = 404
    default_message = "No encontrado"


class Unauthenticated(AppError):
    status_code = 401
    default_message = "No autenticado"


class InvalidCredentials(Unauthenticated):
    """Raised for both unknown slug and wrong password."""

    default_message = "Slug o contraseña incorrectos"


class Forbidden(AppError):
    status_code = 403
    default_message = "No autorizado"


class Conflict(AppError):
    """Unique-constraint violation such as a duplicated slug."""

    status_code = 400
    default_message = "El recurso ya existe"


class InternalError(AppError):
    status_code = 500
