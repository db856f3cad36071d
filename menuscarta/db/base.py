"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from menuscarta.models import inventory as _inventory  # noqa: E402,F401
from menuscarta.models import menu as _menu  # noqa: E402,F401
from menuscarta.models import promotion as _promotion  # noqa: E402,F401
from menuscarta.models import restaurant as _restaurant  # noqa: E402,F401
