"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "MenusCarta API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./menuscarta.db")
    session_secret: str = getenv("SESSION_SECRET", "dev-session-secret-change-me")
    session_algorithm: str = getenv("SESSION_ALGORITHM", "HS256")
    session_max_age_seconds: int = int(getenv("SESSION_MAX_AGE_SECONDS", str(60 * 60 * 24 * 7)))
    session_cookie_name: str = getenv("SESSION_COOKIE_NAME", "session")
    session_cookie_secure: bool = getenv("SESSION_COOKIE_SECURE", "0") == "1"
    password_hash_rounds: int = int(getenv("PASSWORD_HASH_ROUNDS", "29000"))
    admin_slug: str = "restoranmaestroadmin"
    admin_name: str = getenv("ADMIN_NAME", "Administrador")
    admin_password: str = getenv("ADMIN_PASSWORD", "")
    data_dir: str = getenv("DATA_DIR", "./data")
    default_timezone: str = getenv("DEFAULT_TIMEZONE", "America/Santiago")


settings: Settings = Settings()
