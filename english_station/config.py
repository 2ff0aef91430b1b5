import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///./english_station.db"


def _get_env(name: str, default: Optional[str] = None) -> Optional[str]:
    val = os.getenv(name, default)
    if val is None or val.strip() == "":
        return default
    return val.strip()


def _get_bool(name: str, default: bool = False) -> bool:
    val = _get_env(name)
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _parse_origins(raw: str) -> list[str]:
    raw = (raw or "").strip()
    if not raw:
        return ["*"]
    if raw == "*":
        return ["*"]
    return [o.strip() for o in raw.split(",") if o.strip()]


def _database_url() -> str:
    url = _get_env("DATABASE_URL")
    if url:
        return url
    # a hosted Supabase project exposes a plain Postgres URL
    supabase = _get_env("SUPABASE_URL")
    if supabase and supabase.startswith("postgres"):
        return supabase
    return DEFAULT_DATABASE_URL


@dataclass
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    port: int = 5000
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])
    jwt_secret: str = "dev-secret-change-me"
    access_token_ttl_minutes: int = 60
    sql_echo: bool = False
    log_level: str = "INFO"

    @property
    def allow_credentials(self) -> bool:
        # Browsers reject "*" with credentials
        return self.cors_origins != ["*"]


def load_settings() -> Settings:
    load_dotenv()

    url = _database_url()
    # SQLAlchemy dropped the "postgres://" alias
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]

    return Settings(
        database_url=url,
        port=int(_get_env("PORT", "5000")),
        cors_origins=_parse_origins(_get_env("FRONTEND_URL", "http://localhost:3000")),
        jwt_secret=_get_env("JWT_SECRET", "dev-secret-change-me"),
        access_token_ttl_minutes=int(_get_env("ACCESS_TOKEN_TTL_MINUTES", "60")),
        sql_echo=_get_bool("SQL_ECHO"),
        log_level=_get_env("LOG_LEVEL", "INFO").upper(),
    )
