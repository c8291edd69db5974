"""Paramètres du service de catalogue, lus depuis l'environnement et un fichier d'env.

Le fichier d'env retenu est, dans l'ordre: la valeur de `ENV_FILE`, puis `.env.<APP_ENV>` s'il
existe dans le répertoire courant, puis `.env`.
"""

import os
from pathlib import Path

from pydantic import AnyHttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


def _resolve_env_file() -> Path:
    explicit = os.getenv("ENV_FILE")
    if explicit:
        return Path(explicit)
    base = Path.cwd()
    per_env = base / f".env.{os.getenv('APP_ENV', 'dev')}"
    return per_env if per_env.exists() else base / ".env"


class Settings(BaseSettings):
    """Configuration de l'API (noms de variables insensibles à la casse)."""

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file(),
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    # Service HTTP
    APP_NAME: str = "diveatlas-api"
    APP_ENV: str = "dev"
    APP_DEBUG: bool = False
    APP_HOST: str = "0.0.0.0"
    APP_PORT: int = 8000
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[AnyHttpUrl] | list[str] = []

    # Stockage: sans URL, SQLite en mémoire (dev/tests). En production le schéma vient d'Alembic.
    DATABASE_URL: str | None = None
    DB_ECHO: bool = False
    AUTO_CREATE_TABLES: bool = True

    # Sessions
    JWT_SECRET: str = "dev-secret-change-me"
    JWT_ALG: str = "HS256"
    JWT_EXPIRES_MIN: int = 60

    # Pagination du catalogue
    DEFAULT_PAGE_SIZE: int = 12
    MAX_PAGE_SIZE: int = 100

    OTLP_ENDPOINT: str | None = None


def get_settings() -> Settings:
    """Nouvelle instance de configuration (relit l'environnement à chaque appel)."""
    return Settings()
