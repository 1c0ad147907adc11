"""Configuration module for the invoicing engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import urlparse

from dotenv import load_dotenv

from invoicing.core.exceptions import ConfigurationError

load_dotenv()


def _as_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Runtime configuration with validation."""

    APP_NAME: str
    APP_VERSION: str
    ENV: str
    DEBUG: bool
    DATABASE_URL: str
    DB_CONNECTIVITY_REQUIRED: bool
    API_PREFIX: str
    LOG_LEVEL: str
    LOG_FILE: str
    INVOICE_NUMBER_PREFIX: str
    INVOICE_MAX_TASKS_PER_REQUEST: int
    INVOICE_DEFAULT_PAGE_SIZE: int
    INVOICE_MAX_PAGE_SIZE: int
    BULK_PAID_BACKFILL_ISSUED_AT: bool

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"


def _build_config(env: str | None = None) -> Config:
    resolved_env = (env or os.getenv("ENV", "development")).strip().lower()
    debug = _as_bool(os.getenv("DEBUG"), default=False)

    config = Config(
        APP_NAME="invoicing-engine",
        APP_VERSION=os.getenv("APP_VERSION", "1.0.0"),
        ENV=resolved_env,
        DEBUG=debug if resolved_env != "production" else False,
        DATABASE_URL=os.getenv("DATABASE_URL", "sqlite:///./invoicing.db"),
        DB_CONNECTIVITY_REQUIRED=_as_bool(
            os.getenv("DB_CONNECTIVITY_REQUIRED"), default=(resolved_env == "production")
        ),
        API_PREFIX=os.getenv("API_PREFIX", "/api/v1"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_FILE=os.getenv("LOG_FILE", ""),
        INVOICE_NUMBER_PREFIX=os.getenv("INVOICE_NUMBER_PREFIX", "INV").strip(),
        INVOICE_MAX_TASKS_PER_REQUEST=int(os.getenv("INVOICE_MAX_TASKS_PER_REQUEST", "100")),
        INVOICE_DEFAULT_PAGE_SIZE=int(os.getenv("INVOICE_DEFAULT_PAGE_SIZE", "50")),
        INVOICE_MAX_PAGE_SIZE=int(os.getenv("INVOICE_MAX_PAGE_SIZE", "100")),
        BULK_PAID_BACKFILL_ISSUED_AT=_as_bool(os.getenv("BULK_PAID_BACKFILL_ISSUED_AT"), default=True),
    )
    _validate_config(config)
    return config


def _validate_database_url(database_url: str) -> None:
    parsed = urlparse(database_url)
    if parsed.scheme not in {"sqlite", "postgresql", "postgresql+psycopg2"}:
        raise ConfigurationError(
            "DATABASE_URL must use sqlite:// or postgresql:// style URL."
        )
    if parsed.scheme.startswith("postgresql") and not parsed.hostname:
        raise ConfigurationError("PostgreSQL DATABASE_URL is missing hostname.")


def _validate_config(config: Config) -> None:
    _validate_database_url(config.DATABASE_URL)

    if config.LOG_LEVEL not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigurationError("LOG_LEVEL must be one of DEBUG/INFO/WARNING/ERROR/CRITICAL.")
    if not config.INVOICE_NUMBER_PREFIX.isalnum():
        raise ConfigurationError("INVOICE_NUMBER_PREFIX must be alphanumeric.")
    if config.INVOICE_MAX_TASKS_PER_REQUEST < 1:
        raise ConfigurationError("INVOICE_MAX_TASKS_PER_REQUEST must be >= 1.")
    if config.INVOICE_MAX_PAGE_SIZE < 1:
        raise ConfigurationError("INVOICE_MAX_PAGE_SIZE must be >= 1.")
    if not 1 <= config.INVOICE_DEFAULT_PAGE_SIZE <= config.INVOICE_MAX_PAGE_SIZE:
        raise ConfigurationError("INVOICE_DEFAULT_PAGE_SIZE must be between 1 and INVOICE_MAX_PAGE_SIZE.")
    if config.is_production and "change_me" in config.DATABASE_URL.lower():
        raise ConfigurationError("Production DATABASE_URL uses placeholder credentials.")


@lru_cache(maxsize=8)
def get_config(env: str | None = None) -> Config:
    """Get validated configuration for the requested environment."""
    return _build_config(env)
