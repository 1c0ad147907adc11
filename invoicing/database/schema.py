"""Alembic revision helpers shared by the migration entrypoint and startup checks."""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config as AlembicConfig
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy.engine import Engine

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def head_revision(database_url: str) -> str | None:
    """Latest revision shipped in ``migrations/versions``."""
    return ScriptDirectory.from_config(build_alembic_config(database_url)).get_current_head()


def current_revision(engine: Engine) -> str | None:
    """Revision stamped in the database's ``alembic_version`` table, or None if unmigrated."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()
