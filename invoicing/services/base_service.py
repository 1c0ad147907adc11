"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from invoicing.core.config import Config, get_config
import invoicing.database.db as db_module


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None, config: Config | None = None) -> None:
        self.db = db or db_module.SessionLocal()
        self.config = config or get_config()

    def commit(self) -> None:
        """Commit current transaction and rollback on failure."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def rollback(self) -> None:
        self.db.rollback()

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """Run the enclosed block atomically: commit on success, rollback on any error."""
        try:
            yield self.db
        except Exception:
            self.db.rollback()
            raise
        self.commit()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
