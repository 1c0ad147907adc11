"""Dependency providers for API handlers."""

from __future__ import annotations

from collections.abc import Generator
from dataclasses import dataclass

from fastapi import Header, HTTPException, status
from sqlalchemy.orm import Session

from invoicing.database.db import get_db


@dataclass(frozen=True)
class CurrentUser:
    user_id: str


def get_db_session() -> Generator[Session, None, None]:
    """Yield SQLAlchemy session for dependency injection."""
    yield from get_db()


def get_current_user(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> CurrentUser:
    """Resolve the acting user forwarded by the upstream gateway."""
    if x_user_id is None or not x_user_id.strip():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="X-User-Id header is required.")
    return CurrentUser(user_id=x_user_id.strip())
