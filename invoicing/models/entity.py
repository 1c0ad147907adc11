"""Billed-party (client) model module."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from invoicing.models.base import AuditMixin, Base, UUIDPrimaryKeyMixin


class Entity(Base, UUIDPrimaryKeyMixin, AuditMixin):
    __tablename__ = "entities"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320))
    status: Mapped[str] = mapped_column(String(40), default="ACTIVE", nullable=False)
