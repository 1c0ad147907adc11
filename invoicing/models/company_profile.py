"""Issuing legal entity model module."""

from __future__ import annotations

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from invoicing.models.base import AuditMixin, Base, UUIDPrimaryKeyMixin


class CompanyProfile(Base, UUIDPrimaryKeyMixin, AuditMixin):
    __tablename__ = "company_profiles"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
