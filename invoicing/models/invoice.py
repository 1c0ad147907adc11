"""Invoice model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicing.models.base import AuditMixin, Base, UUIDPrimaryKeyMixin
from invoicing.models.enums import InvoiceStatus


class Invoice(Base, UUIDPrimaryKeyMixin, AuditMixin):
    __tablename__ = "invoices"
    __table_args__ = (
        Index("idx_invoices_entity_status", "entity_id", "status"),
        Index("idx_invoices_company_profile", "company_profile_id"),
    )

    internal_number: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    external_number: Mapped[str | None] = mapped_column(String(50))
    status: Mapped[InvoiceStatus] = mapped_column(Enum(InvoiceStatus), default=InvoiceStatus.DRAFT, nullable=False)
    invoice_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    issued_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    paid_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    entity_id: Mapped[str] = mapped_column(ForeignKey("entities.id", ondelete="RESTRICT"), nullable=False)
    company_profile_id: Mapped[str] = mapped_column(
        ForeignKey("company_profiles.id", ondelete="RESTRICT"), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    created_by: Mapped[str | None] = mapped_column(String(64))

    entity = relationship("Entity")
    company_profile = relationship("CompanyProfile")
