"""Charge ledger model module."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import Enum, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from invoicing.models.base import AuditMixin, Base, UUIDPrimaryKeyMixin
from invoicing.models.enums import ChargeBearer, ChargeStatus, ChargeType


class TaskCharge(Base, UUIDPrimaryKeyMixin, AuditMixin):
    __tablename__ = "task_charges"
    __table_args__ = (
        Index("idx_task_charges_task", "task_id"),
        Index("idx_task_charges_status_bearer", "status", "bearer"),
    )

    task_id: Mapped[str] = mapped_column(ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    charge_type: Mapped[ChargeType] = mapped_column(Enum(ChargeType), nullable=False)
    status: Mapped[ChargeStatus] = mapped_column(Enum(ChargeStatus), default=ChargeStatus.NOT_PAID, nullable=False)
    bearer: Mapped[ChargeBearer] = mapped_column(Enum(ChargeBearer), default=ChargeBearer.CLIENT, nullable=False)
    remark: Mapped[str | None] = mapped_column(Text)
