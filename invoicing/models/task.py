"""Billable work item model module."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from invoicing.models.base import AuditMixin, Base, UUIDPrimaryKeyMixin
from invoicing.models.enums import TaskStatus, TaskType


class Task(Base, UUIDPrimaryKeyMixin, AuditMixin):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("idx_tasks_invoice_internal_number", "invoice_internal_number"),
        Index("idx_tasks_entity_status", "entity_id", "status"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    entity_id: Mapped[str] = mapped_column(ForeignKey("entities.id", ondelete="RESTRICT"), nullable=False)
    status: Mapped[TaskStatus] = mapped_column(Enum(TaskStatus), default=TaskStatus.PENDING, nullable=False)
    task_type: Mapped[TaskType] = mapped_column(Enum(TaskType), default=TaskType.STANDARD, nullable=False)
    is_system: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    invoice_internal_number: Mapped[str | None] = mapped_column(
        ForeignKey("invoices.internal_number", ondelete="SET NULL"), nullable=True
    )
    invoiced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    charges = relationship(
        "TaskCharge",
        primaryjoin="and_(Task.id == TaskCharge.task_id, TaskCharge.deleted_at.is_(None))",
        order_by="TaskCharge.created_at",
        viewonly=True,
    )

    @property
    def is_adhoc(self) -> bool:
        return self.task_type == TaskType.SYSTEM_ADHOC and self.is_system
