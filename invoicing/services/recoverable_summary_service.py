"""Recoverable charge totals split by invoicing stage."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import case, func, select

from invoicing.models import ChargeBearer, ChargeStatus, Invoice, InvoiceStatus, Task, TaskCharge
from invoicing.services.base_service import BaseService


def _bucket(condition):
    return func.coalesce(func.sum(case((condition, TaskCharge.amount), else_=0)), 0)


class RecoverableSummaryService(BaseService):
    """Sums client-borne unpaid charges: uninvoiced, on draft invoices, on issued invoices."""

    def get_recoverable_summary(self, entity_id: str | None = None) -> dict[str, Any]:
        stmt = (
            select(
                func.coalesce(func.sum(TaskCharge.amount), 0).label("total_recoverable"),
                _bucket(Task.invoice_internal_number.is_(None)).label("uninvoiced"),
                _bucket(Invoice.status == InvoiceStatus.DRAFT).label("draft_invoices"),
                _bucket(Invoice.status == InvoiceStatus.ISSUED).label("issued_pending"),
            )
            .select_from(TaskCharge)
            .join(Task, Task.id == TaskCharge.task_id)
            .outerjoin(Invoice, Invoice.internal_number == Task.invoice_internal_number)
            .where(
                TaskCharge.deleted_at.is_(None),
                TaskCharge.status == ChargeStatus.NOT_PAID,
                TaskCharge.bearer == ChargeBearer.CLIENT,
            )
        )
        if entity_id:
            stmt = stmt.where(Task.entity_id == entity_id)

        row = self.db.execute(stmt).one()
        return {key: Decimal(str(row._mapping[key] or 0)) for key in row._mapping.keys()}
