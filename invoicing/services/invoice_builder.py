"""Invoice builder: create a draft invoice or append tasks to an existing one."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import update

from invoicing.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from invoicing.models import Invoice, InvoiceStatus, Task, TaskStatus
from invoicing.models.base import utcnow
from invoicing.services.base_service import BaseService
from invoicing.services.invoice_queries import (
    fetch_invoice_full,
    get_invoice_by_internal_number,
    load_tasks,
    require_active_company_profile,
)
from invoicing.utils.ids import new_internal_number

logger = logging.getLogger(__name__)


def ensure_draft(invoice: Invoice) -> None:
    if invoice.status != InvoiceStatus.DRAFT:
        raise ForbiddenError("Invoice is not editable")


def task_violations(task: Task, entity_id: str) -> list[str]:
    """Reasons ``task`` cannot be attached to an invoice billed to ``entity_id``."""
    if task.entity_id != entity_id:
        return [f"Task {task.id}: belongs to different entity"]
    if task.invoice_internal_number:
        return [f"Task {task.id}: already invoiced"]
    if not task.charges:
        return [f"Task {task.id}: has no charges"]
    if not task.is_adhoc and task.status != TaskStatus.COMPLETED:
        status = task.status.value if isinstance(task.status, TaskStatus) else task.status
        return [f"Task {task.id}: must be COMPLETED (current: {status})"]
    return []


class InvoiceBuilderService(BaseService):
    """Creates or appends to draft invoices with all-or-nothing task attachment."""

    def create_or_append_invoice(
        self,
        entity_id: str,
        task_ids: list[str],
        created_by: str | None = None,
        invoice_internal_number: str | None = None,
        invoice_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        requested_ids = list(dict.fromkeys(task_ids or []))
        if not requested_ids:
            raise ValidationError("No tasks selected")
        if len(requested_ids) > self.config.INVOICE_MAX_TASKS_PER_REQUEST:
            raise ValidationError(
                f"Maximum {self.config.INVOICE_MAX_TASKS_PER_REQUEST} tasks per invoice request"
            )

        with self.transaction():
            if invoice_internal_number:
                invoice = self._load_appendable_invoice(invoice_internal_number, entity_id)
            else:
                invoice = self._create_draft_invoice(entity_id, invoice_data or {}, created_by)

            tasks = load_tasks(self.db, requested_ids)
            if len(tasks) != len(requested_ids):
                raise ValidationError("Some tasks not found")

            errors = [message for task in tasks for message in task_violations(task, entity_id)]
            if errors:
                raise ValidationError("Cannot invoice tasks:\n" + "\n".join(errors))

            self._claim_tasks(invoice, requested_ids, utcnow())
            internal_number = invoice.internal_number

        if not invoice_internal_number:
            logger.info(
                "invoice.created",
                extra={
                    "event": "invoice.created",
                    "invoice_id": invoice.id,
                    "internal_number": internal_number,
                    "entity_id": entity_id,
                    "created_by": created_by,
                },
            )
        logger.info(
            "invoice.tasks_attached",
            extra={
                "event": "invoice.tasks_attached",
                "invoice_id": invoice.id,
                "internal_number": internal_number,
                "task_count": len(requested_ids),
            },
        )
        return fetch_invoice_full(self.db, internal_number)

    def _load_appendable_invoice(self, internal_number: str, entity_id: str) -> Invoice:
        invoice = get_invoice_by_internal_number(self.db, internal_number, for_update=True)
        if invoice is None:
            raise NotFoundError("Invoice not found")
        ensure_draft(invoice)
        if invoice.entity_id != entity_id:
            raise ValidationError("Entity mismatch with existing invoice")
        return invoice

    def _create_draft_invoice(self, entity_id: str, invoice_data: dict[str, Any], created_by: str | None) -> Invoice:
        profile = require_active_company_profile(self.db, invoice_data.get("company_profile_id"))
        invoice = Invoice(
            entity_id=entity_id,
            internal_number=new_internal_number(self.config.INVOICE_NUMBER_PREFIX),
            status=InvoiceStatus.DRAFT,
            company_profile_id=profile.id,
            invoice_date=utcnow(),
            notes=invoice_data.get("notes"),
            created_by=created_by,
        )
        self.db.add(invoice)
        self.db.flush()
        return invoice

    def _claim_tasks(self, invoice: Invoice, task_ids: list[str], now: datetime) -> None:
        """Link ``task_ids`` to ``invoice`` in one conditional UPDATE.

        Only rows that are still unlinked are claimed; if another transaction
        got to any of them first the affected count falls short and the whole
        transaction is aborted.
        """
        result = self.db.execute(
            update(Task)
            .where(Task.id.in_(task_ids), Task.invoice_internal_number.is_(None))
            .values(invoice_internal_number=invoice.internal_number, invoiced_at=now)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != len(task_ids):
            logger.warning(
                "invoice.attach_race_detected",
                extra={
                    "event": "invoice.attach_race_detected",
                    "internal_number": invoice.internal_number,
                    "requested": len(task_ids),
                    "claimed": result.rowcount,
                },
            )
            raise ValidationError("Some tasks were invoiced concurrently. Please retry.")
