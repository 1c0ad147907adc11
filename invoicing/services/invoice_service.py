"""Invoice service for reads and single-invoice lifecycle operations."""

from __future__ import annotations

import logging
import math
from typing import Any

from sqlalchemy import func, or_, select

from invoicing.core.exceptions import ValidationError
from invoicing.lifecycle.state_machine import apply_status_change, ensure_valid_transition
from invoicing.models import Invoice, InvoiceStatus
from invoicing.models.base import utcnow
from invoicing.services.base_service import BaseService
from invoicing.services.invoice_builder import ensure_draft
from invoicing.services.invoice_formatting import format_invoice
from invoicing.services.invoice_queries import (
    count_linked_tasks,
    fetch_invoice_full,
    release_linked_tasks,
    require_active_company_profile,
    require_invoice,
)

logger = logging.getLogger(__name__)

DATE_FILTER_FIELDS = {
    "invoice_date": Invoice.invoice_date,
    "issued_at": Invoice.issued_at,
    "paid_at": Invoice.paid_at,
    "created_at": Invoice.created_at,
}

EDITABLE_INFO_FIELDS = ("company_profile_id", "invoice_date", "external_number", "notes")


def _int_filter(filters: dict[str, Any], key: str, default: int) -> int:
    value = filters.get(key)
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{key} must be an integer") from exc


class InvoiceService(BaseService):
    """Service for invoice reads, metadata edits, status changes, unlink and cancel."""

    def get_invoices(self, filters: dict[str, Any] | None = None) -> dict[str, Any]:
        filters = filters or {}
        page = _int_filter(filters, "page", 1)
        page_size = _int_filter(filters, "page_size", self.config.INVOICE_DEFAULT_PAGE_SIZE)
        if page < 1:
            raise ValidationError("page must be >= 1")
        if not 1 <= page_size <= self.config.INVOICE_MAX_PAGE_SIZE:
            raise ValidationError(f"page_size must be between 1 and {self.config.INVOICE_MAX_PAGE_SIZE}")

        conditions = []
        if filters.get("entity_id"):
            conditions.append(Invoice.entity_id == filters["entity_id"])
        if filters.get("company_profile_id"):
            conditions.append(Invoice.company_profile_id == filters["company_profile_id"])
        if filters.get("status"):
            try:
                conditions.append(Invoice.status == InvoiceStatus(filters["status"]))
            except ValueError as exc:
                raise ValidationError(f"Unknown invoice status: {filters['status']}") from exc

        date_field = filters.get("date_field") or "invoice_date"
        if date_field not in DATE_FILTER_FIELDS:
            raise ValidationError(f"Unsupported date_field: {date_field}")
        column = DATE_FILTER_FIELDS[date_field]
        if filters.get("from_date"):
            conditions.append(column >= filters["from_date"])
        if filters.get("to_date"):
            conditions.append(column <= filters["to_date"])

        search = (filters.get("search") or "").strip().lower()
        if search:
            conditions.append(
                or_(
                    func.lower(Invoice.internal_number) == search,
                    func.lower(Invoice.external_number) == search,
                )
            )

        total = self.db.execute(select(func.count()).select_from(Invoice).where(*conditions)).scalar_one()
        rows = (
            self.db.execute(
                select(Invoice)
                .where(*conditions)
                .order_by(Invoice.created_at.desc(), Invoice.id)
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            .scalars()
            .all()
        )

        return {
            "items": [format_invoice(invoice) for invoice in rows],
            "pagination": {
                "page": page,
                "page_size": page_size,
                "total_items": total,
                "total_pages": math.ceil(total / page_size),
                "has_more": page * page_size < total,
            },
        }

    def get_invoice_details(self, internal_number: str) -> dict[str, Any]:
        return fetch_invoice_full(self.db, internal_number)

    def update_invoice_info(self, invoice_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Edit draft-only metadata; ``status`` is never touched here."""
        with self.transaction():
            invoice = require_invoice(self.db, invoice_id, for_update=True)
            ensure_draft(invoice)

            changes = {key: data[key] for key in EDITABLE_INFO_FIELDS if data.get(key) is not None}
            if "company_profile_id" in changes and changes["company_profile_id"] != invoice.company_profile_id:
                require_active_company_profile(self.db, changes["company_profile_id"])
            for key, value in changes.items():
                setattr(invoice, key, value)

        logger.info(
            "invoice.info_updated",
            extra={"event": "invoice.info_updated", "invoice_id": invoice_id, "fields": sorted(changes)},
        )
        return format_invoice(invoice)

    def update_invoice_status(self, invoice_id: str, status: InvoiceStatus | str) -> dict[str, Any]:
        try:
            target = InvoiceStatus(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown invoice status: {status}") from exc

        with self.transaction():
            invoice = require_invoice(self.db, invoice_id, for_update=True)
            previous = invoice.status
            ensure_valid_transition(previous, target)

            if target == InvoiceStatus.ISSUED:
                if not invoice.external_number:
                    raise ValidationError("Update invoice number before issuing")
                if count_linked_tasks(self.db, invoice.internal_number) == 0:
                    raise ValidationError("Cannot issue an invoice with no linked tasks")
            if target == InvoiceStatus.CANCELLED:
                release_linked_tasks(self.db, invoice.internal_number)

            apply_status_change(invoice, target, utcnow())

        logger.info(
            "invoice.status_changed",
            extra={
                "event": "invoice.status_changed",
                "invoice_id": invoice_id,
                "from_status": previous.value,
                "to_status": target.value,
            },
        )
        return format_invoice(invoice)

    def unlink_tasks_from_invoice(self, invoice_id: str, task_ids: list[str]) -> dict[str, Any]:
        if not task_ids:
            raise ValidationError("No tasks selected")

        with self.transaction():
            invoice = require_invoice(self.db, invoice_id, for_update=True)
            ensure_draft(invoice)
            unlinked = set(release_linked_tasks(self.db, invoice.internal_number, task_ids=list(task_ids)))

        unlinked_task_ids = [task_id for task_id in dict.fromkeys(task_ids) if task_id in unlinked]
        logger.info(
            "invoice.tasks_unlinked",
            extra={
                "event": "invoice.tasks_unlinked",
                "invoice_id": invoice_id,
                "requested": len(task_ids),
                "unlinked": len(unlinked_task_ids),
            },
        )
        return {"invoice_id": invoice_id, "unlinked_task_ids": unlinked_task_ids}

    def cancel_invoice(self, invoice_id: str) -> dict[str, Any]:
        """Release every linked task and force the invoice to CANCELLED.

        Cancellation always wins: unlike ``update_invoice_status`` this does not
        consult the transition table and succeeds from any current status.
        """
        with self.transaction():
            invoice = require_invoice(self.db, invoice_id, for_update=True)
            previous = invoice.status
            released = release_linked_tasks(self.db, invoice.internal_number)
            invoice.status = InvoiceStatus.CANCELLED

        logger.info(
            "invoice.cancelled",
            extra={
                "event": "invoice.cancelled",
                "invoice_id": invoice_id,
                "from_status": previous.value,
                "released_task_count": len(released),
            },
        )
        return {"invoice_id": invoice_id, "status": InvoiceStatus.CANCELLED.value, "groups": []}

