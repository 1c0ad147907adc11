"""Bulk invoice status actions with per-invoice isolation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from invoicing.core.exceptions import ValidationError
from invoicing.lifecycle.state_machine import apply_status_change, ensure_valid_transition
from invoicing.models import BulkInvoiceAction, InvoiceStatus
from invoicing.models.base import utcnow
from invoicing.services.base_service import BaseService
from invoicing.services.invoice_queries import count_linked_tasks, get_invoice_by_id

logger = logging.getLogger(__name__)

ACTION_TARGETS: dict[str, InvoiceStatus] = {
    BulkInvoiceAction.MARK_ISSUED.value: InvoiceStatus.ISSUED,
    BulkInvoiceAction.MARK_PAID.value: InvoiceStatus.PAID,
    BulkInvoiceAction.MARK_DRAFT.value: InvoiceStatus.DRAFT,
}

ALREADY_AT_TARGET: dict[InvoiceStatus, str] = {
    InvoiceStatus.ISSUED: "ALREADY_ISSUED",
    InvoiceStatus.PAID: "ALREADY_PAID",
    InvoiceStatus.DRAFT: "ALREADY_DRAFT",
}


@dataclass(frozen=True)
class Success:
    invoice_id: str


@dataclass(frozen=True)
class Ignored:
    invoice_id: str
    reason: str


@dataclass(frozen=True)
class Rejected:
    invoice_id: str
    reason: str


Outcome = Success | Ignored | Rejected


@dataclass
class BulkActionResult:
    success: list[str] = field(default_factory=list)
    ignored: list[dict[str, str]] = field(default_factory=list)
    rejected: list[dict[str, str]] = field(default_factory=list)

    def record(self, outcome: Outcome) -> None:
        if isinstance(outcome, Success):
            self.success.append(outcome.invoice_id)
        elif isinstance(outcome, Ignored):
            self.ignored.append({"id": outcome.invoice_id, "reason": outcome.reason})
        else:
            self.rejected.append({"id": outcome.invoice_id, "reason": outcome.reason})

    def as_dict(self) -> dict[str, Any]:
        return {"success": self.success, "ignored": self.ignored, "rejected": self.rejected}


class BulkInvoiceActionService(BaseService):
    """Applies one action across many invoices, one transaction per invoice."""

    def bulk_invoice_action(self, invoice_ids: list[str], action: str) -> dict[str, Any]:
        """Classify every id into success, ignored or rejected; never raises for a single invoice."""
        result = BulkActionResult()
        target = ACTION_TARGETS.get(action.value if isinstance(action, BulkInvoiceAction) else str(action))

        for invoice_id in invoice_ids:
            if target is None:
                result.record(Rejected(invoice_id, "UNKNOWN_ACTION"))
                continue
            try:
                with self.transaction():
                    outcome = self._apply(invoice_id, target)
            except Exception:
                logger.exception(
                    "invoice.bulk_action.internal_error",
                    extra={"event": "invoice.bulk_action.internal_error", "invoice_id": invoice_id, "action": str(action)},
                )
                outcome = Rejected(invoice_id, "INTERNAL_ERROR")
            result.record(outcome)

        logger.info(
            "invoice.bulk_action.completed",
            extra={
                "event": "invoice.bulk_action.completed",
                "action": str(action),
                "success": len(result.success),
                "ignored": len(result.ignored),
                "rejected": len(result.rejected),
            },
        )
        return result.as_dict()

    def _apply(self, invoice_id: str, target: InvoiceStatus) -> Outcome:
        invoice = get_invoice_by_id(self.db, invoice_id, for_update=True)
        if invoice is None:
            return Rejected(invoice_id, "NOT_FOUND")
        if invoice.status == target:
            return Ignored(invoice_id, ALREADY_AT_TARGET[target])

        try:
            ensure_valid_transition(invoice.status, target)
        except ValidationError as exc:
            return Rejected(invoice_id, str(exc))

        if target == InvoiceStatus.ISSUED:
            if not invoice.external_number:
                return Rejected(invoice_id, "MISSING_EXTERNAL_NUMBER")
            if count_linked_tasks(self.db, invoice.internal_number) == 0:
                return Rejected(invoice_id, "NO_TASKS_LINKED")

        apply_status_change(
            invoice,
            target,
            utcnow(),
            backfill_issued_at=self.config.BULK_PAID_BACKFILL_ISSUED_AT,
        )
        return Success(invoice_id)
