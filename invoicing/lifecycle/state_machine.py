"""Invoice status transition table and its timestamp side effects.

Both the single-invoice update path and the bulk coordinator validate through
``ensure_valid_transition`` and mutate through ``apply_status_change`` so the
two cannot drift apart.
"""

from __future__ import annotations

from datetime import datetime

from invoicing.core.exceptions import ValidationError
from invoicing.models.enums import InvoiceStatus


class InvalidTransitionError(ValidationError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Directed transition graph keyed by status value."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def allowed_targets(self, current: str) -> set[str]:
        return set(self._transitions.get(current, set()))

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            allowed = ", ".join(sorted(self.allowed_targets(current))) or "none"
            raise InvalidTransitionError(f"Invalid status transition: {current} → {target} (allowed: {allowed})")


INVOICE_TRANSITIONS: dict[str, set[str]] = {
    InvoiceStatus.DRAFT.value: {InvoiceStatus.ISSUED.value, InvoiceStatus.CANCELLED.value},
    InvoiceStatus.ISSUED.value: {
        InvoiceStatus.DRAFT.value,
        InvoiceStatus.PAID.value,
        InvoiceStatus.CANCELLED.value,
    },
    InvoiceStatus.PAID.value: {
        InvoiceStatus.DRAFT.value,
        InvoiceStatus.ISSUED.value,
        InvoiceStatus.CANCELLED.value,
    },
    InvoiceStatus.CANCELLED.value: {InvoiceStatus.DRAFT.value},
}

invoice_state_machine = StateMachine(INVOICE_TRANSITIONS)


def _status_value(status: InvoiceStatus | str) -> str:
    return status.value if isinstance(status, InvoiceStatus) else str(status)


def ensure_valid_transition(current: InvoiceStatus | str, target: InvoiceStatus | str) -> None:
    """Raise ``InvalidTransitionError`` unless ``current -> target`` is in the table."""
    invoice_state_machine.assert_transition(_status_value(current), _status_value(target))


def apply_status_change(invoice, target: InvoiceStatus, now: datetime, backfill_issued_at: bool = True) -> None:
    """Set ``invoice.status`` to ``target`` and adjust lifecycle timestamps.

    Callers validate the transition first; this only performs the write.
    With ``backfill_issued_at`` false, a move to PAID leaves ``issued_at``
    untouched (legacy bulk behaviour).
    """
    target = InvoiceStatus(target)
    invoice.status = target

    if target == InvoiceStatus.DRAFT:
        invoice.issued_at = None
        invoice.paid_at = None
    elif target == InvoiceStatus.ISSUED:
        invoice.issued_at = now
        invoice.paid_at = None
    elif target == InvoiceStatus.PAID:
        invoice.paid_at = now
        if backfill_issued_at:
            invoice.issued_at = invoice.issued_at or now
