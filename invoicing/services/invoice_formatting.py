"""Read-time projections over loaded invoice, task and charge rows.

Nothing here touches the session; groups and totals are derived on every read
rather than stored.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from invoicing.models import ChargeBearer, ChargeStatus, CompanyProfile, Entity, Invoice, Task, TaskCharge, TaskType


def _value(item: Any) -> Any:
    return item.value if isinstance(item, enum.Enum) else item


def is_recoverable(charge: TaskCharge) -> bool:
    return (
        charge.deleted_at is None
        and charge.status == ChargeStatus.NOT_PAID
        and charge.bearer == ChargeBearer.CLIENT
    )


def recoverable_amount(charges: Iterable[TaskCharge]) -> Decimal:
    """Sum of undeleted NOT_PAID charges borne by the client."""
    return sum((Decimal(charge.amount) for charge in charges if is_recoverable(charge)), Decimal("0"))


def format_charge(charge: TaskCharge) -> dict[str, Any]:
    return {
        "id": charge.id,
        "title": charge.title,
        "amount": charge.amount,
        "charge_type": _value(charge.charge_type),
        "status": _value(charge.status),
        "bearer": _value(charge.bearer),
        "remark": charge.remark,
        "created_at": charge.created_at,
        "updated_at": charge.updated_at,
    }


def build_task_group(task: Task) -> dict[str, Any]:
    charges = [charge for charge in task.charges if charge.deleted_at is None]
    return {
        "type": "ADHOC" if task.task_type == TaskType.SYSTEM_ADHOC else "TASK",
        "task_id": task.id,
        "task_title": task.title,
        "recoverable_amount": recoverable_amount(charges),
        "charges": [format_charge(charge) for charge in charges],
    }


def build_task_groups(tasks: Iterable[Task]) -> list[dict[str, Any]]:
    return [build_task_group(task) for task in tasks]


def format_invoice(invoice: Invoice) -> dict[str, Any]:
    return {
        "id": invoice.id,
        "entity_id": invoice.entity_id,
        "internal_number": invoice.internal_number,
        "external_number": invoice.external_number,
        "status": _value(invoice.status),
        "invoice_date": invoice.invoice_date,
        "issued_at": invoice.issued_at,
        "paid_at": invoice.paid_at,
        "notes": invoice.notes,
        "company_profile_id": invoice.company_profile_id,
        "created_by": invoice.created_by,
        "created_at": invoice.created_at,
    }


def format_entity(entity: Entity | None) -> dict[str, Any] | None:
    if entity is None:
        return None
    return {"id": entity.id, "name": entity.name, "email": entity.email, "status": entity.status}


def format_company_profile(profile: CompanyProfile | None) -> dict[str, Any] | None:
    if profile is None:
        return None
    return {"id": profile.id, "name": profile.name, "is_active": profile.is_active}


def format_invoice_full(invoice: Invoice, tasks: list[Task]) -> dict[str, Any]:
    """Hydrated invoice: fields, entity and company profile summaries, one group per linked task."""
    groups = build_task_groups(tasks)
    return {
        "invoice": format_invoice(invoice),
        "entity": format_entity(invoice.entity),
        "company_profile": format_company_profile(invoice.company_profile),
        "groups": groups,
        "totals": {
            "task_count": len(groups),
            "charge_count": sum(len(group["charges"]) for group in groups),
            "recoverable_amount": sum((group["recoverable_amount"] for group in groups), Decimal("0")),
        },
    }
