"""Row lookups and link mutations shared by the invoice services."""

from __future__ import annotations

from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from invoicing.core.exceptions import NotFoundError, ValidationError
from invoicing.models import CompanyProfile, Invoice, Task
from invoicing.services.invoice_formatting import format_invoice_full


def get_invoice_by_id(db: Session, invoice_id: str, for_update: bool = False) -> Invoice | None:
    stmt = select(Invoice).where(Invoice.id == invoice_id).execution_options(populate_existing=True)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def require_invoice(db: Session, invoice_id: str, for_update: bool = False) -> Invoice:
    invoice = get_invoice_by_id(db, invoice_id, for_update=for_update)
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return invoice


def get_invoice_by_internal_number(db: Session, internal_number: str, for_update: bool = False) -> Invoice | None:
    stmt = (
        select(Invoice)
        .where(Invoice.internal_number == internal_number)
        .execution_options(populate_existing=True)
    )
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def require_active_company_profile(db: Session, company_profile_id: str | None) -> CompanyProfile:
    if not company_profile_id:
        raise ValidationError("company_profile_id is required to create invoice")
    profile = db.get(CompanyProfile, company_profile_id)
    if profile is None:
        raise ValidationError("Company profile not found")
    if not profile.is_active:
        raise ValidationError("Company profile is inactive")
    return profile


def load_tasks(db: Session, task_ids: list[str]) -> list[Task]:
    stmt = (
        select(Task)
        .where(Task.id.in_(task_ids))
        .options(selectinload(Task.charges))
        .execution_options(populate_existing=True)
    )
    return list(db.execute(stmt).scalars().all())


def load_linked_tasks(db: Session, internal_number: str) -> list[Task]:
    stmt = (
        select(Task)
        .where(Task.invoice_internal_number == internal_number)
        .options(selectinload(Task.charges))
        .order_by(Task.created_at, Task.id)
        .execution_options(populate_existing=True)
    )
    return list(db.execute(stmt).scalars().all())


def count_linked_tasks(db: Session, internal_number: str) -> int:
    stmt = select(func.count()).select_from(Task).where(Task.invoice_internal_number == internal_number)
    return int(db.execute(stmt).scalar_one())


def release_linked_tasks(db: Session, internal_number: str, task_ids: list[str] | None = None) -> list[str]:
    """Clear the link on tasks still pointing at ``internal_number``; returns the released ids.

    The predicate re-checks the current link so a task re-linked elsewhere is never touched.
    """
    stmt = update(Task).where(Task.invoice_internal_number == internal_number)
    if task_ids is not None:
        stmt = stmt.where(Task.id.in_(task_ids))
    stmt = stmt.values(invoice_internal_number=None, invoiced_at=None).returning(Task.id)
    return list(db.execute(stmt).scalars().all())


def fetch_invoice_full(db: Session, internal_number: str) -> dict[str, Any]:
    stmt = (
        select(Invoice)
        .where(Invoice.internal_number == internal_number)
        .options(selectinload(Invoice.entity), selectinload(Invoice.company_profile))
        .execution_options(populate_existing=True)
    )
    invoice = db.execute(stmt).scalar_one_or_none()
    if invoice is None:
        raise NotFoundError("Invoice not found")
    return format_invoice_full(invoice, load_linked_tasks(db, internal_number))
