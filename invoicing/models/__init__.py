"""SQLAlchemy model package for the invoicing schema."""

from invoicing.models.base import Base
from invoicing.models.company_profile import CompanyProfile
from invoicing.models.entity import Entity
from invoicing.models.enums import (
    BulkInvoiceAction,
    ChargeBearer,
    ChargeStatus,
    ChargeType,
    InvoiceStatus,
    TaskStatus,
    TaskType,
)
from invoicing.models.invoice import Invoice
from invoicing.models.task import Task
from invoicing.models.task_charge import TaskCharge

__all__ = [
    "Base",
    "BulkInvoiceAction",
    "ChargeBearer",
    "ChargeStatus",
    "ChargeType",
    "CompanyProfile",
    "Entity",
    "Invoice",
    "InvoiceStatus",
    "Task",
    "TaskCharge",
    "TaskStatus",
    "TaskType",
]
