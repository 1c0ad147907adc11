"""Canonical enum values for the invoicing schema."""

from __future__ import annotations

import enum


class InvoiceStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    ISSUED = "ISSUED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class TaskStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    PENDING_CLIENT_INPUT = "PENDING_CLIENT_INPUT"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskType(str, enum.Enum):
    STANDARD = "STANDARD"
    SYSTEM_ADHOC = "SYSTEM_ADHOC"


class ChargeType(str, enum.Enum):
    SERVICE_FEE = "SERVICE_FEE"
    GOVERNMENT_FEE = "GOVERNMENT_FEE"
    EXTERNAL_CHARGE = "EXTERNAL_CHARGE"
    OTHER_CHARGES = "OTHER_CHARGES"


class ChargeStatus(str, enum.Enum):
    NOT_PAID = "NOT_PAID"
    PAID = "PAID"
    WRITTEN_OFF = "WRITTEN_OFF"
    CANCELLED = "CANCELLED"


class ChargeBearer(str, enum.Enum):
    CLIENT = "CLIENT"
    FIRM = "FIRM"


class BulkInvoiceAction(str, enum.Enum):
    MARK_ISSUED = "MARK_ISSUED"
    MARK_PAID = "MARK_PAID"
    MARK_DRAFT = "MARK_DRAFT"
