"""Invoice request/response schemas for API contracts."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from invoicing.models.enums import InvoiceStatus
from invoicing.schemas.common import PaginationMeta


class InvoiceData(BaseModel):
    company_profile_id: str | None = Field(default=None, min_length=1, max_length=36)
    notes: str | None = Field(default=None, max_length=1000)


class InvoiceCreateOrAppendRequest(BaseModel):
    entity_id: str = Field(min_length=1, max_length=36)
    task_ids: list[str] = Field(min_length=1, max_length=100)
    invoice_internal_number: str | None = Field(default=None, max_length=64)
    invoice_data: InvoiceData | None = None


class InvoiceInfoUpdateRequest(BaseModel):
    company_profile_id: str | None = Field(default=None, min_length=1, max_length=36)
    invoice_date: datetime | None = None
    external_number: str | None = Field(default=None, min_length=1, max_length=50)
    notes: str | None = Field(default=None, max_length=1000)


class InvoiceStatusUpdateRequest(BaseModel):
    status: InvoiceStatus


class InvoiceUnlinkTasksRequest(BaseModel):
    task_ids: list[str] = Field(min_length=1, max_length=100)


class BulkInvoiceActionRequest(BaseModel):
    invoice_ids: list[str] = Field(min_length=1, max_length=100)
    action: str = Field(min_length=1, max_length=40)


class InvoiceListQuery(BaseModel):
    entity_id: str | None = None
    company_profile_id: str | None = None
    status: InvoiceStatus | None = None
    date_field: Literal["invoice_date", "issued_at", "paid_at", "created_at"] = "invoice_date"
    from_date: datetime | None = None
    to_date: datetime | None = None
    search: str | None = Field(default=None, max_length=64)
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=50, ge=1, le=100)


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    entity_id: str
    internal_number: str
    external_number: str | None = None
    status: InvoiceStatus
    invoice_date: datetime | None = None
    issued_at: datetime | None = None
    paid_at: datetime | None = None
    notes: str | None = None
    company_profile_id: str
    created_by: str | None = None
    created_at: datetime | None = None


class InvoiceListResponse(BaseModel):
    items: list[InvoiceResponse]
    pagination: PaginationMeta


class ChargeResponse(BaseModel):
    id: str
    title: str
    amount: Decimal
    charge_type: str
    status: str
    bearer: str
    remark: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class TaskGroupResponse(BaseModel):
    type: Literal["TASK", "ADHOC"]
    task_id: str
    task_title: str
    recoverable_amount: Decimal
    charges: list[ChargeResponse]


class InvoiceTotals(BaseModel):
    task_count: int
    charge_count: int
    recoverable_amount: Decimal


class InvoiceDetailResponse(BaseModel):
    invoice: InvoiceResponse
    entity: dict | None = None
    company_profile: dict | None = None
    groups: list[TaskGroupResponse]
    totals: InvoiceTotals


class UnlinkTasksResponse(BaseModel):
    invoice_id: str
    unlinked_task_ids: list[str]


class CancelInvoiceResponse(BaseModel):
    invoice_id: str
    status: InvoiceStatus
    groups: list = Field(default_factory=list)


class BulkRejection(BaseModel):
    id: str
    reason: str


class BulkInvoiceActionResponse(BaseModel):
    success: list[str]
    ignored: list[BulkRejection]
    rejected: list[BulkRejection]


class RecoverableSummaryResponse(BaseModel):
    total_recoverable: Decimal
    uninvoiced: Decimal
    draft_invoices: Decimal
    issued_pending: Decimal
