"""Pydantic schema package for API contracts."""

from invoicing.schemas.common import PaginationMeta
from invoicing.schemas.invoices import (
    BulkInvoiceActionRequest,
    BulkInvoiceActionResponse,
    CancelInvoiceResponse,
    InvoiceCreateOrAppendRequest,
    InvoiceData,
    InvoiceDetailResponse,
    InvoiceInfoUpdateRequest,
    InvoiceListQuery,
    InvoiceListResponse,
    InvoiceResponse,
    InvoiceStatusUpdateRequest,
    InvoiceUnlinkTasksRequest,
    RecoverableSummaryResponse,
    UnlinkTasksResponse,
)

__all__ = [
    "BulkInvoiceActionRequest",
    "BulkInvoiceActionResponse",
    "CancelInvoiceResponse",
    "InvoiceCreateOrAppendRequest",
    "InvoiceData",
    "InvoiceDetailResponse",
    "InvoiceInfoUpdateRequest",
    "InvoiceListQuery",
    "InvoiceListResponse",
    "InvoiceResponse",
    "InvoiceStatusUpdateRequest",
    "InvoiceUnlinkTasksRequest",
    "PaginationMeta",
    "RecoverableSummaryResponse",
    "UnlinkTasksResponse",
]
