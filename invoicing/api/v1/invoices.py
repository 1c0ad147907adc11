"""Invoice lifecycle endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from invoicing.api.v1._errors import to_http_exception
from invoicing.core.dependencies import CurrentUser, get_current_user, get_db_session
from invoicing.core.exceptions import InvoicingError
from invoicing.schemas.invoices import (
    BulkInvoiceActionRequest,
    BulkInvoiceActionResponse,
    CancelInvoiceResponse,
    InvoiceCreateOrAppendRequest,
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
from invoicing.services.bulk_invoice_service import BulkInvoiceActionService
from invoicing.services.invoice_builder import InvoiceBuilderService
from invoicing.services.invoice_service import InvoiceService
from invoicing.services.recoverable_summary_service import RecoverableSummaryService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=InvoiceListResponse)
def list_invoices(
    filters: InvoiceListQuery = Depends(),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).get_invoices(filters.model_dump(exclude_none=True))
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.post("", response_model=InvoiceDetailResponse)
def create_or_append_invoice(
    payload: InvoiceCreateOrAppendRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceBuilderService(db=db).create_or_append_invoice(
            entity_id=payload.entity_id,
            task_ids=payload.task_ids,
            created_by=current_user.user_id,
            invoice_internal_number=payload.invoice_internal_number,
            invoice_data=payload.invoice_data.model_dump(exclude_none=True) if payload.invoice_data else None,
        )
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.post("/bulk-action", response_model=BulkInvoiceActionResponse)
def bulk_invoice_action(
    payload: BulkInvoiceActionRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    return BulkInvoiceActionService(db=db).bulk_invoice_action(payload.invoice_ids, payload.action)


@router.get("/recoverable-summary", response_model=RecoverableSummaryResponse)
def recoverable_summary(
    entity_id: str | None = Query(default=None, max_length=36),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    return RecoverableSummaryService(db=db).get_recoverable_summary(entity_id=entity_id)


@router.get("/{internal_number}", response_model=InvoiceDetailResponse)
def get_invoice_details(
    internal_number: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).get_invoice_details(internal_number)
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.patch("/{invoice_id}", response_model=InvoiceResponse)
def update_invoice_info(
    invoice_id: str,
    payload: InvoiceInfoUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).update_invoice_info(invoice_id, payload.model_dump(exclude_none=True))
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.patch("/{invoice_id}/status", response_model=InvoiceResponse)
def update_invoice_status(
    invoice_id: str,
    payload: InvoiceStatusUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).update_invoice_status(invoice_id, payload.status)
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{invoice_id}/unlink-tasks", response_model=UnlinkTasksResponse)
def unlink_tasks(
    invoice_id: str,
    payload: InvoiceUnlinkTasksRequest,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).unlink_tasks_from_invoice(invoice_id, payload.task_ids)
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{invoice_id}/cancel", response_model=CancelInvoiceResponse)
def cancel_invoice(
    invoice_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db_session),
) -> dict:
    try:
        return InvoiceService(db=db).cancel_invoice(invoice_id)
    except InvoicingError as exc:
        raise to_http_exception(exc) from exc
