from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from invoicing.models import InvoiceStatus
from invoicing.schemas.invoices import (
    BulkInvoiceActionResponse,
    InvoiceCreateOrAppendRequest,
    InvoiceListQuery,
    InvoiceStatusUpdateRequest,
    TaskGroupResponse,
)


def test_create_request_requires_at_least_one_task():
    with pytest.raises(ValidationError):
        InvoiceCreateOrAppendRequest(entity_id="ent-1", task_ids=[])


def test_create_request_caps_task_count():
    with pytest.raises(ValidationError):
        InvoiceCreateOrAppendRequest(entity_id="ent-1", task_ids=[str(index) for index in range(101)])


def test_status_update_accepts_known_statuses_only():
    assert InvoiceStatusUpdateRequest(status="PAID").status == InvoiceStatus.PAID
    with pytest.raises(ValidationError):
        InvoiceStatusUpdateRequest(status="ARCHIVED")


def test_list_query_defaults_and_bounds():
    query = InvoiceListQuery()
    assert query.page == 1
    assert query.page_size == 50
    assert query.date_field == "invoice_date"
    with pytest.raises(ValidationError):
        InvoiceListQuery(page_size=500)
    with pytest.raises(ValidationError):
        InvoiceListQuery(date_field="deleted_at")


def test_task_group_type_is_restricted():
    group = TaskGroupResponse(
        type="ADHOC", task_id="t-1", task_title="Ad-hoc charges", recoverable_amount=Decimal("0"), charges=[]
    )
    assert group.type == "ADHOC"
    with pytest.raises(ValidationError):
        TaskGroupResponse(type="OTHER", task_id="t-1", task_title="x", recoverable_amount=Decimal("0"), charges=[])


def test_bulk_response_shape():
    response = BulkInvoiceActionResponse(
        success=["a"],
        ignored=[{"id": "b", "reason": "ALREADY_PAID"}],
        rejected=[{"id": "c", "reason": "NOT_FOUND"}],
    )
    assert response.model_dump() == {
        "success": ["a"],
        "ignored": [{"id": "b", "reason": "ALREADY_PAID"}],
        "rejected": [{"id": "c", "reason": "NOT_FOUND"}],
    }
