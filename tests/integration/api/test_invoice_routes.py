from __future__ import annotations

import pytest
from fastapi import HTTPException

from invoicing.api.v1 import invoices as routes
from invoicing.api.v1._errors import map_service_error
from invoicing.core.dependencies import CurrentUser, get_current_user
from invoicing.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from invoicing.models import InvoiceStatus
from invoicing.schemas.invoices import (
    BulkInvoiceActionRequest,
    InvoiceCreateOrAppendRequest,
    InvoiceData,
    InvoiceInfoUpdateRequest,
    InvoiceListQuery,
    InvoiceStatusUpdateRequest,
    InvoiceUnlinkTasksRequest,
)

USER = CurrentUser(user_id="user-42")


def test_service_errors_map_to_status_codes():
    assert map_service_error(NotFoundError("Invoice not found")) == (404, "Invoice not found")
    assert map_service_error(ForbiddenError("Invoice is not editable")) == (403, "Invoice is not editable")
    assert map_service_error(ValidationError("No tasks selected")) == (422, "No tasks selected")
    assert map_service_error(RuntimeError("boom")) == (500, "Internal error.")


def test_current_user_requires_header():
    with pytest.raises(HTTPException) as exc:
        get_current_user(x_user_id=None)
    assert exc.value.status_code == 401
    assert get_current_user(x_user_id=" user-42 ") == USER


def test_create_route_records_acting_user(session, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    task = seed.task(entity)
    payload = InvoiceCreateOrAppendRequest(
        entity_id=entity.id,
        task_ids=[task.id],
        invoice_data=InvoiceData(company_profile_id=profile.id),
    )

    result = routes.create_or_append_invoice(payload, current_user=USER, db=session)

    assert result["invoice"]["created_by"] == "user-42"
    assert result["totals"]["task_count"] == 1


def test_create_route_maps_validation_error_to_422(session, seed):
    entity = seed.entity()
    task = seed.task(entity)
    payload = InvoiceCreateOrAppendRequest(entity_id=entity.id, task_ids=[task.id])

    with pytest.raises(HTTPException) as exc:
        routes.create_or_append_invoice(payload, current_user=USER, db=session)
    assert exc.value.status_code == 422
    assert "company_profile_id is required" in exc.value.detail


def test_list_route_applies_query(session, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    seed.invoice(entity, profile)
    seed.invoice(entity, profile, status=InvoiceStatus.ISSUED, external_number="GST-1")

    result = routes.list_invoices(
        filters=InvoiceListQuery(status=InvoiceStatus.ISSUED), current_user=USER, db=session
    )

    assert [item["external_number"] for item in result["items"]] == ["GST-1"]
    assert result["pagination"]["total_items"] == 1


def test_details_route_maps_missing_invoice_to_404(session):
    with pytest.raises(HTTPException) as exc:
        routes.get_invoice_details("INV-0-0", current_user=USER, db=session)
    assert exc.value.status_code == 404


def test_info_route_maps_non_draft_to_403(session, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    invoice = seed.invoice(entity, profile, status=InvoiceStatus.PAID, external_number="GST-2")

    with pytest.raises(HTTPException) as exc:
        routes.update_invoice_info(
            invoice.id, InvoiceInfoUpdateRequest(notes="edit"), current_user=USER, db=session
        )
    assert exc.value.status_code == 403


def test_status_and_unlink_routes(session, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    task = seed.task(entity)
    invoice = seed.invoice(entity, profile, tasks=(task,))

    unlinked = routes.unlink_tasks(
        invoice.id, InvoiceUnlinkTasksRequest(task_ids=[task.id]), current_user=USER, db=session
    )
    assert unlinked["unlinked_task_ids"] == [task.id]

    routes.update_invoice_info(
        invoice.id, InvoiceInfoUpdateRequest(external_number="GST-3"), current_user=USER, db=session
    )
    with pytest.raises(HTTPException) as exc:
        routes.update_invoice_status(
            invoice.id, InvoiceStatusUpdateRequest(status=InvoiceStatus.ISSUED), current_user=USER, db=session
        )
    assert exc.value.status_code == 422
    assert "no linked tasks" in exc.value.detail


def test_cancel_and_bulk_routes(session, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    task = seed.task(entity)
    invoice = seed.invoice(entity, profile, external_number="GST-4", tasks=(task,))

    bulk = routes.bulk_invoice_action(
        BulkInvoiceActionRequest(invoice_ids=[invoice.id], action="MARK_ISSUED"), current_user=USER, db=session
    )
    assert bulk == {"success": [invoice.id], "ignored": [], "rejected": []}

    cancelled = routes.cancel_invoice(invoice.id, current_user=USER, db=session)
    assert cancelled["status"] == "CANCELLED"
    assert cancelled["groups"] == []


def test_recoverable_summary_route(session, seed):
    entity = seed.entity()
    seed.task(entity)

    summary = routes.recoverable_summary(entity_id=entity.id, current_user=USER, db=session)

    assert summary["uninvoiced"] == summary["total_recoverable"]


def test_invoice_routes_are_registered():
    paths = {route.path for route in routes.router.routes}
    assert {
        "/invoices",
        "/invoices/bulk-action",
        "/invoices/recoverable-summary",
        "/invoices/{internal_number}",
        "/invoices/{invoice_id}",
        "/invoices/{invoice_id}/status",
        "/invoices/{invoice_id}/unlink-tasks",
        "/invoices/{invoice_id}/cancel",
    } <= paths
