from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from invoicing.core.config import get_config
from invoicing.core.dependencies import get_db_session
from invoicing.main import create_app

HEADERS = {"X-User-Id": "user-7"}


@pytest.fixture
def client(session):
    app = create_app()

    def _override_db():
        yield session

    app.dependency_overrides[get_db_session] = _override_db
    return TestClient(app)


def _url(path: str) -> str:
    return f"{get_config().API_PREFIX}{path}"


def test_requests_without_user_header_are_unauthorized(client):
    response = client.get(_url("/invoices"))
    assert response.status_code == 401


def test_create_then_fetch_invoice_over_http(client, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    task = seed.task(entity)

    created = client.post(
        _url("/invoices"),
        json={
            "entity_id": entity.id,
            "task_ids": [task.id],
            "invoice_data": {"company_profile_id": profile.id},
        },
        headers=HEADERS,
    )
    assert created.status_code == 200
    body = created.json()
    assert body["invoice"]["status"] == "DRAFT"
    assert body["invoice"]["created_by"] == "user-7"

    fetched = client.get(_url(f"/invoices/{body['invoice']['internal_number']}"), headers=HEADERS)
    assert fetched.status_code == 200
    assert fetched.json()["totals"]["task_count"] == 1
    assert fetched.json()["groups"][0]["task_id"] == task.id


def test_request_body_limits_are_enforced(client):
    response = client.post(_url("/invoices"), json={"entity_id": "e-1", "task_ids": []}, headers=HEADERS)
    assert response.status_code == 422


def test_bulk_action_over_http(client, seed):
    entity = seed.entity()
    profile = seed.company_profile()
    invoice = seed.invoice(entity, profile)

    response = client.post(
        _url("/invoices/bulk-action"),
        json={"invoice_ids": [invoice.id, "missing"], "action": "MARK_ISSUED"},
        headers=HEADERS,
    )

    assert response.status_code == 200
    assert response.json() == {
        "success": [],
        "ignored": [],
        "rejected": [
            {"id": invoice.id, "reason": "MISSING_EXTERNAL_NUMBER"},
            {"id": "missing", "reason": "NOT_FOUND"},
        ],
    }


def test_cancel_unknown_invoice_is_404(client):
    response = client.post(_url("/invoices/missing/cancel"), headers=HEADERS)
    assert response.status_code == 404
    assert response.json() == {"detail": "Invoice not found"}
