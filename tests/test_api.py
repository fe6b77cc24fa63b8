from fastapi.testclient import TestClient
import pytest

from landrecords.api import create_app


ADMIN = {"X-User-Id": "admin-1", "X-User-Role": "ADMINISTRATOR"}
BASE = "/api/v1/bulk-upload"


@pytest.fixture()
def client(test_settings, session_factory) -> TestClient:
    return TestClient(create_app(test_settings, session_factory), raise_server_exceptions=False)


def test_health_needs_no_credentials(client: TestClient) -> None:
    response = client.get(f"{BASE}/health")

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "ok", "data": {"app": "landrecords"}}


def test_missing_identity_is_unauthorized(client: TestClient) -> None:
    response = client.post(f"{BASE}/validate", json={"entityType": "customer", "data": []})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Authentication required"}


def test_other_roles_are_forbidden(client: TestClient) -> None:
    response = client.get(
        f"{BASE}/customer-types",
        headers={"X-User-Id": "clerk-1", "X-User-Role": "DATA_ENTRY"},
    )

    assert response.status_code == 403
    assert response.json()["error"] == "Insufficient permissions"


def test_validate_reports_partition(client: TestClient) -> None:
    payload = {
        "entityType": "customer",
        "data": [{"property_id": "PR-1", "size": "120"}, {"full_name": "Ada"}],
    }

    response = client.post(f"{BASE}/validate", json=payload, headers=ADMIN)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Validation completed"
    data = body["data"]
    assert (data["totalRecords"], data["validRecords"], data["invalidRecords"]) == (2, 1, 1)
    assert data["canCommit"] is True
    assert data["validData"] == [{"property_id": "PR-1", "size": "120"}]
    assert data["errors"][0]["row"] == 2


def test_invalid_entity_type_is_a_bad_request(client: TestClient) -> None:
    response = client.post(f"{BASE}/validate", json={"entityType": "parcel", "data": []}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "Invalid entity type: parcel"}


def test_malformed_body_is_a_bad_request(client: TestClient) -> None:
    response = client.post(f"{BASE}/validate", json={"entityType": "customer"}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert "data" in response.json()["error"]


def test_commit_creates_records(client: TestClient, store) -> None:
    payload = {"entityType": "customer", "validData": [{"property_id": "PR-1", "size": "120"}]}

    response = client.post(f"{BASE}/commit", json=payload, headers=ADMIN)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Successfully uploaded 1 records, 0 failed"
    assert body["data"]["successful"] == 1
    customer = store.select_one("customers", reference_id=body["data"]["created"][0])
    assert customer["created_by"] == "admin-1"


def test_commit_without_rows_is_a_bad_request(client: TestClient) -> None:
    response = client.post(f"{BASE}/commit", json={"entityType": "customer", "validData": []}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No valid records to commit"}


def test_template_for_customer_subtype(client: TestClient) -> None:
    response = client.get(f"{BASE}/template/customer", params={"customerType": "RENTAL"}, headers=ADMIN)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["headers"][0] == "customer_type"
    assert "rental_mothers_name" in data["headers"]
    assert data["example"]["customer_type"] == "RENTAL"


def test_template_for_unknown_customer_type(client: TestClient) -> None:
    response = client.get(f"{BASE}/template/customer", params={"customerType": "ALIEN"}, headers=ADMIN)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid customer type: ALIEN"


def test_customer_types(client: TestClient) -> None:
    response = client.get(f"{BASE}/customer-types", headers=ADMIN)

    assert response.status_code == 200
    assert "RESIDENTIAL" in response.json()["data"]
