"""顧客APIのHTTP経由統合テスト。"""

import logging
from typing import Any

import pytest
from starlette.testclient import TestClient

from patron.config import ServerConfig
from patron.server import create_app


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "first_name": "Maria",
        "last_name": "Silva",
        "email": "maria.silva@example.com",
        "phone_number": "11987654321",
        "date_of_birth": "1990-05-20T00:00:00Z",
        "address": "Rua das Flores, 123",
    }
    payload.update(overrides)
    return payload


class TestCustomerCrudViaHTTP:
    def test_full_crud_flow(self, client: TestClient) -> None:
        # 1. 作成
        response = client.post("/api/customers", json=_payload())
        assert response.status_code == 201
        created = response.json()
        assert created["id"] == 1
        assert response.headers["location"].endswith("/api/customers/1")

        # 2. 一覧
        response = client.get("/api/customers")
        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == [1]

        # 3. 更新
        response = client.put("/api/customers/1", json=_payload(last_name="Souza"))
        assert response.status_code == 204
        assert client.get("/api/customers/1").json()["last_name"] == "Souza"

        # 4. 削除
        response = client.delete("/api/customers/1")
        assert response.status_code == 204
        assert client.get("/api/customers/1").status_code == 404

    def test_get_unknown_customer(self, client: TestClient) -> None:
        response = client.get("/api/customers/999")
        assert response.status_code == 404
        assert response.json() == {"error": "CustomerNotFoundError", "message": "Customer not found: 999"}

    def test_update_unknown_customer(self, client: TestClient) -> None:
        response = client.put("/api/customers/3", json=_payload())
        assert response.status_code == 404

    def test_delete_unknown_customer(self, client: TestClient) -> None:
        assert client.delete("/api/customers/3").status_code == 404


class TestValidationErrorsViaHTTP:
    def test_create_reports_every_failure(self, client: TestClient) -> None:
        response = client.post(
            "/api/customers",
            json=_payload(first_name="", email="", date_of_birth="2009-01-01T00:00:00Z"),
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "CustomerValidationError"
        assert {f["field"] for f in body["failures"]} == {"first_name", "email", "date_of_birth"}
        assert {"field": "date_of_birth", "message": "Customer must be at least 18 years old"} in body["failures"]
        assert client.get("/api/customers").json() == []

    def test_missing_fields_are_validation_failures(self, client: TestClient) -> None:
        response = client.post("/api/customers", json={})
        assert response.status_code == 400
        fields = [f["field"] for f in response.json()["failures"]]
        assert fields[0] == "first_name"
        assert "date_of_birth" in fields

    def test_update_invalid_keeps_existing_record(self, client: TestClient) -> None:
        client.post("/api/customers", json=_payload())
        response = client.put("/api/customers/1", json=_payload(phone_number="12-34"))
        assert response.status_code == 400
        assert response.json()["failures"] == [
            {"field": "phone_number", "message": "Phone number must contain between 10 and 15 digits"}
        ]
        assert client.get("/api/customers/1").json()["phone_number"] == "11987654321"

    def test_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/customers", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "RequestBodyError"
        assert body["failures"] == [{"field": "body", "message": "Request body must be valid JSON"}]

    def test_body_with_invalid_utf8(self, client: TestClient) -> None:
        response = client.post(
            "/api/customers", content=b'{"first_name": "\xff\xfe"}', headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "RequestBodyError"
        assert client.get("/api/customers").json() == []

    def test_minimum_date_of_birth_is_rejected(self, client: TestClient) -> None:
        response = client.post("/api/customers", json=_payload(date_of_birth="0001-01-01T00:00:00Z"))
        assert response.status_code == 400
        assert response.json()["failures"] == [{"field": "date_of_birth", "message": "Date of birth is required"}]
        assert client.get("/api/customers").json() == []

    def test_wrong_field_type(self, client: TestClient) -> None:
        response = client.post("/api/customers", json=_payload(date_of_birth="yesterday"))
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "RequestBodyError"
        assert [f["field"] for f in body["failures"]] == ["date_of_birth"]

    def test_non_object_body(self, client: TestClient) -> None:
        response = client.post("/api/customers", json=[1, 2, 3])
        assert response.status_code == 400
        assert response.json()["failures"][0]["field"] == "body"


class TestServerEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_openapi_schema_lists_customer_routes(self, client: TestClient) -> None:
        response = client.get("/schema")
        assert response.status_code == 200
        assert "/api/customers:" in response.text
        assert "/api/customers/{customer_id}" in response.text
        assert "/health" not in response.text

    def test_custom_api_prefix(self) -> None:
        client = TestClient(create_app(ServerConfig(api_prefix="/v2")))
        assert client.get("/v2/customers").status_code == 200
        assert client.get("/api/customers").status_code == 404

    def test_requests_are_logged(self, client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="patron.middleware"):
            client.get("/api/customers")
            client.get("/health")
        assert "GET /api/customers -> 200" in caplog.text
        assert "/health" not in caplog.text
