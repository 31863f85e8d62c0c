import logging
import uuid

import pytest

pytestmark = pytest.mark.integration


class TestCorrelationIdMiddleware:
    def test_returns_provided_request_id(self, client):
        custom_id = "my-custom-request-id-123"
        response = client.get("/health", HTTP_X_REQUEST_ID=custom_id)
        assert response["X-Request-ID"] == custom_id

    def test_generates_uuid_when_no_request_id(self, client):
        response = client.get("/health")
        request_id = response["X-Request-ID"]
        parsed = uuid.UUID(request_id, version=4)
        assert str(parsed) == request_id

    def test_header_on_api_responses(self, api_client_with_correlation):
        api_client, cid = api_client_with_correlation
        response = api_client.post(
            "/api/v1/warehouse/manual/",
            {"product_id": 1, "warehouse_id": 1, "amount": 0},
            format="json",
        )
        assert response["X-Request-ID"] == cid

    def test_correlation_id_in_fulfillment_logs(self, api_client, caplog):
        custom_id = "log-test-correlation-456"
        with caplog.at_level(logging.INFO):
            api_client.post(
                "/api/v1/warehouse/manual/",
                {"product_id": 1, "warehouse_id": 1, "amount": 0},
                format="json",
                HTTP_X_REQUEST_ID=custom_id,
            )
        messages = [record.getMessage() for record in caplog.records]
        assert any(
            "fulfillment.rejected" in message and custom_id in message
            for message in messages
        ), messages
