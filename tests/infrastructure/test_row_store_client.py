"""Unit tests for the REST row-store client.

The requests session is a MagicMock; nothing leaves the process.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from smartcart.domain.exceptions import (
    ErrorKind,
    RemoteRejected,
    RemoteUnavailable,
    ServiceNotConfigured,
)
from smartcart.infrastructure.config import Settings
from smartcart.infrastructure.rest.row_store_client import RowStoreClient, eq_params

SETTINGS = Settings(supabase_url="https://demo.supabase.co/", supabase_key="service-key", timeout=3)


def _response(status: int = 200, body=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    payload = json.dumps(body) if body is not None else ""
    response.content = payload.encode()
    response.text = payload
    response.json.return_value = body
    return response


def _client(response: MagicMock | None = None, error: Exception | None = None):
    http = MagicMock()
    if error is not None:
        http.request.side_effect = error
    else:
        http.request.return_value = response or _response(body=[])
    return RowStoreClient(SETTINGS, session=http), http


class TestRequests:

    def test_query_builds_equality_filters(self):
        client, http = _client(_response(body=[{"cartId": "CART_002"}]))

        rows = client.query("carts", {"cartId": "CART_002"})

        assert rows == [{"cartId": "CART_002"}]
        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        assert method == "GET"
        assert url == "https://demo.supabase.co/rest/v1/carts"
        assert kwargs["params"] == {"select": "*", "cartId": "eq.CART_002"}
        assert kwargs["timeout"] == 3

    def test_headers_carry_key_twice(self):
        client, http = _client()
        client.query("products")
        headers = http.request.call_args.kwargs["headers"]
        assert headers["apikey"] == "service-key"
        assert headers["Authorization"] == "Bearer service-key"
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"

    def test_query_without_matches_is_empty_list(self):
        client, _ = _client(_response(body=[]))
        assert client.query("products", {"barcode": "nope"}) == []

    def test_insert_asks_for_representation(self):
        client, http = _client(_response(201, [{"itemId": "i1"}]))
        client.insert("session_items", {"itemId": "i1"})
        kwargs = http.request.call_args.kwargs
        assert http.request.call_args.args[0] == "POST"
        assert kwargs["json"] == {"itemId": "i1"}
        assert kwargs["headers"]["Prefer"] == "return=representation"

    def test_patch_and_delete_use_filters(self):
        client, http = _client(_response(204))
        client.patch("carts", {"cartId": "C1"}, {"status": "in_use"})
        assert http.request.call_args.kwargs["params"] == {"cartId": "eq.C1"}
        assert http.request.call_args.kwargs["json"] == {"status": "in_use"}

        client.delete("session_items", {"itemId": "i1"})
        assert http.request.call_args.args[0] == "DELETE"
        assert http.request.call_args.kwargs["params"] == {"itemId": "eq.i1"}

    def test_unfiltered_delete_refused(self):
        client, http = _client()
        with pytest.raises(ValueError, match="at least one filter"):
            client.delete("session_items", {})
        http.request.assert_not_called()

    def test_unknown_resource_refused(self):
        client, _ = _client()
        with pytest.raises(ValueError, match="Unknown resource"):
            client.query("secrets")

    def test_eq_params(self):
        assert eq_params({"a": 1, "b": "x"}) == {"a": "eq.1", "b": "eq.x"}


class TestErrorClassification:

    def test_missing_credentials_fail_before_io(self):
        http = MagicMock()
        client = RowStoreClient(Settings(supabase_url="", supabase_key="k"), session=http)
        with pytest.raises(ServiceNotConfigured) as excinfo:
            client.query("carts")
        assert excinfo.value.kind == ErrorKind.SERVICE_NOT_CONFIGURED
        http.request.assert_not_called()

    def test_connection_error_is_unavailable(self):
        cause = requests.ConnectionError("Unable to resolve host")
        client, _ = _client(error=cause)
        with pytest.raises(RemoteUnavailable) as excinfo:
            client.query("carts")
        assert excinfo.value.retryable
        assert excinfo.value.cause is cause

    def test_timeout_is_unavailable(self):
        client, _ = _client(error=requests.Timeout())
        with pytest.raises(RemoteUnavailable, match="timed out"):
            client.insert("orders", {})

    def test_server_error_is_unavailable(self):
        client, _ = _client(_response(503, {"message": "down"}))
        with pytest.raises(RemoteUnavailable, match="503"):
            client.query("carts")

    def test_client_error_is_rejected(self):
        client, _ = _client(_response(409, {"message": "duplicate key"}))
        with pytest.raises(RemoteRejected) as excinfo:
            client.insert("orders", {"orderId": "o1"})
        assert excinfo.value.status_code == 409
        assert "duplicate key" in excinfo.value.body
        assert not excinfo.value.retryable

    def test_auth_failure_is_rejected(self):
        client, _ = _client(_response(401, {"message": "Invalid API key"}))
        with pytest.raises(RemoteRejected):
            client.query("carts")

    def test_non_json_body_is_rejected(self):
        response = _response(200)
        response.content = b"<html>maintenance</html>"
        response.text = "<html>maintenance</html>"
        response.json.side_effect = requests.exceptions.JSONDecodeError(
            "Expecting value", "<html>", 0
        )
        client, _ = _client(response)

        with pytest.raises(RemoteRejected) as excinfo:
            client.query("carts")

        assert excinfo.value.kind == ErrorKind.REMOTE_REJECTED
        assert "maintenance" in excinfo.value.body
        assert isinstance(excinfo.value.cause, ValueError)

    def test_rows_must_be_objects(self):
        client, _ = _client(_response(body=["CART_001", "CART_002"]))
        with pytest.raises(RemoteRejected, match="list of rows"):
            client.query("carts")
