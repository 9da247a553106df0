"""
Tests for the HTTP client. requests.Session is mocked, no network.
"""
from unittest.mock import Mock

import pytest
import requests

from storefront.domain.errors import CatalogFetchFailure, OrderSubmissionFailure
from storefront.services.storefront_client import StorefrontClient


def response(status=200, json_data=None):
    resp = Mock(spec=requests.Response)
    resp.status_code = status
    resp.json.return_value = json_data
    if status >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status} Error", response=resp)
    else:
        resp.raise_for_status.return_value = None
    return resp


@pytest.fixture
def http():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(http):
    return StorefrontClient(base_url="http://api.test/api/", timeout=1, session=http)


class TestGetProducts:
    def test_no_filters(self, client, http):
        http.get.return_value = response(json_data=[{"_id": "1"}])

        assert client.get_products() == [{"_id": "1"}]
        http.get.assert_called_once_with("http://api.test/api/products", params={}, timeout=1)

    def test_todos_is_not_sent(self, client, http):
        http.get.return_value = response(json_data=[])

        client.get_products("Todos", "arroz")

        assert http.get.call_args.kwargs["params"] == {"busqueda": "arroz"}

    def test_category_and_search(self, client, http):
        http.get.return_value = response(json_data=[])

        client.get_products("Lácteos", "leche")

        assert http.get.call_args.kwargs["params"] == {"categoria": "Lácteos", "busqueda": "leche"}

    def test_http_error_is_catalog_failure(self, client, http):
        http.get.return_value = response(status=500)

        with pytest.raises(CatalogFetchFailure):
            client.get_products()

        # no automatic retry
        assert http.get.call_count == 1

    def test_network_error_is_catalog_failure(self, client, http):
        http.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(CatalogFetchFailure):
            client.get_products()

    def test_unexpected_body_is_catalog_failure(self, client, http):
        http.get.return_value = response(json_data={"error": "x"})

        with pytest.raises(CatalogFetchFailure):
            client.get_products()


class TestCreateOrder:
    def test_sends_payload_and_key(self, client, http):
        http.post.return_value = response(status=201, json_data={"success": False, "message": "x"})

        result = client.create_order({"items": []}, idempotency_key="k1")

        assert result.success is False
        http.post.assert_called_once_with(
            "http://api.test/api/orders",
            json={"items": []},
            headers={"Idempotency-Key": "k1"},
            timeout=1,
        )

    def test_error_is_submission_failure_and_not_retried(self, client, http):
        http.post.return_value = response(status=400, json_data={"detail": "bad"})

        with pytest.raises(OrderSubmissionFailure):
            client.create_order({"items": []})

        assert http.post.call_count == 1

    def test_timeout_is_submission_failure(self, client, http):
        http.post.side_effect = requests.Timeout("slow")

        with pytest.raises(OrderSubmissionFailure):
            client.create_order({"items": []})


class TestAdminCalls:
    def test_get_notifications(self, client, http):
        http.get.return_value = response(json_data={"nuevosPedidos": 0, "pedidos": []})

        data = client.get_notifications()

        assert data.new_orders == 0
        assert data.orders == []
        http.get.assert_called_once_with("http://api.test/api/admin/notificaciones", timeout=1)

    def test_mark_seen(self, client, http):
        http.post.return_value = response(json_data={"success": True})

        client.mark_seen(7)

        http.post.assert_called_once_with("http://api.test/api/admin/notificaciones/visto/7", timeout=1)

    def test_notifications_retry_transient_errors(self, client, http):
        ok = response(json_data={"nuevosPedidos": 0, "pedidos": []})
        http.get.side_effect = [requests.ConnectionError("reset"), response(status=503), ok]

        data = client.get_notifications()

        assert data.new_orders == 0
        assert http.get.call_count == 3

    def test_notifications_do_not_retry_client_errors(self, client, http):
        http.get.return_value = response(status=404)

        with pytest.raises(requests.HTTPError):
            client.get_notifications()

        assert http.get.call_count == 1
