"""Tests for order_export/shopify/api_client.py"""

from unittest.mock import patch

import pytest
import requests

from order_export.errors import UpstreamFetchError
from order_export.shopify.api_client import ShopifyAPIClient, normalize_shop_domain


@pytest.fixture
def client():
    return ShopifyAPIClient(shop="test-store.myshopify.com", access_token="shpat_test")


class TestNormalizeShopDomain:
    def test_full_domain_unchanged(self):
        assert normalize_shop_domain("test-store.myshopify.com") == "test-store.myshopify.com"

    def test_bare_name_gets_myshopify_suffix(self):
        assert normalize_shop_domain("test-store") == "test-store.myshopify.com"

    def test_strips_scheme_and_slash(self):
        assert normalize_shop_domain("https://test-store.myshopify.com/") == "test-store.myshopify.com"

    def test_custom_domain_kept(self):
        assert normalize_shop_domain("shop.example.com") == "shop.example.com"


class TestInit:
    def test_base_url(self, client):
        assert client.base_url == "https://test-store.myshopify.com/admin/api/2024-01"

    def test_custom_api_version(self):
        c = ShopifyAPIClient(shop="test-store", access_token="tok", api_version="2025-01")
        assert c.base_url.endswith("/admin/api/2025-01")

    def test_session_headers(self, client):
        assert client.session.headers["X-Shopify-Access-Token"] == "shpat_test"
        assert client.session.headers["Content-Type"] == "application/json"

    def test_context_manager_closes_session(self):
        c = ShopifyAPIClient(shop="test-store", access_token="tok")
        with patch.object(c.session, "close") as close:
            with c:
                pass
        close.assert_called_once()


class TestGetPage:
    def test_returns_body_and_link(self, client, response_factory):
        resp = response_factory(200, {"orders": [{"id": 1}]}, {"Link": '<x?page_info=abc>; rel="next"'})

        with patch.object(client.session, "get", return_value=resp) as get:
            page = client.get_page("orders.json", {"limit": 250})

        assert page.data == {"orders": [{"id": 1}]}
        assert page.link_header == '<x?page_info=abc>; rel="next"'
        get.assert_called_once_with(
            "https://test-store.myshopify.com/admin/api/2024-01/orders.json",
            params={"limit": 250},
            timeout=30,
        )

    def test_missing_link_header_is_none(self, client, response_factory):
        with patch.object(client.session, "get", return_value=response_factory(200, {"orders": []})):
            page = client.get_page("orders.json")
        assert page.link_header is None

    @pytest.mark.parametrize("status", [401, 404, 429, 500, 503])
    def test_non_success_raises_with_status(self, client, response_factory, status):
        with patch.object(client.session, "get", return_value=response_factory(status, text="nope")) as get:
            with pytest.raises(UpstreamFetchError) as exc_info:
                client.get_page("orders.json")

        assert exc_info.value.status == status
        assert exc_info.value.message == f"Shopify API error: {status}"
        # Single attempt, no retry
        assert get.call_count == 1

    def test_timeout_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.Timeout):
            with pytest.raises(UpstreamFetchError) as exc_info:
                client.get_page("orders.json")
        assert exc_info.value.status is None

    def test_connection_error_raises(self, client):
        with patch.object(client.session, "get", side_effect=requests.exceptions.ConnectionError("down")):
            with pytest.raises(UpstreamFetchError, match="down"):
                client.get_page("orders.json")

    def test_invalid_json_raises(self, client, response_factory):
        resp = response_factory(200)
        resp.json.side_effect = ValueError("not json")
        with patch.object(client.session, "get", return_value=resp):
            with pytest.raises(UpstreamFetchError, match="invalid JSON"):
                client.get_page("orders.json")
