"""Tests for order_export/shopify/pagination.py"""

from itertools import count

import pytest

from order_export.errors import UpstreamFetchError
from order_export.shopify.api_client import Page
from order_export.shopify.pagination import fetch_all, parse_next_page_info


class FakeClient:
    """Serves a fixed list of pages and records the params of each call."""

    def __init__(self, pages):
        self.pages = list(pages)
        self.calls = []

    def get_page(self, endpoint, params=None):
        self.calls.append((endpoint, dict(params or {})))
        page = self.pages.pop(0)
        if isinstance(page, Exception):
            raise page
        return page


class EndlessClient:
    """Every page holds 250 items and advertises another page."""

    def __init__(self, page_size=250):
        self.page_size = page_size
        self.calls = 0
        self._ids = count()

    def get_page(self, endpoint, params=None):
        self.calls += 1
        items = [{"id": next(self._ids)} for _ in range(self.page_size)]
        return Page(data={"orders": items}, link_header=f'<https://s/orders.json?page_info=p{self.calls}>; rel="next"')


def link(cursor):
    return f'<https://s.myshopify.com/admin/api/2024-01/orders.json?limit=250&page_info={cursor}>; rel="next"'


ORDER_QUERY = {
    "status": "any",
    "created_at_min": "2024-01-01T00:00:00Z",
    "created_at_max": "2024-01-31T23:59:59Z",
    "limit": 250,
}


class TestParseNextPageInfo:
    def test_none_header(self):
        assert parse_next_page_info(None) is None

    def test_empty_header(self):
        assert parse_next_page_info("") is None

    def test_next_only(self):
        assert parse_next_page_info(link("abc123")) == "abc123"

    def test_previous_only(self):
        header = '<https://s/orders.json?limit=250&page_info=prev1>; rel="previous"'
        assert parse_next_page_info(header) is None

    def test_previous_and_next_picks_next(self):
        header = (
            '<https://s/orders.json?limit=250&page_info=prev1>; rel="previous", '
            '<https://s/orders.json?limit=250&page_info=next1>; rel="next"'
        )
        assert parse_next_page_info(header) == "next1"

    def test_previous_cursor_not_used_when_next_has_none(self):
        header = (
            '<https://s/orders.json?limit=250&page_info=prev1>; rel="previous", '
            '<https://s/orders.json?limit=250>; rel="next"'
        )
        assert parse_next_page_info(header) is None

    def test_cursor_before_other_params(self):
        header = '<https://s/orders.json?page_info=xyz&limit=250>; rel="next"'
        assert parse_next_page_info(header) == "xyz"

    def test_next_without_cursor_is_last_page(self):
        header = '<https://s/orders.json?limit=250>; rel="next"'
        assert parse_next_page_info(header) is None

    def test_cursor_not_validated(self):
        header = '<https://s/orders.json?page_info=!!weird==>; rel="next"'
        assert parse_next_page_info(header) == "!!weird=="


class TestFetchAll:
    def test_single_page(self):
        client = FakeClient([Page({"orders": [{"id": 1}, {"id": 2}]})])
        items = fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000)

        assert items == [{"id": 1}, {"id": 2}]
        assert client.calls == [("orders.json", ORDER_QUERY)]

    def test_follows_cursor_with_only_limit_and_page_info(self):
        client = FakeClient([
            Page({"orders": [{"id": 1}]}, link("c1")),
            Page({"orders": [{"id": 2}]}, link("c2")),
            Page({"orders": [{"id": 3}]}),
        ])
        items = fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000)

        assert [o["id"] for o in items] == [1, 2, 3]
        assert client.calls[1] == ("orders.json", {"limit": 250, "page_info": "c1"})
        assert client.calls[2] == ("orders.json", {"limit": 250, "page_info": "c2"})

    def test_missing_items_field_is_empty(self):
        client = FakeClient([Page({}, link("c1")), Page({"orders": [{"id": 9}]})])
        assert fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000) == [{"id": 9}]

    def test_unparsable_cursor_stops_without_error(self):
        client = FakeClient([
            Page({"orders": [{"id": 1}]}, '<https://s/orders.json?limit=250>; rel="next"'),
            Page({"orders": [{"id": 2}]}),
        ])
        items = fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000)

        assert items == [{"id": 1}]
        assert len(client.calls) == 1

    def test_error_on_later_page_aborts(self):
        client = FakeClient([
            Page({"orders": [{"id": 1}]}, link("c1")),
            UpstreamFetchError(502),
        ])
        with pytest.raises(UpstreamFetchError) as exc_info:
            fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000)
        assert exc_info.value.status == 502

    def test_replay_yields_same_sequence(self):
        def pages():
            return [
                Page({"orders": [{"id": 1}, {"id": 2}]}, link("c1")),
                Page({"orders": [{"id": 3}]}),
            ]

        first = fetch_all(FakeClient(pages()), "orders.json", ORDER_QUERY, "orders", 5000)
        second = fetch_all(FakeClient(pages()), "orders.json", ORDER_QUERY, "orders", 5000)
        assert first == second

    def test_order_safety_cap(self):
        client = EndlessClient()
        items = fetch_all(client, "orders.json", ORDER_QUERY, "orders", 5000)

        assert 5000 < len(items) <= 5250
        assert client.calls == 21

    def test_product_safety_cap(self):
        client = EndlessClient()
        items = fetch_all(client, "products.json", {"status": "active", "limit": 250}, "orders", 2000)
        assert 2000 < len(items) <= 2250

    def test_cap_not_applied_at_exact_count(self):
        # 2 pages of 250 with cap 500: count never exceeds the cap, so the third page is fetched
        client = FakeClient([
            Page({"orders": [{}] * 250}, link("c1")),
            Page({"orders": [{}] * 250}, link("c2")),
            Page({"orders": [{}] * 10}),
        ])
        items = fetch_all(client, "orders.json", ORDER_QUERY, "orders", 500)
        assert len(items) == 510
