"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from order_export.common.settings import AppSettings
from order_export.storage import MemoryTokenStore

SHOP = "test-store.myshopify.com"


def make_response(status_code=200, json_data=None, headers=None, text=""):
    """Build a MagicMock standing in for a requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data if json_data is not None else {}
    response.headers = headers or {}
    response.text = text
    return response


def next_link(cursor, shop=SHOP, resource="orders.json"):
    """Link header advertising a next page."""
    return f'<https://{shop}/admin/api/2024-01/{resource}?limit=250&page_info={cursor}>; rel="next"'


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def link_factory():
    return next_link


@pytest.fixture
def shop():
    return SHOP


@pytest.fixture
def settings():
    """Settings with fake credentials and default caps."""
    return AppSettings(client_id="client-123", client_secret="secret-456")


@pytest.fixture
def token_store():
    return MemoryTokenStore()


@pytest.fixture
def authed_store():
    store = MemoryTokenStore()
    store.save_token(SHOP, "shpat_test")
    return store


@pytest.fixture
def guest_order_payload():
    """Order without a customer object; email only at order level."""
    return {
        "id": 1001,
        "name": "#1001",
        "created_at": "2024-03-05T10:15:00+00:00",
        "email": "a@x.com",
        "customer": None,
        "line_items": [
            {
                "title": "Football Training",
                "variant_title": None,
                "product_id": 555,
                "properties": [],
            }
        ],
    }


@pytest.fixture
def full_order_payload():
    """Order with a customer and two booked line items."""
    return {
        "id": 1002,
        "name": "#1002",
        "created_at": "2024-03-06T23:30:00-02:00",
        "email": "order@example.com",
        "customer": {
            "first_name": "Jane",
            "last_name": "Smith",
            "email": "jane@example.com",
        },
        "line_items": [
            {
                "title": "Holiday Camp",
                "variant_title": "Week 1",
                "product_id": 777,
                "properties": [
                    {"name": "Child's Name", "value": "Tom Smith"},
                    {"name": "Child's Age", "value": "8"},
                    {"name": "Child's Date of Birth", "value": "2016-01-02"},
                    {"name": "Known Medical Conditions", "value": "Asthma"},
                    {"name": "Contact Telephone Number", "value": "07700 900123"},
                    {"name": "Contact Email", "value": "parent@example.com"},
                ],
            },
            {
                "title": "Community Session",
                "variant_title": "",
                "product_id": 888,
                "properties": [
                    {"name": "child_name", "value": "Amy Smith"},
                    {"name": "child_age", "value": 6},
                ],
            },
        ],
    }
