"""
Shopify API Client

Thin client for the Shopify Admin REST API.
Handles authentication headers, shop domain normalization and
turning HTTP failures into UpstreamFetchError. Each call is a single
attempt: there is no retry or throttling layer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from ..common.constants import API_VERSION
from ..errors import UpstreamFetchError

logger = logging.getLogger(__name__)


def normalize_shop_domain(shop: str) -> str:
    """
    Normalize a shop identifier to its bare domain.

    Accepts "my-store", "my-store.myshopify.com" or a full URL.
    """
    domain = shop.strip().replace("https://", "").replace("http://", "").rstrip("/")
    if "." not in domain:
        domain = f"{domain}.myshopify.com"
    return domain


@dataclass
class Page:
    """One page of a REST collection response."""
    data: Dict[str, Any]
    link_header: Optional[str] = None


class ShopifyAPIClient:
    """
    Client for one shop's Admin REST API.

    Usage:
        with ShopifyAPIClient(shop="my-store.myshopify.com", access_token="shpat_xxx") as client:
            page = client.get_page("orders.json", {"limit": 250})
    """

    def __init__(
        self,
        shop: str,
        access_token: str,
        api_version: str = API_VERSION,
        timeout: int = 30,
    ):
        """
        Initialize the API client.

        Args:
            shop: Shop domain (or bare shop name)
            access_token: Shopify Admin API access token
            api_version: Admin API version, e.g. "2024-01"
            timeout: Per-request timeout in seconds
        """
        self.shop = normalize_shop_domain(shop)
        self.api_version = api_version
        self.timeout = timeout
        self.base_url = f"https://{self.shop}/admin/api/{api_version}"

        self.session = requests.Session()
        self.session.headers.update({
            "X-Shopify-Access-Token": access_token,
            "Content-Type": "application/json",
        })

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.session.close()

    def close(self):
        self.session.close()

    def get_page(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Page:
        """
        GET one page of a collection endpoint.

        Args:
            endpoint: API endpoint relative to the versioned base (e.g., "orders.json")
            params: Query parameters

        Returns:
            Page with the decoded JSON body and the raw Link header

        Raises:
            UpstreamFetchError: On transport failure or any non-2xx status
        """
        url = urljoin(self.base_url + "/", endpoint)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            logger.error("Request timeout: %s", endpoint)
            raise UpstreamFetchError(None, "timeout") from e
        except requests.exceptions.RequestException as e:
            logger.error("Request failed: %s", e)
            raise UpstreamFetchError(None, str(e)) from e

        if not 200 <= response.status_code < 300:
            logger.error("API Error %d on %s: %s", response.status_code, endpoint, response.text[:200])
            raise UpstreamFetchError(response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Invalid JSON from %s", endpoint)
            raise UpstreamFetchError(response.status_code, "invalid JSON") from e

        return Page(data=data, link_header=response.headers.get("Link"))
