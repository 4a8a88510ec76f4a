"""
Order Export Service

Use cases shared by the HTTP app and the CLI: auth check, OAuth
callback, order export and course product listing. Parameters are
validated before the token store or Shopify is touched.
"""

import logging
from typing import Any, Dict, List, Optional

from .common.settings import AppSettings
from .errors import MissingParameter, NotAuthenticated
from .export import flatten_orders, select_course_products
from .models import ExportRecord, Order, Product, ProductSummary
from .shopify import ShopifyAPIClient, build_authorization_url, complete_oauth, fetch_all
from .storage import TokenStore

logger = logging.getLogger(__name__)


class OrderExportService:
    """
    Orchestrates token lookup, pagination and flattening per request.

    Usage:
        service = OrderExportService(settings, token_store)
        records = service.export_orders("my-store.myshopify.com", "2024-01-01", "2024-01-31")
    """

    def __init__(self, settings: AppSettings, token_store: TokenStore):
        self.settings = settings
        self.token_store = token_store

    def _require_token(self, shop: str) -> str:
        token = self.token_store.get_token(shop)
        if not token:
            logger.info("No access token on record for %s", shop)
            raise NotAuthenticated(shop)
        return token

    def _client(self, shop: str, token: str) -> ShopifyAPIClient:
        return ShopifyAPIClient(
            shop=shop,
            access_token=token,
            api_version=self.settings.api_version,
            timeout=self.settings.request_timeout,
        )

    def check_auth(self, shop: Optional[str], redirect_uri: str) -> Dict[str, Any]:
        """
        Report whether the shop has a token; if not, include the URL to start OAuth.
        """
        if not shop:
            raise MissingParameter("Missing shop parameter")

        if self.token_store.get_token(shop):
            return {"authenticated": True}

        auth_url = build_authorization_url(
            shop,
            self.settings.client_id,
            redirect_uri,
            scopes=self.settings.oauth_scopes,
        )
        return {"authenticated": False, "authUrl": auth_url}

    def handle_oauth_callback(self, code: Optional[str], shop: Optional[str]) -> str:
        """Exchange the authorization code and store the token for the shop."""
        if not code or not shop:
            raise MissingParameter("Missing code or shop parameter")

        return complete_oauth(
            shop,
            code,
            self.settings.credentials,
            self.token_store,
            timeout=self.settings.request_timeout,
        )

    def fetch_orders(self, shop: str, start_date: str, end_date: str) -> List[Order]:
        """Fetch every order created in the inclusive date range."""
        token = self._require_token(shop)
        query = {
            "status": "any",
            "created_at_min": f"{start_date}T00:00:00Z",
            "created_at_max": f"{end_date}T23:59:59Z",
            "limit": self.settings.page_size,
        }
        with self._client(shop, token) as client:
            raw_orders = fetch_all(client, "orders.json", query, "orders", self.settings.order_safety_cap)
        return [Order.from_api(o) for o in raw_orders]

    def export_orders(
        self,
        shop: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        product_id: Optional[str] = None,
    ) -> List[ExportRecord]:
        """
        Fetch orders for the date range and flatten them to export records.

        Args:
            shop: Shop domain
            start_date: First day, YYYY-MM-DD
            end_date: Last day, YYYY-MM-DD
            product_id: Only export line items for this product

        Raises:
            MissingParameter, NotAuthenticated, UpstreamFetchError
        """
        if not shop or not start_date or not end_date:
            raise MissingParameter("Missing required parameters")

        orders = self.fetch_orders(shop, start_date, end_date)
        records = flatten_orders(orders, product_id or None)
        logger.info("%s: %d orders -> %d bookings (%s to %s)",
                    shop, len(orders), len(records), start_date, end_date)
        return records

    def list_course_products(self, shop: Optional[str]) -> List[ProductSummary]:
        """Fetch active products and return the course ones, sorted by title."""
        if not shop:
            raise MissingParameter("Missing shop parameter")

        token = self._require_token(shop)
        query = {"status": "active", "limit": self.settings.page_size}
        with self._client(shop, token) as client:
            raw_products = fetch_all(client, "products.json", query, "products", self.settings.product_safety_cap)

        products = [Product.from_api(p) for p in raw_products]
        return select_course_products(products, self.settings.course_tag_keywords)
