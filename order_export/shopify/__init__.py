"""
Shopify integration modules.

Modules:
    api_client - Admin REST client returning one page per call
    pagination - Link header cursor parsing and fetch-all loop
    oauth      - Authorization URL and code-for-token exchange
"""

from .api_client import Page, ShopifyAPIClient, normalize_shop_domain
from .oauth import build_authorization_url, complete_oauth, exchange_code_for_token
from .pagination import fetch_all, parse_next_page_info

__all__ = [
    # API Client
    'Page',
    'ShopifyAPIClient',
    'normalize_shop_domain',
    # Pagination
    'fetch_all',
    'parse_next_page_info',
    # OAuth
    'build_authorization_url',
    'complete_oauth',
    'exchange_code_for_token',
]
