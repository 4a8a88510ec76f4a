"""
Cursor Pagination

Walks a Shopify REST collection by following the ``page_info`` cursor
advertised in the ``Link`` response header.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Protocol

from ..common.constants import PAGE_SIZE
from .api_client import Page

logger = logging.getLogger(__name__)

PAGE_INFO_RE = re.compile(r'page_info=([^>&]+)')
NEXT_REL = 'rel="next"'


class PageSource(Protocol):
    """Anything that can fetch one page, e.g. ShopifyAPIClient."""

    def get_page(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Page:
        ...


def parse_next_page_info(link_header: Optional[str]) -> Optional[str]:
    """
    Extract the next-page cursor from a Link header.

    Example header:
        <https://shop/admin/api/2024-01/orders.json?limit=250&page_info=abc>; rel="previous",
        <https://shop/admin/api/2024-01/orders.json?limit=250&page_info=def>; rel="next"

    The cursor is taken verbatim from the rel="next" entry; it is not
    validated beyond the pattern match.

    Returns:
        The cursor, or None when there is no next page or it can't be parsed
    """
    if not link_header or NEXT_REL not in link_header:
        return None

    # Scoped to the rel="next" entry; a whole-header match can pick up the rel="previous" cursor
    for part in link_header.split(","):
        if NEXT_REL not in part:
            continue
        match = PAGE_INFO_RE.search(part)
        if match:
            return match.group(1)

    logger.warning("Link header advertises a next page without a page_info cursor")
    return None


def fetch_all(
    client: PageSource,
    resource_path: str,
    initial_query: Dict[str, Any],
    items_field: str,
    safety_cap: int,
) -> List[Dict[str, Any]]:
    """
    Fetch every page of a collection, up to a safety cap.

    The first request uses initial_query. Follow-up requests send only
    the page size and cursor, since the cursor already encodes the
    original filters. Fetching stops when no next page is advertised or
    once more than safety_cap items have been collected, so the result
    can overshoot the cap by at most one page.

    Args:
        client: Page source bound to one shop and token
        resource_path: Endpoint, e.g. "orders.json"
        initial_query: Filters for the first page, including "limit"
        items_field: Response key holding the item list, e.g. "orders"
        safety_cap: Item count after which fetching stops

    Returns:
        Raw item dicts in fetch order

    Raises:
        UpstreamFetchError: If any page request fails (no partial result)
    """
    limit = initial_query.get("limit", PAGE_SIZE)
    params: Dict[str, Any] = dict(initial_query)
    items: List[Dict[str, Any]] = []
    pages = 0

    while True:
        page = client.get_page(resource_path, params)
        pages += 1

        batch = page.data.get(items_field) or []
        items.extend(batch)
        logger.debug("%s page %d: %d items (total %d)", resource_path, pages, len(batch), len(items))

        page_info = parse_next_page_info(page.link_header)
        if not page_info:
            break

        if len(items) > safety_cap:
            logger.warning("Safety cap of %d reached for %s; stopping at %d items",
                           safety_cap, resource_path, len(items))
            break

        params = {"limit": limit, "page_info": page_info}

    logger.info("Fetched %d %s in %d page(s)", len(items), items_field, pages)
    return items
