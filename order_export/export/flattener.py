"""
Order Flattener

Turns orders into one flat ExportRecord per line item, pulling the
course booking details (child name, age, medical notes, ...) out of
free-form line item properties.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..common.constants import GUEST_CUSTOMER_NAME, PROPERTY_ALIASES
from ..models import ExportRecord, LineItem, LineItemProperty, Order

logger = logging.getLogger(__name__)

DATE_FORMAT = "%d/%m/%Y"


def build_property_map(properties: Iterable[LineItemProperty]) -> Dict[str, Any]:
    """Reduce a property list to a dict; later duplicates overwrite earlier ones."""
    props: Dict[str, Any] = {}
    for prop in properties:
        props[prop.name] = prop.value
    return props


def resolve_property(props: Mapping[str, Any], aliases: Sequence[str]) -> str:
    """
    Return the value of the first alias present with a non-empty value.

    Matching is case-sensitive. Returns "" when no alias matches.
    """
    for alias in aliases:
        value = props.get(alias)
        if value is not None and value != "":
            return value if isinstance(value, str) else str(value)
    return ""


def format_order_date(created_at: str) -> str:
    """
    Format an ISO 8601 timestamp as DD/MM/YYYY in UTC.

    Timestamps without an offset are taken as UTC. Unparsable input
    yields "".
    """
    if not created_at:
        return ""
    try:
        dt = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparsable order date: %r", created_at)
        return ""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(DATE_FORMAT)


def customer_name(order: Order) -> str:
    if order.customer is None:
        return GUEST_CUSTOMER_NAME
    return f"{order.customer.first_name or ''} {order.customer.last_name or ''}".strip()


def customer_email(order: Order) -> str:
    if order.customer is not None and order.customer.email:
        return order.customer.email
    return order.email or ""


def course_name(item: LineItem) -> str:
    if item.variant_title:
        return f"{item.title} - {item.variant_title}"
    return item.title


def matches_product(item: LineItem, product_filter_id: Optional[str]) -> bool:
    if not product_filter_id:
        return True
    return item.product_id is not None and str(item.product_id) == product_filter_id


def flatten_line_item(order: Order, item: LineItem) -> ExportRecord:
    """Build the export record for one line item of an order."""
    props = build_property_map(item.properties)
    extracted = {
        field: resolve_property(props, aliases)
        for field, aliases in PROPERTY_ALIASES.items()
    }
    return ExportRecord(
        orderNumber=order.name,
        orderDate=format_order_date(order.created_at),
        customerName=customer_name(order),
        customerEmail=customer_email(order),
        courseName=course_name(item),
        **extracted,
    )


def flatten_orders(orders: Iterable[Order], product_filter_id: Optional[str] = None) -> List[ExportRecord]:
    """
    Flatten orders into export records.

    Args:
        orders: Orders in fetch order
        product_filter_id: Keep only line items for this product id

    Returns:
        One record per kept line item; orders and line items keep
        their source order
    """
    records = []
    for order in orders:
        for item in order.line_items:
            if not matches_product(item, product_filter_id):
                continue
            records.append(flatten_line_item(order, item))
    return records
