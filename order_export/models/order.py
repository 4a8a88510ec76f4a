"""
Order data models.

Dataclasses for Shopify orders as returned by the Admin REST API, and
the flat export record derived from each line item. ``from_api``
constructors are the only place that knows the upstream JSON field names.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class LineItemProperty:
    """Free-form key/value captured at checkout."""
    name: str
    value: Any = ""


@dataclass
class LineItem:
    """A single purchased item within an order."""
    title: str
    variant_title: Optional[str] = None
    product_id: Optional[int | str] = None
    properties: List[LineItemProperty] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "LineItem":
        raw_props = data.get("properties")
        properties = []
        if isinstance(raw_props, list):
            for prop in raw_props:
                if isinstance(prop, dict) and prop.get("name") is not None:
                    properties.append(LineItemProperty(name=str(prop["name"]), value=prop.get("value")))

        return cls(
            title=data.get("title") or "",
            variant_title=data.get("variant_title"),
            product_id=data.get("product_id"),
            properties=properties,
        )


@dataclass
class Customer:
    """Customer attached to an order (absent for guest checkouts)."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Customer":
        return cls(
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            email=data.get("email"),
        )


@dataclass
class Order:
    """Shopify order with its line items."""
    id: Optional[int]
    name: str                       # Display number, e.g. "#1001"
    created_at: str                 # ISO 8601 timestamp with offset
    email: Optional[str] = None     # Order-level contact email
    customer: Optional[Customer] = None
    line_items: List[LineItem] = field(default_factory=list)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Order":
        customer = data.get("customer")
        return cls(
            id=data.get("id"),
            name=data.get("name") or "",
            created_at=data.get("created_at") or "",
            email=data.get("email"),
            customer=Customer.from_api(customer) if customer is not None else None,
            line_items=[LineItem.from_api(item) for item in data.get("line_items") or []],
        )


@dataclass
class ExportRecord:
    """One flat row per exported line item."""
    orderNumber: str
    orderDate: str
    customerName: str
    customerEmail: str
    courseName: str
    childName: str = ""
    childAge: str = ""
    childDOB: str = ""
    medicalConditions: str = ""
    contactPhone: str = ""
    contactEmail: str = ""

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
