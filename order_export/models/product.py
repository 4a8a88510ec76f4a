"""
Product data models.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Product:
    """Shopify product as far as course selection needs it."""
    id: int | str
    title: str
    tags: str = ""          # Comma-separated, as Shopify returns them

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Product":
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            tags=data.get("tags") or "",
        )


@dataclass
class ProductSummary:
    """Minimal projection used to populate the course picker."""
    id: str
    title: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
