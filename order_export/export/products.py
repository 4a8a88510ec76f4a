"""
Course Product Selection

Picks out the products tagged as courses and returns them as a
title-sorted id/title list.
"""

import unicodedata
from typing import Iterable, List, Sequence, Tuple

from ..common.constants import COURSE_TAG_KEYWORDS
from ..models import Product, ProductSummary


def is_course_product(product: Product, keywords: Sequence[str] = COURSE_TAG_KEYWORDS) -> bool:
    """True if the lower-cased tags string contains any keyword as a substring."""
    tags = (product.tags or "").lower()
    return any(keyword in tags for keyword in keywords)


def locale_sort_key(title: str) -> Tuple[str, str, str]:
    """
    Sort key approximating locale-aware collation.

    Compares accent- and case-insensitively first, then by accents,
    then puts lowercase before uppercase.
    """
    folded = title.casefold()
    decomposed = unicodedata.normalize("NFKD", folded)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base, folded, title.swapcase()


def select_course_products(
    products: Iterable[Product],
    keywords: Sequence[str] = COURSE_TAG_KEYWORDS,
) -> List[ProductSummary]:
    """
    Filter products to courses and project to id/title, sorted by title.

    Args:
        products: Products as fetched
        keywords: Lower-case tag substrings marking a course

    Returns:
        ProductSummary list in ascending locale order
    """
    summaries = [
        ProductSummary(id=str(product.id), title=product.title)
        for product in products
        if is_course_product(product, keywords)
    ]
    return sorted(summaries, key=lambda p: locale_sort_key(p.title))
