"""
Data models for orders and products.

This module contains data classes plus their API-payload constructors.
"""

from .order import Customer, ExportRecord, LineItem, LineItemProperty, Order
from .product import Product, ProductSummary

__all__ = [
    'Customer',
    'ExportRecord',
    'LineItem',
    'LineItemProperty',
    'Order',
    'Product',
    'ProductSummary',
]
