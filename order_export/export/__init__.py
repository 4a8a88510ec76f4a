"""
Export pipeline.

Modules:
    flattener    - Orders to flat per-line-item export records
    products     - Course product selection and sorting
    csv_exporter - Booking spreadsheet CSV rendering
"""

from .csv_exporter import EXPORT_FIELDNAMES, OrderCSVExporter, export_filename
from .flattener import flatten_orders, resolve_property
from .products import select_course_products

__all__ = [
    'EXPORT_FIELDNAMES',
    'OrderCSVExporter',
    'export_filename',
    'flatten_orders',
    'resolve_property',
    'select_course_products',
]
