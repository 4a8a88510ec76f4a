"""
Course Orders Export Tool

Modules:
    models   - Data models (Order, LineItem, ExportRecord, Product)
    common   - Shared utilities (config loader, settings, logging, CSV utils)
    shopify  - Shopify API client, OAuth exchange and cursor pagination
    export   - Order flattening, course product selection, CSV rendering
    storage  - Per-shop access token store
    web      - Flask HTTP surface
"""
