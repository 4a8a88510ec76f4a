#!/usr/bin/env python3
"""
Export course bookings (orders + line item properties) to CSV.

Uses the access token stored for the shop by the OAuth callback
(see serve.py), or one supplied with --token.

Usage:
    # Export all bookings for January
    python3 export_orders.py --shop my-store.myshopify.com --start 2024-01-01 --end 2024-01-31

    # Only bookings for one course, to a specific file
    python3 export_orders.py --shop my-store.myshopify.com --start 2024-01-01 --end 2024-01-31 \\
        --product-id 7891234567 --output output/january.csv

    # List course products (id and title)
    python3 export_orders.py --shop my-store.myshopify.com --list-products

    # Store an existing Admin API token for the shop
    python3 export_orders.py --shop my-store.myshopify.com --token shpat_xxx --save-token
"""

import argparse
import logging
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from order_export.common import load_settings, setup_logging
from order_export.errors import OrderExportError
from order_export.export import OrderCSVExporter, export_filename
from order_export.service import OrderExportService
from order_export.storage import JsonFileTokenStore, MemoryTokenStore

logger = logging.getLogger("order_export.cli")


def main():
    parser = argparse.ArgumentParser(
        description="Export course bookings from Shopify orders to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--shop', '-s', required=True,
                        help='Shop domain (e.g., my-store.myshopify.com)')
    parser.add_argument('--start', type=str,
                        help='First order date, YYYY-MM-DD')
    parser.add_argument('--end', type=str,
                        help='Last order date, YYYY-MM-DD')
    parser.add_argument('--product-id', '-p', type=str,
                        help='Only export line items for this product id')
    parser.add_argument('--output', '-o', type=str,
                        help='Output CSV path (default: output/rcfc-courses-<start>-to-<end>.csv)')
    parser.add_argument('--list-products', action='store_true',
                        help='List course products instead of exporting orders')
    parser.add_argument('--token', '-t', type=str,
                        help='Admin API access token (default: token stored for the shop)')
    parser.add_argument('--save-token', action='store_true',
                        help='Persist --token to the token file and exit')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Only log warnings and errors')

    args = parser.parse_args()
    setup_logging(verbose=args.verbose, quiet=args.quiet)

    settings = load_settings()

    if args.save_token:
        if not args.token:
            parser.error("--save-token requires --token")
        JsonFileTokenStore(settings.token_file).save_token(args.shop, args.token)
        print(f"Token saved for {args.shop} in {settings.token_file}")
        return

    if args.token:
        store = MemoryTokenStore()
        store.save_token(args.shop, args.token)
    else:
        store = JsonFileTokenStore(settings.token_file)

    service = OrderExportService(settings, store)

    try:
        if args.list_products:
            products = service.list_course_products(args.shop)
            for product in products:
                print(f"{product.id}\t{product.title}")
            print(f"\n{len(products)} course products")
            return

        if not args.start or not args.end:
            parser.error("--start and --end are required to export orders")

        records = service.export_orders(args.shop, args.start, args.end, args.product_id)
    except OrderExportError as e:
        logger.error("%s", e.message)
        sys.exit(1)

    if not records:
        print("No bookings found for the selected range.")
        return

    output = args.output or os.path.join("output", export_filename(args.start, args.end))
    count = OrderCSVExporter().export(records, output)
    print(f"Exported {count} bookings to {output}")


if __name__ == "__main__":
    main()
