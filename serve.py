#!/usr/bin/env python3
"""
Run the export API (Flask development server).

Usage:
    python3 serve.py --port 8080
"""

import argparse
import os
import sys

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(__file__))

from order_export.common import setup_logging
from order_export.web import create_app


def main():
    parser = argparse.ArgumentParser(description="Serve the course orders export API")
    parser.add_argument('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
    parser.add_argument('--port', '-p', type=int, default=8080, help='Port (default: 8080)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    args = parser.parse_args()
    setup_logging(verbose=args.verbose)

    app = create_app()
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()
