"""
HTTP Surface

Flask app exposing the export use cases as JSON endpoints for the
embedded admin UI, plus the OAuth callback.
"""

import logging
from typing import Optional
from urllib.parse import urlencode

from flask import Flask, Response, jsonify, redirect, request
from werkzeug.exceptions import HTTPException

from ..common.settings import AppSettings, load_settings
from ..errors import OrderExportError, UpstreamAuthError
from ..export import OrderCSVExporter, export_filename
from ..service import OrderExportService
from ..storage import JsonFileTokenStore, TokenStore

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _preflight() -> Optional[Response]:
    if request.method == "OPTIONS":
        return Response(status=200)
    return None


def create_app(settings: Optional[AppSettings] = None, token_store: Optional[TokenStore] = None) -> Flask:
    """Create and configure the Flask application."""
    if settings is None:
        settings = load_settings()
    if token_store is None:
        token_store = JsonFileTokenStore(settings.token_file)

    app = Flask(__name__)
    service = OrderExportService(settings, token_store)

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        # The OAuth callback answers the browser directly, not the UI
        if request.path != "/api/auth/callback":
            response.headers.update(CORS_HEADERS)
        return response

    @app.errorhandler(OrderExportError)
    def handle_export_error(error: OrderExportError):
        if error.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, error.message)
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        if isinstance(error, HTTPException):
            return error
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": str(error)}), 500

    @app.route("/api/orders", methods=["GET", "OPTIONS"])
    def orders():
        preflight = _preflight()
        if preflight is not None:
            return preflight

        args = request.args
        start_date = args.get("startDate")
        end_date = args.get("endDate")
        records = service.export_orders(
            args.get("shop"),
            start_date,
            end_date,
            args.get("productId"),
        )

        if args.get("format") == "csv":
            body = OrderCSVExporter().render(records)
            filename = export_filename(start_date, end_date)
            return Response(
                body,
                mimetype="text/csv",
                headers={"Content-Disposition": f'attachment; filename="{filename}"'},
            )

        return jsonify({
            "orders": [r.to_dict() for r in records],
            "count": len(records),
        })

    @app.route("/api/products", methods=["GET", "OPTIONS"])
    def products():
        preflight = _preflight()
        if preflight is not None:
            return preflight

        summaries = service.list_course_products(request.args.get("shop"))
        return jsonify({"products": [p.to_dict() for p in summaries]})

    @app.route("/api/auth/check", methods=["GET", "OPTIONS"])
    def auth_check():
        preflight = _preflight()
        if preflight is not None:
            return preflight

        redirect_uri = request.host_url.rstrip("/") + "/api/auth/callback"
        return jsonify(service.check_auth(request.args.get("shop"), redirect_uri))

    @app.route("/api/auth/callback", methods=["GET"])
    def auth_callback():
        shop = request.args.get("shop")
        host = request.args.get("host")

        try:
            service.handle_oauth_callback(request.args.get("code"), shop)
        except UpstreamAuthError as e:
            logger.error("OAuth error for %s: %s", shop, e.message)
            return Response("Failed to get access token", status=500, mimetype="text/plain")
        except OrderExportError as e:
            return Response(e.message, status=e.status_code, mimetype="text/plain")

        params = {"shop": shop}
        if host:
            params["host"] = host
        return redirect(f"/?{urlencode(params)}", code=302)

    return app
