"""
Error taxonomy for the export pipeline.

Core code raises these; the HTTP layer maps them to status codes.
"""

from typing import Optional


class OrderExportError(Exception):
    """Base class for all export errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameter(OrderExportError):
    """A required request parameter is absent."""

    status_code = 400


class NotAuthenticated(OrderExportError):
    """No access token is on record for the shop."""

    status_code = 401

    def __init__(self, shop: str):
        super().__init__("Not authenticated. Please reinstall the app.")
        self.shop = shop


class UpstreamAuthError(OrderExportError):
    """Shopify rejected the authorization code exchange."""

    def __init__(self, status: Optional[int], body: str = ""):
        super().__init__(f"Token exchange failed: {status}")
        self.status = status
        self.body = body


class UpstreamFetchError(OrderExportError):
    """A paginated resource request returned a non-success status."""

    def __init__(self, status: Optional[int], detail: str = ""):
        if status is None:
            message = f"Shopify API error: {detail}"
        elif detail:
            message = f"Shopify API error: {status} ({detail})"
        else:
            message = f"Shopify API error: {status}"
        super().__init__(message)
        self.status = status
        self.detail = detail
