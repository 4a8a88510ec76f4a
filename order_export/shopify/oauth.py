"""
Shopify OAuth

Builds the authorization URL and exchanges an authorization code for
an Admin API access token. The exchange is a single attempt.
"""

import logging
import urllib.parse

import requests

from ..common.constants import OAUTH_SCOPES
from ..common.settings import OAuthCredentials
from ..errors import UpstreamAuthError
from ..storage import TokenStore
from .api_client import normalize_shop_domain

logger = logging.getLogger(__name__)


def build_authorization_url(
    shop: str,
    client_id: str,
    redirect_uri: str,
    scopes: str = OAUTH_SCOPES,
) -> str:
    """Build Shopify authorization URL."""
    params = {
        "client_id": client_id,
        "scope": scopes,
        "redirect_uri": redirect_uri,
    }

    base_url = f"https://{normalize_shop_domain(shop)}/admin/oauth/authorize"
    return f"{base_url}?{urllib.parse.urlencode(params, safe=',')}"


def exchange_code_for_token(
    shop: str,
    code: str,
    credentials: OAuthCredentials,
    timeout: int = 30,
) -> str:
    """
    Exchange authorization code for access token.

    Args:
        shop: Shop domain
        code: Authorization code from the OAuth callback
        credentials: App client id and secret
        timeout: Request timeout in seconds

    Returns:
        The access token

    Raises:
        UpstreamAuthError: If Shopify rejects the exchange or omits the token
    """
    url = f"https://{normalize_shop_domain(shop)}/admin/oauth/access_token"

    data = {
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "code": code,
    }

    try:
        response = requests.post(url, json=data, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Token exchange request failed for %s: %s", shop, e)
        raise UpstreamAuthError(None, str(e)) from e

    if response.status_code != 200:
        logger.error("Token exchange failed for %s: %d - %s", shop, response.status_code, response.text[:200])
        raise UpstreamAuthError(response.status_code, response.text)

    try:
        access_token = response.json().get("access_token")
    except ValueError as e:
        raise UpstreamAuthError(response.status_code, response.text) from e

    if not access_token:
        logger.error("Token exchange for %s returned no access_token", shop)
        raise UpstreamAuthError(response.status_code, response.text)

    return access_token


def complete_oauth(
    shop: str,
    code: str,
    credentials: OAuthCredentials,
    token_store: TokenStore,
    timeout: int = 30,
) -> str:
    """
    Exchange the code and store the resulting token for the shop.

    The token store is written exactly once on success and not at all
    on failure.
    """
    access_token = exchange_code_for_token(shop, code, credentials, timeout=timeout)
    token_store.save_token(shop, access_token)
    logger.info("Stored access token for %s", shop)
    return access_token
