"""
Application Settings

Settings are resolved in three layers: dataclass defaults, then
config/settings.yaml, then environment variables (a .env file is
loaded first). OAuth client credentials only ever come from the
environment.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv

from . import constants
from .config_loader import config_file_exists, load_config

logger = logging.getLogger(__name__)

SETTINGS_FILE = "settings.yaml"


@dataclass(frozen=True)
class OAuthCredentials:
    """Confidential Shopify app credentials."""
    client_id: str
    client_secret: str = field(repr=False)


@dataclass
class AppSettings:
    """Runtime configuration shared by the web app and the CLI."""
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    api_version: str = constants.API_VERSION
    page_size: int = constants.PAGE_SIZE
    order_safety_cap: int = constants.ORDER_SAFETY_CAP
    product_safety_cap: int = constants.PRODUCT_SAFETY_CAP
    oauth_scopes: str = constants.OAUTH_SCOPES
    course_tag_keywords: Tuple[str, ...] = constants.COURSE_TAG_KEYWORDS
    token_file: str = ".shopify_tokens.json"
    request_timeout: int = 30

    @property
    def credentials(self) -> OAuthCredentials:
        return OAuthCredentials(client_id=self.client_id, client_secret=self.client_secret)


# Environment variable -> settings attribute
ENV_OVERRIDES = {
    "SHOPIFY_CLIENT_ID": "client_id",
    "SHOPIFY_CLIENT_SECRET": "client_secret",
    "SHOPIFY_API_VERSION": "api_version",
    "TOKEN_FILE": "token_file",
    "COURSE_TAG_KEYWORDS": "course_tag_keywords",
}

SECRET_KEYS = {"client_id", "client_secret"}


def _coerce(name: str, value: Any) -> Any:
    """Coerce a YAML or env value to the type of the dataclass default."""
    default = AppSettings.__dataclass_fields__[name].default
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, int):
        return int(value)
    if isinstance(default, tuple):
        if isinstance(value, str):
            value = value.split(",")
        items = tuple(str(v).strip() for v in value if str(v).strip())
        # Tags are matched lower-cased
        if name == "course_tag_keywords":
            items = tuple(v.lower() for v in items)
        return items
    return str(value)


def load_settings(env: Optional[Dict[str, str]] = None, use_dotenv: bool = True) -> AppSettings:
    """
    Build AppSettings from defaults, config/settings.yaml and the environment.

    Args:
        env: Environment mapping (defaults to os.environ)
        use_dotenv: Load a .env file into os.environ first

    Returns:
        Populated AppSettings
    """
    if use_dotenv:
        load_dotenv()
    if env is None:
        env = dict(os.environ)

    values: Dict[str, Any] = {}
    known = {f.name for f in fields(AppSettings)}

    if config_file_exists(SETTINGS_FILE):
        for key, value in load_config(SETTINGS_FILE).items():
            if key in SECRET_KEYS:
                logger.warning("Ignoring '%s' in %s; set it in the environment", key, SETTINGS_FILE)
                continue
            if key not in known:
                logger.warning("Unknown setting '%s' in %s", key, SETTINGS_FILE)
                continue
            values[key] = _coerce(key, value)

    for env_name, attr in ENV_OVERRIDES.items():
        if env.get(env_name):
            values[attr] = _coerce(attr, env[env_name])

    settings = AppSettings(**values)
    if not settings.client_id or not settings.client_secret:
        logger.warning("SHOPIFY_CLIENT_ID / SHOPIFY_CLIENT_SECRET not set; OAuth will fail")
    return settings
