"""
Access Token Store

Per-shop storage for Shopify Admin API access tokens, keyed as
``token:<shop domain>``. Tokens have no expiry; re-authentication
simply overwrites the stored value.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)


def token_key(shop: str) -> str:
    """Build the store key for a shop domain."""
    return f"token:{shop}"


class TokenStore(ABC):
    """
    Minimal key/value interface for access tokens.

    Subclasses implement get() and put(); the shop-level helpers
    build keys so callers never format them by hand.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def put(self, key: str, token: str) -> None:
        ...

    def get_token(self, shop: str) -> Optional[str]:
        return self.get(token_key(shop))

    def save_token(self, shop: str, token: str) -> None:
        self.put(token_key(shop), token)


class MemoryTokenStore(TokenStore):
    """Process-local token store, used by tests and single-process runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def put(self, key: str, token: str) -> None:
        self._data[key] = token


class JsonFileTokenStore(TokenStore):
    """
    Token store backed by a JSON file.

    The whole file is rewritten on every put. A lock serialises writers
    within one process; across processes the last writer wins.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def put(self, key: str, token: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = token
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        logger.debug("Stored token under %s in %s", key, self.path)
