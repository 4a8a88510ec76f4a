"""
Token storage.

Modules:
    token_store - Per-shop access token store (memory and JSON file backends)
"""

from .token_store import JsonFileTokenStore, MemoryTokenStore, TokenStore, token_key

__all__ = [
    'TokenStore',
    'MemoryTokenStore',
    'JsonFileTokenStore',
    'token_key',
]
