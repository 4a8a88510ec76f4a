"""
Flask HTTP surface.
"""

from .app import CORS_HEADERS, create_app

__all__ = ['CORS_HEADERS', 'create_app']
