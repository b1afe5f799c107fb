"""
Core module for the file uploader backend
"""

from .config import settings
from .middleware import RequestLoggingMiddleware

__all__ = ["settings", "RequestLoggingMiddleware"]
