"""
Middleware package for authentication and request logging
"""
from .auth import (
    api_key_middleware,
    logging_middleware,
    verify_api_key,
)

__all__ = [
    "api_key_middleware",
    "logging_middleware",
    "verify_api_key",
]
