"""
Middleware for API endpoints - Authentication, Logging
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from typing import Callable
import logging
import secrets
import time

from ..config import settings

logger = logging.getLogger(__name__)

# Only state-changing channel routes need a key; listing stays open.
PROTECTED_PREFIX = "/channels/provision"


def verify_api_key(api_key: str | None) -> bool:
    """Verify if API key is valid"""
    if not settings.API_KEY or not api_key:
        return False
    return secrets.compare_digest(api_key, settings.API_KEY)


async def api_key_middleware(request: Request, call_next: Callable):
    """
    Middleware to verify API key in request headers.
    Only applies to /channels/provision.
    """
    if not request.url.path.startswith(PROTECTED_PREFIX):
        return await call_next(request)

    api_key = request.headers.get("X-API-Key") or request.headers.get("Authorization")

    if api_key and api_key.startswith("Bearer "):
        api_key = api_key.replace("Bearer ", "", 1)

    if not verify_api_key(api_key):
        client_ip = request.client.host if request.client else "unknown"
        logger.warning(f"❌ Invalid API key attempt from {client_ip}")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={
                "error": "Invalid or missing API key",
                "message": "Please provide a valid API key in X-API-Key header"
            }
        )

    return await call_next(request)


async def logging_middleware(request: Request, call_next: Callable):
    """
    Middleware to log all requests and responses.
    Logs timing, status, and details.
    """
    start_time = time.time()

    client_ip = request.client.host if request.client else "unknown"
    logger.info(f"📥 {request.method} {request.url.path} from {client_ip}")

    try:
        response = await call_next(request)

        duration = (time.time() - start_time) * 1000  # ms

        status_emoji = "✅" if response.status_code < 400 else "❌"
        logger.info(
            f"{status_emoji} {request.method} {request.url.path} "
            f"→ {response.status_code} ({duration:.0f}ms)"
        )

        response.headers["X-Process-Time"] = f"{duration:.2f}ms"

        return response

    except Exception as e:
        duration = (time.time() - start_time) * 1000
        logger.error(f"❌ {request.method} {request.url.path} → ERROR ({duration:.0f}ms): {str(e)}")
        raise
