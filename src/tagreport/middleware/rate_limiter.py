"""
Rate limiting for authentication endpoints
"""

import os
import logging

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from fastapi import Request
from fastapi.responses import JSONResponse

from ..utils.errors import error_body

logger = logging.getLogger(__name__)

storage_uri = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["1000/hour"],
    storage_uri=storage_uri,
    headers_enabled=False,
    enabled=os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true",
)

LOGIN_LIMIT = "5/minute"


async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        f"Rate limit exceeded: {request.client.host if request.client else 'unknown'} -> {request.url.path}"
    )
    retry_after = 60
    return JSONResponse(
        status_code=429,
        content=error_body("TAG-429", "Rate limit exceeded. Please try again later."),
        headers={"Retry-After": str(retry_after)}
    )
