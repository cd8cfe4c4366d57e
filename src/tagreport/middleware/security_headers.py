"""
Security headers middleware per OWASP recommendations
"""

import os
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

STRICT_CSP = (
    "default-src 'self'; "
    "base-uri 'self'; "
    "frame-ancestors 'none'; "
    "object-src 'none'; "
    "form-action 'self'; "
    "script-src 'self'; "
    "style-src 'self'; "
    "img-src 'self' data: https:; "
    "font-src 'self' data:; "
    "connect-src 'self'"
)

# Swagger UI needs inline scripts outside production
DEVELOPMENT_CSP = STRICT_CSP.replace(
    "script-src 'self'", "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
).replace(
    "style-src 'self'", "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses"""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        response = await call_next(request)
        production = os.getenv("ENVIRONMENT", "development") == "production"

        response.headers["Content-Security-Policy"] = STRICT_CSP if production else DEVELOPMENT_CSP
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Photos are taken through the file picker, not getUserMedia
        response.headers["Permissions-Policy"] = "geolocation=(), microphone=(), camera=()"

        if production and os.getenv("HTTPS_ENABLED") == "true":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
