"""
Test & Tag Compliance Reporting Backend
Main FastAPI application
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from slowapi.errors import RateLimitExceeded

from . import __version__
from .config import settings
from .database.core import engine
from .health import readiness
from .middleware.rate_limiter import limiter, rate_limit_handler
from .middleware.request_logging import log_requests
from .middleware.security_headers import SecurityHeadersMiddleware
from .routers import (
    auth,
    custom_forms,
    environments,
    reports,
    test_results,
    test_sessions,
    users,
)
from .utils.errors import (
    DomainError,
    domain_error_handler,
    error_handler,
    unhandled_error_handler,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log startup and dispose of the connection pool on shutdown"""
    logger.info(f"Starting tagreport {__version__} ({settings.environment})")
    try:
        yield
    finally:
        logger.info("Shutting down, disposing database engine")
        await engine.dispose()


app = FastAPI(
    title="Test & Tag Compliance Reporting",
    description="""
    ## Test & Tag Compliance Reporting API

    Backend for electrical test-and-tag, emergency exit light and fire
    equipment inspections.

    ### Key Features:
    - **Test sessions**: one site visit per session, with per-item results
    - **Asset numbers**: per-session allocation and validation in monthly (1-9999) and five-yearly (10000+) bands
    - **Reports**: PDF and Excel compliance reports citing AS/NZS 3760, AS 2293.2 or AS 1851 / NZS 4503
    - **Roles**: technician, support center and super admin capabilities
    - **JWT Authentication**: Bearer header or HttpOnly cookie, with revocation on logout
    """,
    version=__version__,
    lifespan=lifespan,
    tags_metadata=[
        {"name": "Authentication", "description": "Login, registration and password management"},
        {"name": "test_sessions", "description": "Site visit sessions and asset number helpers"},
        {"name": "test_results", "description": "Per-item results, including batch submission"},
        {"name": "reports", "description": "PDF and Excel report downloads"},
        {"name": "Health", "description": "Liveness and readiness checks"},
    ]
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

app.add_middleware(SecurityHeadersMiddleware)
app.middleware("http")(log_requests)

app.add_exception_handler(StarletteHTTPException, error_handler)
app.add_exception_handler(DomainError, domain_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(test_sessions.router)
app.include_router(test_sessions.admin_router)
app.include_router(test_results.router)
app.include_router(reports.router)
app.include_router(environments.router)
app.include_router(custom_forms.router)
app.include_router(readiness.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5000)
