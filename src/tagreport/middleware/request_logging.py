"""
Per-request timing log
"""

import logging
import time
import uuid
from contextvars import ContextVar

from fastapi import Request

logger = logging.getLogger(__name__)

# Read by error responses so their transaction_id matches the log line
request_id_var: ContextVar[str] = ContextVar('request_id', default='')


async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request_id_var.set(request_id)

    start_time = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start_time

    response.headers["X-Request-ID"] = request_id
    logger.info(
        f"{request.method} {request.url.path} [{response.status_code}] "
        f"took {duration:.3f}s (request {request_id})"
    )
    return response
