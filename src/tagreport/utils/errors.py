"""
Standardized error handling for the Test & Tag reporting service
"""

import logging
import uuid
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from ..middleware.request_logging import request_id_var

logger = logging.getLogger(__name__)

ERROR_REGISTRY = {
    400: ("TAG-400", "Bad Request: General validation error"),
    401: ("TAG-401", "Unauthorized: Missing, invalid or expired credentials"),
    403: ("TAG-403", "Forbidden: Insufficient permissions"),
    404: ("TAG-404", "Not Found: Resource does not exist"),
    409: ("TAG-409", "Conflict: Resource already exists"),
    422: ("TAG-422", "Unprocessable Entity: Semantic validation error"),
    429: ("TAG-429", "Too Many Requests: Rate limit exceeded"),
    500: ("TAG-500", "Internal Server Error: Generic server failure"),
}


class DomainError(Exception):
    """Base for business rule failures raised below the router layer"""
    status_code = 400
    error_code = "TAG-400"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SessionNotFound(DomainError):
    status_code = 404
    error_code = "TAG-404-SESSION"

    def __init__(self, session_id: int):
        super().__init__(f"Test session {session_id} not found")
        self.session_id = session_id


class ResultNotFound(DomainError):
    status_code = 404
    error_code = "TAG-404-RESULT"

    def __init__(self, result_id: int):
        super().__init__(f"Test result {result_id} not found")
        self.result_id = result_id


class PermissionDenied(DomainError):
    status_code = 403
    error_code = "TAG-403"


class AssetNumberError(DomainError):
    """Asset number rejected for a session"""
    error_code = "TAG-400-ASSET"

    def __init__(self, message: str, asset_number: Optional[str] = None):
        super().__init__(message)
        self.asset_number = asset_number


class NotANumber(AssetNumberError):
    error_code = "TAG-400-ASSET-NAN"


class OutOfBand(AssetNumberError):
    error_code = "TAG-400-ASSET-BAND"


class DuplicateAssetNumber(AssetNumberError):
    error_code = "TAG-400-ASSET-DUPLICATE"


class AssetNumberReentryRequired(AssetNumberError):
    """Frequency moved the item into another band; a new tag number must be entered"""
    error_code = "TAG-400-ASSET-REENTRY"

    def __init__(self, message: str, asset_number: Optional[str], suggested_asset_number: int):
        super().__init__(message, asset_number)
        self.suggested_asset_number = suggested_asset_number


def error_body(error_code: str, message, **extra) -> dict:
    body = {
        "transaction_id": request_id_var.get() or str(uuid.uuid4()),
        "error_code": error_code,
        "message": message,
    }
    body.update(extra)
    return body


async def error_handler(request: Request, exc: HTTPException):
    """Standardized error handler for all HTTP exceptions"""
    error_code, message = ERROR_REGISTRY.get(
        exc.status_code,
        ("TAG-500", "Internal Server Error")
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(error_code, exc.detail or message),
        headers=getattr(exc, "headers", None)
    )


async def domain_error_handler(request: Request, exc: DomainError):
    extra = {}
    if isinstance(exc, AssetNumberError) and exc.asset_number is not None:
        extra["asset_number"] = exc.asset_number
    if isinstance(exc, AssetNumberReentryRequired):
        extra["suggested_asset_number"] = exc.suggested_asset_number

    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} on {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error_code} on {request.url.path}: {exc.message}")

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error_code, exc.message, **extra)
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    """Last-resort handler: stack trace to the log, generic message to the client"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error_code, message = ERROR_REGISTRY[500]
    return JSONResponse(status_code=500, content=error_body(error_code, message))
