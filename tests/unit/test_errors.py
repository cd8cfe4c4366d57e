"""Unit tests for the error registry and exception handlers."""

import asyncio
import json
from unittest.mock import MagicMock

from fastapi import HTTPException

from tagreport.utils.errors import (
    AssetNumberReentryRequired,
    DuplicateAssetNumber,
    ResultNotFound,
    SessionNotFound,
    domain_error_handler,
    error_handler,
    unhandled_error_handler,
)


def _request(path="/api/sessions/1"):
    request = MagicMock()
    request.url.path = path
    request.method = "GET"
    return request


def _body(response):
    return json.loads(response.body.decode())


def test_not_found_errors_carry_404():
    assert SessionNotFound(3).status_code == 404
    assert "3" in SessionNotFound(3).message
    assert ResultNotFound(8).error_code == "TAG-404-RESULT"


def test_http_exception_rendered_with_registry_code():
    response = asyncio.run(error_handler(_request(), HTTPException(status_code=403, detail="Nope")))

    assert response.status_code == 403
    body = _body(response)
    assert body["error_code"] == "TAG-403"
    assert body["message"] == "Nope"


def test_asset_number_error_includes_number():
    exc = DuplicateAssetNumber("Asset number 5 already exists for this session", asset_number="5")
    response = asyncio.run(domain_error_handler(_request(), exc))

    assert response.status_code == 400
    body = _body(response)
    assert body["error_code"] == "TAG-400-ASSET-DUPLICATE"
    assert body["asset_number"] == "5"
    assert "suggested_asset_number" not in body


def test_reentry_error_includes_suggestion():
    exc = AssetNumberReentryRequired("enter a new number", asset_number="3", suggested_asset_number=10000)
    body = _body(asyncio.run(domain_error_handler(_request(), exc)))

    assert body["suggested_asset_number"] == 10000


def test_unhandled_error_hides_details(caplog):
    with caplog.at_level("ERROR"):
        response = asyncio.run(unhandled_error_handler(_request(), RuntimeError("db password is hunter2")))

    assert response.status_code == 500
    body = _body(response)
    assert body["error_code"] == "TAG-500"
    assert "hunter2" not in body["message"]
    assert any("Unhandled error" in r.getMessage() for r in caplog.records)
