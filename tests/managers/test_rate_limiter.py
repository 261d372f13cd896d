"""Tests for catalog/managers/rate_limiter.py."""

import json

import pytest
from starlette.requests import Request

from catalog.managers.rate_limiter import get_identifier, rate_limit_exceeded_handler


def _request(headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    return Request(
        {
            "type": "http",
            "method": "GET",
            "path": "/api/v1/products",
            "headers": headers or [],
            "client": ("192.168.1.20", 5000),
        },
    )


def test_identifier_prefers_api_key() -> None:
    assert get_identifier(_request([(b"x-api-key", b"secret")])) == "apikey:secret"


def test_identifier_falls_back_to_address() -> None:
    assert get_identifier(_request()) == "ip:192.168.1.20"


@pytest.mark.asyncio
async def test_exceeded_handler_renders_failed_result() -> None:
    class Exceeded(Exception):
        detail = "30 per 1 minute"

    response = await rate_limit_exceeded_handler(_request(), Exceeded())

    assert response.status_code == 429
    body = json.loads(response.body)
    assert body["isSuccess"] is False
    assert body["errors"] == ["30 per 1 minute"]
