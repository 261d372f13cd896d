# tests/utils/test_helpers.py
"""Tests for catalog/utils/helpers.py module."""

import re
from unittest.mock import MagicMock

from fastapi import FastAPI
from starlette.requests import Request

from catalog.utils.helpers import host, route_label, today_str


def _request(app: FastAPI, path: str, method: str = "GET") -> Request:
    scope = {
        "type": "http",
        "app": app,
        "method": method,
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [],
        "client": ("10.0.0.7", 1234),
    }
    return Request(scope)


class TestTodayStr:
    """Tests for today_str function."""

    def test_format_matches_expected_pattern(self) -> None:
        """Test that the date format matches YYYY-MM-DD HH:MM:SS."""
        assert re.match(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$", today_str())


class TestHost:
    """Tests for host function."""

    def test_client_address(self) -> None:
        assert host(_request(FastAPI(), "/")) == "10.0.0.7"

    def test_missing_client(self) -> None:
        request = MagicMock(spec=Request)
        request.client = None
        assert host(request) == "unknown"


class TestRouteLabel:
    """Tests for route_label function."""

    def test_matching_route_summary(self) -> None:
        app = FastAPI()

        @app.get("/things/{thing_id}", summary="Get a thing")
        async def get_thing(thing_id: int) -> dict[str, int]:
            return {"id": thing_id}

        assert route_label(_request(app, "/things/3")) == "Get a thing"

    def test_falls_back_to_method_and_path(self) -> None:
        assert route_label(_request(FastAPI(), "/nowhere", "POST")) == "POST /nowhere"
