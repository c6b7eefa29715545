"""
Shared fixtures: canned upstream replies and a mocked HTTP client.
"""

from unittest.mock import AsyncMock

import httpx
import pytest


def json_response(data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=data)


@pytest.fixture
def make_client():
    """Build an AsyncMock client answering GETs from a url -> response (or exception) map."""

    def _make(replies: dict):
        client = AsyncMock(spec=httpx.AsyncClient)

        async def get(url, *args, **kwargs):
            reply = replies.get(url)
            if reply is None:
                raise httpx.ConnectError(f"No route to {url}")
            if isinstance(reply, Exception):
                raise reply
            if isinstance(reply, httpx.Response):
                return reply
            return json_response(reply)

        client.get.side_effect = get
        return client

    return _make


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
