"""Shared test fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest


def make_http_response(
    text: str = "",
    json_data: Any = None,
    status_code: int = 200,
) -> MagicMock:
    """A stand-in for ``httpx.Response`` whose ``raise_for_status`` fails for 4xx/5xx."""
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=MagicMock(), response=response
        )
    else:
        response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def http_response() -> Callable[..., MagicMock]:
    return make_http_response


@pytest.fixture
def mock_client() -> Callable[[dict[str, MagicMock]], AsyncMock]:
    """
    Factory for a mocked ``httpx.AsyncClient`` routing GETs by exact URL.

    Unknown URLs answer 404.
    """

    def factory(routes: dict[str, MagicMock]) -> AsyncMock:
        async def get(url: str, **kwargs: object) -> MagicMock:
            return routes.get(url) or make_http_response(status_code=404)

        client = AsyncMock()
        client.get = AsyncMock(side_effect=get)
        client.cookies = {}
        return client

    return factory
