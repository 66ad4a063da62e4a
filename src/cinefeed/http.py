"""Shared HTTP client construction and fetch helpers."""

import logging
from typing import Any

import httpx

from cinefeed.config import settings

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json,text/javascript,*/*;q=0.1"


def create_client() -> httpx.AsyncClient:
    """
    Build the client used for a whole run.

    The client keeps its own cookie jar, so a scraper's warm-up request and
    the requests that follow it share the same session.
    """
    return httpx.AsyncClient(
        timeout=settings.scrape_timeout,
        follow_redirects=True,
        headers={"User-Agent": settings.user_agent},
    )


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None = None,
) -> str:
    """GET ``url`` and return the body. Raises ``httpx.HTTPError`` on failure."""
    logger.debug(f"GET {url}")
    response = await client.get(url, params=params)
    response.raise_for_status()
    return response.text


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None = None,
) -> Any:
    """GET a JSON endpoint and return the decoded payload."""
    logger.debug(f"GET {url} params={params}")
    response = await client.get(url, params=params, headers={"Accept": JSON_ACCEPT})
    response.raise_for_status()
    return response.json()
