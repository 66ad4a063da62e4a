"""Base scraper interface and the shared listing → detail page pipeline."""

import asyncio
import logging
from abc import ABC, abstractmethod

import httpx
from bs4 import BeautifulSoup, Tag

from cinefeed.config import settings
from cinefeed.http import fetch_text
from cinefeed.scrapers.merge import merge_entries, merge_films
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.urls import canonical_film_key, discover_links, origin

logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """
    Abstract base class for all cinema scrapers.

    All scrapers must implement ``fetch_films``. Scrapers that need a
    cookie or session bootstrap override ``warm_up``.
    """

    name: str = ""
    FEED_FILENAME: str = ""

    @abstractmethod
    async def fetch_films(self, client: httpx.AsyncClient) -> list[Film]:
        """
        Fetch the current programme.

        Args:
            client: Shared HTTP client (cookie jar, user agent, timeout)

        Returns:
            Film records, at most one per URL

        Raises:
            httpx.HTTPError: if the listing page or API endpoint cannot be
                fetched. Failures on individual detail pages are logged and
                the item is skipped.
        """

    async def warm_up(self, client: httpx.AsyncClient) -> None:
        """Optional request made before ``fetch_films`` to obtain cookies."""
        return None

    @property
    def feed_filename(self) -> str:
        """File name of this venue's own feed."""
        return self.FEED_FILENAME


class DetailPageScraper(BaseScraper):
    """
    Scraper for sites with a listing page linking to one detail page per film.

    Flow:
    1. GET ``listing_url`` (a failure here propagates).
    2. ``discover`` candidate entries, merged by canonical key and sorted.
    3. GET each detail page on a bounded worker pool and ``parse_detail`` it.
       A failed fetch or parse only drops that entry.
    4. Merge the resulting films by URL.

    Subclasses configure the flow through ``LINK_SELECTOR`` and
    ``canonical_key`` or override ``discover`` entirely, and implement
    ``parse_detail``.
    """

    LINK_SELECTOR: str = 'a[href*="/film/"]'

    def __init__(self, listing_url: str) -> None:
        self.listing_url = listing_url
        self.base = origin(listing_url)

    async def fetch_films(self, client: httpx.AsyncClient) -> list[Film]:
        body = await fetch_text(client, self.listing_url)

        entries = merge_entries(self.discover(body))
        if not entries:
            logger.warning(f"{self.name}: no films found on {self.listing_url}")
            return []

        logger.debug(f"{self.name}: {len(entries)} candidate pages")

        sem = asyncio.Semaphore(settings.scrape_concurrency)
        tasks = [self._fetch_detail(client, sem, entry) for entry in entries]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        films: list[Film] = []
        for entry, result in zip(entries, results):
            if isinstance(result, Exception):
                logger.warning(f"{self.name}: skipping {entry.url}: {result}")
                continue
            if result is None:
                logger.debug(f"{self.name}: no title on {entry.url}, skipped")
                continue
            films.append(result)

        films = merge_films(films)
        logger.info(f"{self.name}: Found {len(films)} films")
        return films

    async def _fetch_detail(
        self,
        client: httpx.AsyncClient,
        sem: asyncio.Semaphore,
        entry: ListingEntry,
    ) -> Film | None:
        async with sem:
            return await self.fetch_detail(client, entry)

    async def fetch_detail(self, client: httpx.AsyncClient, entry: ListingEntry) -> Film | None:
        """Fetch one detail page and parse it. Sources needing extra requests override this."""
        html = await fetch_text(client, entry.url)
        return self.parse_detail(html, entry)

    def discover(self, html: str) -> list[ListingEntry]:
        """Default discovery: every anchor matching ``LINK_SELECTOR``."""
        return [
            ListingEntry(
                key=key,
                url=url,
                title=self.listing_title(anchor),
                showtimes=self.listing_showtimes(anchor),
            )
            for key, url, anchor in discover_links(
                html, self.base, self.LINK_SELECTOR, key=self.canonical_key, unique=False
            )
        ]

    def canonical_key(self, url: str) -> str:
        return canonical_film_key(url)

    def listing_title(self, anchor: Tag) -> str | None:
        return None

    def listing_showtimes(self, anchor: Tag) -> list[str]:
        return []

    @abstractmethod
    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        """Build a film from one detail page; None when the page has no title."""

    def make_film(self, entry: ListingEntry, title: str | None, **fields) -> Film | None:
        """
        Build the film for ``entry``, or None when no title was found.

        Listing showtimes are appended after those found on the detail page.
        """
        title = (title or entry.title or "").strip()
        if not title:
            return None
        showtimes = list(fields.pop("showtimes", None) or []) + entry.showtimes
        return Film(
            title=title,
            url=fields.pop("url", None) or entry.url,
            poster_url=fields.pop("poster_url", None) or entry.poster_url,
            showtimes=showtimes,
            **fields,
        )


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")
