"""Cinema Edera film seasons ("rassegne") scraper.

Each season page becomes one feed entry. Its synopsis lists the films of
the season, read from their own pages.
"""

import logging
from dataclasses import dataclass, replace

import httpx

from cinefeed.http import fetch_text
from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import first_heading, image_url, paragraphs, select_text
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import join_unique, text_lines
from cinefeed.utils.urls import absolute_url, strip_query

logger = logging.getLogger(__name__)

SEASON_TEXT_SELECTORS = (
    "#main-content-wrapper section p",
    "div.entry-content p",
    "article div.entry-content p",
)


@dataclass
class SeasonFilm:
    """One film of a season, as read from its own page."""

    title: str
    poster_url: str | None = None
    synopsis: str | None = None

    def block(self) -> str:
        return f"* {self.title}\n{self.synopsis}" if self.synopsis else f"* {self.title}"


class EderaRassegneScraper(DetailPageScraper):
    """Scraper for the seasons page of Cinema Edera."""

    BASE_URL = "https://www.cinemaedera.it"
    LINK_SELECTOR = 'a[href*="/rassegne/"]'

    name = "Cinema Edera"
    FEED_FILENAME = "rassegne_edera.xml"

    def __init__(self, listing_url: str = BASE_URL + "/rassegne.html") -> None:
        super().__init__(listing_url)

    def discover(self, html: str) -> list[ListingEntry]:
        entries = super().discover(html)
        return [e for e in entries if not strip_query(e.url).endswith("/rassegne.html")]

    def canonical_key(self, url: str) -> str:
        return url

    async def fetch_detail(self, client: httpx.AsyncClient, entry: ListingEntry) -> Film | None:
        html = await fetch_text(client, entry.url)
        film = self.parse_detail(html, entry)
        if film is None:
            return None

        films = []
        for url in self.season_film_urls(html):
            try:
                films.append(self.parse_season_film(await fetch_text(client, url), url))
            except httpx.HTTPError as e:
                logger.warning(f"{self.name}: skipping season film {url}: {e}")

        if not films:
            return film
        parts = [film.synopsis or "", "I film della rassegna:"]
        parts.extend(f.block() for f in films)
        return replace(
            film,
            poster_url=film.poster_url or next((f.poster_url for f in films if f.poster_url), None),
            synopsis=join_unique(parts),
        )

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        """Season page alone: title, "Dal ... al ..." range and introduction."""
        soup = parse_html(html)
        date_range = next((line for line in text_lines(soup) if line.startswith("Dal ")), None)
        intro = join_unique(
            paragraphs(soup, SEASON_TEXT_SELECTORS, keep=lambda text: text != date_range)
        )
        return self.make_film(
            entry,
            first_heading(soup),
            release_date=date_range,
            synopsis=join_unique(["Cinema: Cinema Edera", date_range or "", intro or ""]),
        )

    def season_film_urls(self, html: str) -> list[str]:
        """Links from a season page to the pages of its films."""
        urls: list[str] = []
        for anchor in parse_html(html).select("a[href]"):
            href = anchor["href"].strip()
            if not href or "/rassegne/" in href:
                continue
            if "/film" not in href and "i-film" not in href:
                continue
            url = absolute_url(self.base, href)
            if url not in urls:
                urls.append(url)
        return urls

    def parse_season_film(self, html: str, url: str) -> SeasonFilm:
        soup = parse_html(html)
        return SeasonFilm(
            title=first_heading(soup) or url,
            poster_url=image_url(soup, ".movie__images img.img-responsive", self.base),
            synopsis=select_text(soup, "p.movie__describe"),
        )
