"""Circolo Enrico Pizzuti cineforum scraper."""

import logging

from bs4 import Tag

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import image_url, select_text
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import element_text
from cinefeed.utils.urls import discover_links, strip_query

logger = logging.getLogger(__name__)

# How far above the "Cineforum" heading to look for the film grid
MAX_CONTAINER_DEPTH = 6


class EnricoPizzutiScraper(DetailPageScraper):
    """
    Scraper for the cineforum of Circolo Enrico Pizzuti.

    The homepage mixes the cineforum with other events. The cineforum films
    are the ``/film/`` links in the nearest ancestor of the "Cineforum"
    heading that contains any.
    """

    BASE_URL = "https://www.enricopizzuti.it"

    name = "Circolo Enrico Pizzuti"
    FEED_FILENAME = "enrico_pizzuti.xml"

    def __init__(self, listing_url: str = BASE_URL + "/") -> None:
        super().__init__(listing_url)

    def canonical_key(self, url: str) -> str:
        return strip_query(url)

    def discover(self, html: str) -> list[ListingEntry]:
        container = self.cineforum_container(parse_html(html))
        if container is None:
            return []
        return [
            ListingEntry(key=key, url=url)
            for key, url, _ in discover_links(
                html, self.base, self.LINK_SELECTOR, key=self.canonical_key, scope=container
            )
        ]

    @staticmethod
    def cineforum_container(soup: Tag) -> Tag | None:
        for heading in soup.select("h5"):
            if "cineforum" not in element_text(heading).lower():
                continue
            for depth, parent in enumerate(heading.parents):
                if depth >= MAX_CONTAINER_DEPTH:
                    break
                if parent.select_one('a[href*="/film/"]') is not None:
                    return parent
        return None

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        container = soup.select_one("div.container.film-description")
        if container is None:
            logger.debug(f"{self.name}: no film description on {entry.url}")
            return None

        date_text = select_text(container, "div.film-date")
        cast_block = container.select_one("div.film-cast")
        credits = [
            select_text(cast_block, selector)
            for selector in ("div.director", "div.nazione", "div.cast")
        ]
        content = soup.select_one("div.film-content")

        return self.make_film(
            entry,
            select_text(container, "h1"),
            poster_url=image_url(content, "div.film-screens img", self.base),
            cast=" | ".join(c for c in credits if c) or None,
            release_date=date_text,
            synopsis=select_text(content, "div.film-text p"),
            showtimes=[date_text] if date_text else [],
        )
