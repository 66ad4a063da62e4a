"""Cinergia Conegliano scraper (18tickets platform)."""

import logging
import re

from bs4 import BeautifulSoup

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import first_heading, first_of, meta_content
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.dates import today_rome
from cinefeed.utils.text import (
    join_unique,
    line_after,
    looks_like_date_line,
    looks_like_time,
    parse_running_time,
    text_lines,
    value_after_label,
)
from cinefeed.utils.urls import scan_raw_ids, strip_query

logger = logging.getLogger(__name__)

_FILM_ID_RE = re.compile(r"/film/(\d+)(?:/|$)")

# Headings that label a page section rather than carry the title
_SECTION_HEADINGS = ("Plot", "Info", "Trama")
_SYNOPSIS_NOISE = ("Watch the trailer", "Seleziona", "Select ")


class CinergiaScraper(DetailPageScraper):
    """
    Scraper for Cinergia Conegliano.

    Film pages are addressed by a numeric id. Detail pages are fetched with
    ``ref_date`` set to today so they list the upcoming screenings; the
    record URL omits it to stay stable between runs. The detail page has
    little markup, so most fields come from its flattened text lines.
    """

    BASE_URL = "https://coneglianocinergia.18tickets.it"

    name = "Cinergia Conegliano"
    FEED_FILENAME = "cinergia_conegliano.xml"

    def __init__(self, listing_url: str = BASE_URL + "/") -> None:
        super().__init__(listing_url)

    def discover(self, html: str) -> list[ListingEntry]:
        ids = self.film_ids(html)
        ref_date = today_rome().isoformat()
        return [
            ListingEntry(
                key=f"{self.base}/film/{film_id}",
                url=f"{self.base}/film/{film_id}?ref_date={ref_date}",
            )
            for film_id in ids
        ]

    def film_ids(self, html: str) -> list[str]:
        """Numeric ids from ``/film/<id>`` anchors, or from the raw markup when there are none."""
        soup = parse_html(html)
        ids = set()
        for anchor in soup.select('a[href*="/film/"]'):
            match = _FILM_ID_RE.search(strip_query(anchor.get("href") or "").strip())
            if match:
                ids.add(match.group(1))
        if ids:
            return sorted(ids)
        logger.debug(f"{self.name}: no film anchors, scanning raw markup")
        return scan_raw_ids(html, ["/film/"])

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        lines = text_lines(soup)

        title = first_heading(soup, "h1, h2, h3, h4, h5, h6", skip=_SECTION_HEADINGS)
        running_time = None
        for line in lines:
            value = value_after_label(line, "Durata:")
            if value:
                running_time = parse_running_time(value)
                break

        return self.make_film(
            entry,
            title,
            url=entry.key,
            poster_url=first_of(
                lambda: meta_content(soup, "og:image"),
                lambda: _content_image(soup),
            ),
            cast=_credits(
                line_after(lines, ["Director:"]),
                line_after(lines, ["With:", "Con:"]),
            ),
            running_time=running_time,
            synopsis=join_unique(plot_lines(lines)),
            showtimes=screenings(lines),
        )


def plot_lines(lines: list[str]) -> list[str]:
    """Lines of the "Plot"/"Trama" block, up to "Info" or the first date line."""
    collected = []
    in_plot = False
    for line in lines:
        if line.lower() in ("plot", "trama"):
            in_plot = True
            continue
        if not in_plot:
            continue
        if line.lower() == "info" or looks_like_date_line(line):
            in_plot = False
            continue
        if len(line) > 30 and not any(noise in line for noise in _SYNOPSIS_NOISE):
            collected.append(line)
    return collected


def screenings(lines: list[str]) -> list[str]:
    """
    Pair each time line with the date line above it.

    A time before any date line is kept as "ore HH:MM".
    """
    showtimes = []
    current_date = None
    for line in lines:
        if looks_like_date_line(line):
            current_date = line
        elif looks_like_time(line):
            time = line.strip().lstrip("-").strip()
            showtimes.append(f"{current_date} ore {time}" if current_date else f"ore {time}")
    return showtimes


def _content_image(soup: BeautifulSoup) -> str | None:
    for img in soup.select("img[src]"):
        src = img["src"].strip()
        if src.startswith("http") and "cookie" not in src and "logo" not in src:
            return src
    return None


def _credits(director: str | None, with_cast: str | None) -> str | None:
    if director and with_cast:
        return f"Regia: {director}. Con: {with_cast}"
    if director:
        return f"Regia: {director}"
    if with_cast:
        return f"Con: {with_cast}"
    return None
