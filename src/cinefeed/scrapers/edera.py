"""Cinema Edera and Cinema Manzoni scraper.

Both venues run the same site template: a weekly timetable linking to one
page per film, with a label/value option block and a per-day time picker.
"""

import logging

from bs4 import BeautifulSoup, Tag

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import image_url, select_text
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import element_text, join_unique, parse_running_time
from cinefeed.utils.urls import absolute_url

logger = logging.getLogger(__name__)

EDERA_URL = "https://www.cinemaedera.it/i-film-della-settimana.html"
MANZONI_URL = "https://www.cinemamanzoni.it/i-film-della-settimana.html"

# Bold lines in the body that repeat metadata already read from the option block
_METADATA_PREFIXES = ("genere", "paese", "regia", "cast", "anno", "lingua")


class EderaScraper(DetailPageScraper):
    """
    Scraper for the weekly programme of Cinema Edera (Treviso) and its sister
    venue Cinema Manzoni. Pass the venue's listing URL and display name.
    """

    FEED_FILENAME = "cinema_edera.xml"

    def __init__(self, listing_url: str = EDERA_URL, name: str = "Cinema Multisala Edera") -> None:
        super().__init__(listing_url)
        self.name = name

    def discover(self, html: str) -> list[ListingEntry]:
        soup = parse_html(html)
        table = soup.select_one("#timetable")
        if table is None:
            logger.warning(f"{self.name}: timetable not found on {self.listing_url}")
            return []

        entries = []
        for link in table.select("tbody tr a.category__item"):
            href = (link.get("href") or "").strip()
            title = select_text(link, "strong")
            if not href or not title:
                continue
            url = absolute_url(self.base, href)
            entries.append(ListingEntry(key=url, url=url, title=title))
        return entries

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)

        cast = release_date = None
        option_parts = []
        options = soup.select_one("div.movie__option")
        if options is not None:
            for p in options.select("p"):
                label, sep, value = element_text(p).partition(":")
                if not sep:
                    continue
                label, value = label.strip(), value.strip()
                if label == "Cast":
                    cast = value
                elif label == "Anno":
                    release_date = value
                else:
                    option_parts.append(f"{label}: {value}")

        return self.make_film(
            entry,
            entry.title,
            poster_url=image_url(soup, ".movie__images img.img-responsive", self.base),
            cast=cast or None,
            release_date=release_date or None,
            running_time=parse_running_time(select_text(soup, "p.movie__time")),
            synopsis=self._synopsis(soup, option_parts),
            showtimes=self._showtimes(soup),
        )

    def _synopsis(self, soup: BeautifulSoup, option_parts: list[str]) -> str | None:
        parts = []
        if option_parts:
            parts.append(" | ".join(option_parts))
        parts.append(select_text(soup, "p.movie__describe") or "")
        parts.extend(element_text(h3) for h3 in soup.select("#main-content-wrapper section h3"))
        for strong in soup.select("#main-content-wrapper section strong"):
            text = element_text(strong)
            lower = text.lower()
            if lower.startswith(_METADATA_PREFIXES) or "orari spettacoli" in lower:
                continue
            parts.append(text)
        return join_unique(parts)

    def _showtimes(self, soup: BeautifulSoup) -> list[str]:
        """Read "<date> ore <time>" from each group of the time picker."""
        picker = soup.select_one("div.time-select")
        if picker is None:
            return []

        showtimes = []
        for group in picker.select("div.time-select__group"):
            day = select_text(group, "p.time-select__place")
            if not day:
                continue
            for item in group.select("li.time-select__item"):
                time = _time_token(item)
                if time:
                    showtimes.append(f"{day} ore {time}")
        return showtimes


def _time_token(item: Tag) -> str | None:
    for token in element_text(item).split():
        if ":" in token:
            return token
    return None
