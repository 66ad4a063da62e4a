"""Berlinale (Berlin International Film Festival) programme scraper."""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import BlockRules, collect_block, first_heading, first_of, meta_content
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.dates import today_rome
from cinefeed.utils.json_data import dig, dig_list, dig_str, extract_embedded_json
from cinefeed.utils.text import join_unique, text_lines
from cinefeed.utils.urls import absolute_url, scan_raw_ids, strip_query

logger = logging.getLogger(__name__)

# Film page ids are at least this many digits: "/en/2026/programme/202612345.html"
MIN_FILM_ID_DIGITS = 6

CREDITED_FUNCTIONS = ("director", "screenplay", "screenplay based on")

# Text fallback: the synopsis is read from at most this many lines after its heading
SYNOPSIS_RULES = BlockRules(min_length=50, stop_below=10, skip_prefixes=("http",), max_lines=14)

# Screening lines on the page mention the festival month
SCREENING_MARKERS = ("Screenings", "Februar", "February")

_TITLE_SUFFIXES = (" | Berlinale", " – Berlinale")
_FILM_PATH_RE = re.compile(r"/programme/(\d+)\.html$")


@dataclass
class FilmPage:
    """Fields read from one film page, filled from JSON first and page text second."""

    running_time: int | None = None
    cast: str | None = None
    director: str | None = None
    synopsis: list[str] = field(default_factory=list)
    showtimes: list[str] = field(default_factory=list)


class BerlinaleScraper(DetailPageScraper):
    """
    Scraper for the Berlinale "on sale" programme.

    Film pages embed their data as an ``initial_result: {...}`` object in an
    inline script. When the object is missing or incomplete the page text
    is scanned instead. Titles are published as "Title by Director".
    """

    BASE_URL = "https://www.berlinale.de"
    LINK_SELECTOR = 'a[href*="/programme/"][href$=".html"]'

    name = "Berlinale"
    FEED_FILENAME = "berlinale.xml"

    def __init__(
        self,
        listing_url: str = BASE_URL + "/en/programme/on-sale-from-today.html",
        edition: int | None = None,
    ) -> None:
        super().__init__(listing_url)
        self.edition = edition or today_rome().year

    def canonical_key(self, url: str) -> str:
        return strip_query(url)

    def discover(self, html: str) -> list[ListingEntry]:
        entries = [e for e in super().discover(html) if is_film_detail_url(e.url)]
        if entries:
            return entries

        logger.debug(f"{self.name}: no film anchors, scanning raw markup")
        urls = [
            f"{self.base}/en/{self.edition}/programme/{film_id}.html"
            for film_id in self.raw_film_ids(html)
        ]
        return [ListingEntry(key=url, url=url) for url in urls]

    def raw_film_ids(self, html: str) -> list[str]:
        ids = scan_raw_ids(
            html, ["/programme/"], min_digits=MIN_FILM_ID_DIGITS, suffixes=(".html", "\\")
        )
        if ids:
            return ids
        # Ids start with the edition year followed by five digits
        year = str(self.edition)
        return sorted({year + m for m in re.findall(re.escape(year) + r"(\d{5})", html)})

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        data = extract_embedded_json(html, "initial_result:")

        title = film_title(data, soup)
        if not title or title.startswith("https://"):
            return None

        page = from_json(data) if data is not None else FilmPage()
        if not page.synopsis or page.cast is None or not page.showtimes:
            fill_from_text(page, text_lines(soup))

        return self.make_film(
            entry,
            f"{title} by {page.director}" if page.director else title,
            poster_url=self.poster(data, soup),
            cast=page.cast,
            running_time=page.running_time,
            synopsis=join_unique(page.synopsis),
            showtimes=page.showtimes,
        )

    def poster(self, data: dict | None, soup: BeautifulSoup) -> str | None:
        """Poster still from JSON, then the main image, og:image, then any programme image."""
        uri = first_of(
            lambda: _poster_still(data),
            lambda: dig_str(data, "image", "default", "uri"),
            lambda: meta_content(soup, "og:image"),
            lambda: _programme_image(soup),
        )
        return absolute_url(self.base, uri) if uri else None


def is_film_detail_url(url: str) -> bool:
    match = _FILM_PATH_RE.search(strip_query(url))
    return bool(match) and len(match.group(1)) >= MIN_FILM_ID_DIGITS


def film_title(data: dict | None, soup: BeautifulSoup) -> str | None:
    title = first_of(
        lambda: dig_str(data, "title"),
        lambda: meta_content(soup, "og:title"),
        lambda: first_heading(soup),
    )
    if not title:
        return None
    for suffix in _TITLE_SUFFIXES:
        title = title.removesuffix(suffix)
    return title.strip() or None


def from_json(data: dict[str, Any]) -> FilmPage:
    page = FilmPage()

    minutes = (dig_str(data, "meta", 0) or "").rstrip("'").strip()
    if minutes.isdigit():
        page.running_time = int(minutes)
    else:
        duration = dig(data, "events", 0, "time", "durationInMinutes")
        page.running_time = duration if isinstance(duration, int) else None

    reduced_crew = _names(dig_list(data, "reducedCrewMembers"))
    credited = []
    for member in dig_list(data, "crewMembers"):
        function = dig_str(member, "function")
        name = dig_str(member, "names", 0, "name")
        if not function or not name:
            continue
        if function.lower() in CREDITED_FUNCTIONS:
            credited.append(f"{name} ({function})")
        if function == "Director" and page.director is None:
            page.director = name
    if page.director is None:
        page.director = next(
            (n.removesuffix(" (Director)") for n in reduced_crew if n.endswith(" (Director)")),
            None,
        )

    by_line = None
    if credited:
        by_line = "by " + ", ".join(credited)
    elif dig(data, "reducedCrewMembers") is not None:
        by_line = "by " + ", ".join(reduced_crew)
    cast_names = ", ".join(_names(dig_list(data, "castMembers")))
    if by_line and cast_names:
        by_line = f"{by_line} Cast: {cast_names}"
    page.cast = by_line

    synopsis = dig_str(data, "synopsis")
    if synopsis:
        page.synopsis = [synopsis.replace("<br />", "\n").replace("<br/>", "\n").strip()]

    for event in dig_list(data, "events"):
        day = dig_str(event, "displayDate", "dayAndMonth") or ""
        time = dig_str(event, "time", "text") or ""
        if not day and not time:
            continue
        weekday = dig_str(event, "displayDate", "weekday") or ""
        hall = dig_str(event, "venueHall") or ""
        page.showtimes.append(f"{weekday} {day} {time} - {hall}".strip())
    return page


def fill_from_text(page: FilmPage, lines: list[str]) -> None:
    """Complete ``page`` from the flattened page text."""
    for idx, line in enumerate(lines):
        lower = line.lower()
        following = lines[idx + 1] if idx + 1 < len(lines) else None

        if page.running_time is None and (" min" in line or line == "min"):
            digits = re.match(r"\d+", line)
            if digits:
                page.running_time = int(digits.group(0))

        if page.cast is None and lower in ("director:", "regie:") and following:
            page.cast = following
            page.director = following
        elif page.cast is not None and lower == "cast:" and following:
            page.cast = f"{page.cast}. {following}" if page.cast else following

        if not page.synopsis and lower in ("synopsis", "plot"):
            page.synopsis = collect_block(lines[idx + 1:], SYNOPSIS_RULES)

        if (
            not page.showtimes
            and any(marker in line for marker in SCREENING_MARKERS)
            and (":" in line or any(c.isdigit() for c in line))
        ):
            page.showtimes.append(line)


def _programme_image(soup: BeautifulSoup) -> str | None:
    for img in soup.select('img[src*="berlinale"], img[src*="programme"]'):
        src = (img.get("src") or "").strip()
        if src:
            return src
    return None


def _poster_still(data: dict | None) -> str | None:
    for still in dig_list(data, "filmstills"):
        uri = dig_str(still, "media", "defaultImage", "uri")
        if uri and ("plakate" in uri or "poster" in uri):
            return uri
    return None


def _names(members: list[Any]) -> list[str]:
    names = [dig_str(member, "name") for member in members]
    return [name for name in names if name]
