"""Cinemazero Pordenone scraper."""

import logging

from bs4 import BeautifulSoup

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import first_heading
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import clean_text, element_text, text_lines
from cinefeed.utils.urls import strip_query

logger = logging.getLogger(__name__)

SCHEDULE_MARKER = "programmazione e orari"
SCHEDULE_END = "oggi al cinema"

# Fallback synopsis paragraphs must be at least this long
MIN_PARAGRAPH_LENGTH = 80
# Schedule lines this short with a digit and no colon are day headers ("Sab 14/02")
MAX_DATE_LINE_LENGTH = 12
MAX_HALL_LENGTH = 4


class CinemazeroScraper(DetailPageScraper):
    """
    Scraper for Cinemazero, Pordenone.

    Film pages are mostly unstructured text: the synopsis sits between the
    title and the "Programmazione e orari" section, interleaved with
    "Genere"/"Regia"/"Cast" lines, and the schedule is a run of day headers
    followed by "<hall> <time>" lines.
    """

    BASE_URL = "https://cinemazero.it"
    LINK_SELECTOR = 'a[href*="/film/"]'

    name = "Cinemazero Pordenone"
    FEED_FILENAME = "cinemazero.xml"

    def __init__(self, listing_url: str = BASE_URL + "/programmazione/") -> None:
        super().__init__(listing_url)

    def canonical_key(self, url: str) -> str:
        return strip_query(url)

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        lines = text_lines(soup)

        title = first_heading(soup) or (lines[0] if lines else None)
        genre = director = cast = None
        synopsis_lines = []
        for line in self._lines_after_title(lines, title):
            lower = line.lower()
            if SCHEDULE_MARKER in lower:
                break
            if lower.startswith("genere "):
                genre = _strip_label(line, "Genere")
            elif lower.startswith("regia "):
                director = _strip_label(line, "Regia")
            elif lower.startswith("cast"):
                cast = _strip_label(line, "Cast") or cast
            else:
                synopsis_lines.append(line)

        synopsis = clean_text(" ".join(synopsis_lines)) if synopsis_lines else None
        if not synopsis:
            logger.debug(f"{self.name}: no synopsis after title on {entry.url}, using longest paragraph")
            synopsis = longest_paragraph(soup)

        credits = [
            f"{label}: {value}"
            for label, value in (("Genere", genre), ("Regia", director), ("Cast", cast))
            if value
        ]

        poster = soup.select_one('img[alt*="Immagine del film"]')
        poster_src = (poster.get("src") or "").strip() if poster else ""

        return self.make_film(
            entry,
            title,
            poster_url=poster_src or None,
            cast=" | ".join(credits) or None,
            running_time=running_time(lines),
            synopsis=synopsis,
            showtimes=schedule(lines),
        )

    @staticmethod
    def _lines_after_title(lines: list[str], title: str | None) -> list[str]:
        wanted = (title or "").lower()
        for idx, line in enumerate(lines):
            if line.lower() == wanted:
                return lines[idx + 1:]
        return lines[1:]


def _strip_label(line: str, label: str) -> str | None:
    return line[len(label):].strip(": \t") or None


def longest_paragraph(soup: BeautifulSoup) -> str | None:
    """The longest prose ``<p>`` that does not look like metadata or the schedule."""
    best = None
    for p in soup.select("p"):
        text = element_text(p)
        lower = text.lower()
        if len(text) < MIN_PARAGRAPH_LENGTH or "." not in text:
            continue
        if any(word in lower for word in ("genere", "regia", "cast", SCHEDULE_MARKER)):
            continue
        if best is None or len(text) > len(best):
            best = text
    return clean_text(best) if best else None


def running_time(lines: list[str]) -> int | None:
    """Leading integer of the first line ending in " m" or " min"."""
    for line in lines:
        lower = line.lower()
        if not lower.endswith((" m", " min")):
            continue
        first = line.split()[0]
        if first.isdigit():
            return int(first)
    return None


def schedule(lines: list[str]) -> list[str]:
    """
    Read the "Programmazione e orari" section as "<day> [hall] <time>" phrases.

    Times listed before the first day header are ignored.
    """
    start = next((i for i, line in enumerate(lines) if SCHEDULE_MARKER in line.lower()), None)
    if start is None:
        return []

    showtimes = []
    current_date = None
    for line in lines[start + 1:]:
        if line.lower().startswith(SCHEDULE_END):
            break
        if len(line) <= MAX_DATE_LINE_LENGTH and ":" not in line and any(c.isdigit() for c in line):
            current_date = line
            continue

        tokens = line.split()
        time = next((t for t in tokens if ":" in t), None)
        if time is None or current_date is None:
            continue
        hall = next(
            (t for t in tokens if t.isascii() and t.isalpha() and len(t) <= MAX_HALL_LENGTH),
            None,
        )
        showtimes.append(" ".join(part for part in (current_date, hall, time) if part))
    return showtimes
