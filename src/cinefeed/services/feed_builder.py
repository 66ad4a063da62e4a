"""RSS feed generation from scraped film records."""

import html
import logging
import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from pathlib import Path

from feedgen.feed import FeedGenerator

from cinefeed.scrapers.models import Film
from cinefeed.utils.dates import ROME_TZ
from cinefeed.utils.text import ITALIAN_MONTHS

logger = logging.getLogger(__name__)

PART_SEPARATOR = "<br/><br/>"

_MONTH_RE = re.compile(
    r"(?:(\d{1,2})\s+)?(" + "|".join(ITALIAN_MONTHS) + r")(?:\s+(\d{4}))?",
    re.IGNORECASE,
)
_YEAR_RE = re.compile(r"\b(\d{4})\b")


def describe_film(film: Film) -> str:
    """
    Build the HTML description of one feed item.

    Parts appear in a fixed order and are omitted when the field is empty:
    synopsis, cast, release date, running time, poster, showtimes. A film
    without any of them is described as "Film: <title>".
    """
    parts: list[str] = []
    if film.synopsis:
        parts.append(html.escape(film.synopsis).replace("\n", "<br/>"))
    if film.cast:
        parts.append(f"Cast: {html.escape(film.cast)}")
    if film.release_date:
        parts.append(f"Data: {html.escape(film.release_date)}")
    if film.running_time:
        parts.append(f"Durata: {film.running_time} minuti")
    if film.poster_url:
        parts.append(f'<img src="{html.escape(film.poster_url, quote=True)}"/>')
    if film.showtimes:
        parts.append("Orari: " + html.escape(" | ".join(film.showtimes)))

    if not parts:
        return f"Film: {html.escape(film.title)}"
    return PART_SEPARATOR.join(parts)


def release_pub_date(release_date: str | None) -> datetime | None:
    """
    Derive a publish date from a free-form Italian release date.

    Only strings naming an Italian month ("12 febbraio 2026", "Febbraio")
    produce a date. The day defaults to the 1st and the year to the current
    one; the time is midnight in Rome. Anything else yields None.

    Examples:
        "09 Febbraio 2026"              → 2026-02-09
        "Dal 12 febbraio al 5 marzo"    → 12 February of the current year
        "2025"                          → None
    """
    if not release_date:
        return None
    match = _MONTH_RE.search(release_date)
    if match is None:
        return None

    day = int(match.group(1)) if match.group(1) else 1
    month = ITALIAN_MONTHS.index(match.group(2).lower()) + 1
    year_text = match.group(3)
    if year_text is None:
        year_match = _YEAR_RE.search(release_date)
        year_text = year_match.group(1) if year_match else None
    year = int(year_text) if year_text else datetime.now(ROME_TZ).year

    try:
        return datetime(year, month, day, tzinfo=ROME_TZ)
    except ValueError:
        logger.debug(f"Ignoring impossible release date '{release_date}'")
        return None


def build_feed(
    films: Iterable[Film],
    title: str,
    link: str,
    description: str,
    language: str = "it",
) -> bytes:
    """Render one venue's films as an RSS 2.0 document."""
    fg = _new_feed(title, link, description, language)
    for film in films:
        _add_entry(fg, film)
    return fg.rss_str(pretty=True)


def build_merged_feed(
    title: str,
    link: str,
    description: str,
    sections: Sequence[tuple[str, Sequence[Film]]],
    language: str = "it",
) -> bytes:
    """
    Render several venues into one RSS document.

    ``sections`` pairs a venue name with its films; every item carries the
    venue name as its category so readers can filter by venue.
    """
    fg = _new_feed(title, link, description, language)
    for venue, films in sections:
        for film in films:
            _add_entry(fg, film, category=venue)
    return fg.rss_str(pretty=True)


def write_feed(path: Path, content: bytes) -> None:
    """Write a rendered feed, creating the output directory if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    logger.info(f"Wrote {path}")


def _new_feed(title: str, link: str, description: str, language: str) -> FeedGenerator:
    fg = FeedGenerator()
    fg.title(title)
    fg.link(href=link)
    fg.description(description)
    fg.language(language)
    return fg


def _add_entry(fg: FeedGenerator, film: Film, category: str | None = None) -> None:
    # Appended so items keep the scraper's order
    fe = fg.add_entry(order="append")
    fe.title(film.title)
    fe.link(href=film.url)
    fe.guid(film.url, permalink=True)
    fe.description(describe_film(film))
    pub_date = release_pub_date(film.release_date)
    if pub_date is not None:
        fe.pubDate(pub_date)
    if category:
        fe.category(term=category)
