"""Cinema Ariston (Trieste) scraper.

The Ariston programme is published by La Cappella Underground on a
WordPress/Elementor site. Each screening gets its own film page with a
``_YYYYMMDDHHMM`` suffix, so links are deduplicated by canonical key.
"""

import logging
import re
from collections.abc import Iterable

from bs4 import Tag

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import BlockRules, collect_block, first_heading, image_url, inside_tag
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import (
    element_text,
    has_italian_month,
    is_time_token,
    join_unique,
    normalise_time_token,
    text_lines,
)

logger = logging.getLogger(__name__)

SHOWTIME_SPANS = (
    "span.elementor-icon-list-text.elementor-post-info__item, "
    "span.elementor-post-info__item--type-custom, "
    "li.elementor-icon-list-item span"
)

# Sidebar headings after which the page lists other films
SECTION_END = ("Rassegne", "In programmazione")

SYNOPSIS_RULES = BlockRules(
    min_length=30,
    stop_markers=SECTION_END,
    skip_prefixes=("Ingresso riservato", "Ingressi:", "AA.VV.", "con "),
    skip_contains=("versione originale", "′"),
)

_YEAR_RE = re.compile(r"^\d{4}$")


class AristonTriesteScraper(DetailPageScraper):
    """Scraper for Cinema Ariston, Trieste."""

    BASE_URL = "https://www.lacappellaunderground.org"

    name = "Cinema Ariston Trieste"
    FEED_FILENAME = "trieste.xml"

    def __init__(self, listing_url: str = BASE_URL + "/ariston/programma/") -> None:
        super().__init__(listing_url)

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        content = soup.select_one("#portfolio-single-content")
        if content is None:
            logger.debug(f"{self.name}: no content block on {entry.url}")
            return None

        lines = text_lines(content)
        release_date, running_time = film_facts(lines)
        cast = next((line[4:].strip() for line in lines if line.startswith("con ") and len(line) > 4), None)

        return self.make_film(
            entry,
            first_heading(content),
            poster_url=image_url(content, 'img[src*="wp-content/uploads"]', self.base),
            cast=cast or None,
            release_date=release_date,
            running_time=running_time,
            synopsis=synopsis(content),
            showtimes=showtimes(content),
        )


def film_facts(lines: Iterable[str]) -> tuple[str | None, int | None]:
    """
    Year and running time from the facts line.

    The line reads like "Regia di X / Italia, 2025, 96′": it contains a slash
    and a prime (or apostrophe). Only the first such line is considered.
    """
    for line in lines:
        if "/" not in line or ("′" not in line and "'" not in line):
            continue
        year = next((p.strip() for p in line.split(",") if _YEAR_RE.match(p.strip())), None)
        before_prime = re.split(r"[′']", line, maxsplit=1)[0].split()
        minutes = before_prime[-1].strip(",") if before_prime else ""
        return year, (int(minutes) if minutes.isdigit() else None)
    return None, None


def showtimes(content: Tag) -> list[str]:
    """
    Screenings listed as date spans followed by time spans.

    Each info list is read on its own first; the flat scan of every span on
    the page is used when no single list yields a screening.
    """
    for info_list in content.select("ul"):
        found = _scan_spans(info_list.select(SHOWTIME_SPANS))
        if found:
            return found
    return _scan_spans(content.select(SHOWTIME_SPANS))


def _scan_spans(spans: Iterable[Tag]) -> list[str]:
    found: list[str] = []
    current_date = None
    for span in spans:
        if inside_tag(span, "a"):
            continue
        text = element_text(span)
        if not text:
            continue
        if text in SECTION_END:
            break
        if text.startswith(("v.", "Ingresso")):
            continue
        if is_time_token(text):
            if current_date:
                slot = f"{current_date} ore {normalise_time_token(text)}"
                if slot not in found:
                    found.append(slot)
        elif any(c.isdigit() for c in text) and has_italian_month(text):
            current_date = text
    return found


def synopsis(content: Tag) -> str | None:
    """Prose paragraphs, falling back to Elementor text widgets."""
    for selector in ("p", "div.elementor-widget-text-editor"):
        texts = [element_text(block) for block in content.select(selector)]
        joined = join_unique(collect_block(texts, SYNOPSIS_RULES))
        if joined:
            return joined
    return None
