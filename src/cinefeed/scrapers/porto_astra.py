"""Cinema Porto Astra (Padova) scraper."""

import logging

from bs4 import BeautifulSoup

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import BlockRules, collect_block, first_heading, first_of
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import element_text, parse_running_time, text_lines, value_after_label

logger = logging.getLogger(__name__)

# Synopsis paragraphs follow the "Durata:" line
SYNOPSIS_RULES = BlockRules(
    min_length=40,
    stop_markers=("Sito ufficiale", "## ORARI"),
    stop_contains=("/",),
    skip_contains=("Home", "Film della settimana", "Il cinema", "Info e costi"),
)


class PortoAstraScraper(DetailPageScraper):
    """Scraper for Cinema Porto Astra's weekly programme."""

    BASE_URL = "https://portoastra.it"

    name = "Cinema Porto Astra"
    FEED_FILENAME = "padova.xml"

    def __init__(self, listing_url: str = BASE_URL + "/questa-settimana/") -> None:
        super().__init__(listing_url)

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        lines = text_lines(soup)

        director = actors = running_time = None
        synopsis_lines: list[str] = []
        for idx, line in enumerate(lines):
            if line.startswith("REGIA:"):
                director = value_after_label(line, "REGIA:")
            elif line.startswith("ATTORI:"):
                actors = value_after_label(line, "ATTORI:")
            elif line.startswith("Durata:"):
                running_time = parse_running_time(value_after_label(line, "Durata:"))
                synopsis_lines = collect_block(lines[idx + 1:], SYNOPSIS_RULES)
                break
        else:
            logger.debug(f"{self.name}: no running time line on {entry.url}")

        return self.make_film(
            entry,
            first_of(
                lambda: first_heading(soup, "h1, h2, h3"),
                lambda: _bold_title(soup),
            ),
            poster_url=_poster(soup),
            cast=_credits(director, actors),
            running_time=running_time,
            synopsis=" ".join(synopsis_lines) or None,
        )


def _bold_title(soup: BeautifulSoup) -> str | None:
    for bold in soup.select("b, strong"):
        text = element_text(bold)
        if text and "REGIA" not in text and "ATTORI" not in text:
            return text
    return None


def _poster(soup: BeautifulSoup) -> str | None:
    for img in soup.select("img[src]"):
        src = img["src"].strip()
        if "appalcinema." in src:
            return src
    return None


def _credits(director: str | None, actors: str | None) -> str | None:
    if director and actors:
        return f"Regia: {director}. Attori: {actors}"
    if director:
        return f"Regia: {director}"
    if actors:
        return f"Attori: {actors}"
    return None
