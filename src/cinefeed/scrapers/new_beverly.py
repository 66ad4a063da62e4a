"""The New Beverly Cinema (Los Angeles) scraper."""

import logging
import re

from bs4 import BeautifulSoup, Tag

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import first_of, image_url, meta_content, paragraphs, select_text
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import element_text, join_unique
from cinefeed.utils.urls import absolute_url

logger = logging.getLogger(__name__)

SYNOPSIS_SELECTORS = (
    ".movie__content p",
    "section.movies .movie__content p",
    ".entry-content p",
    ".post-content p",
)
MIN_PARAGRAPH_LENGTH = 50
MAX_PARAGRAPHS = 8
# Paragraphs shorter than this that mention the blog are link blurbs
BLOG_BLURB_LENGTH = 150

METADATA_TERMS = ("director", "writer", "starring", "year", "country", "format")


class NewBeverlyScraper(DetailPageScraper):
    """
    Scraper for the New Beverly Cinema schedule.

    The schedule lists one card per screening; cards pointing at the same
    program page are merged, and the program page adds the synopsis and
    credits. Programs are often double features, so the card title is kept.
    """

    BASE_URL = "https://thenewbev.com"
    LINK_SELECTOR = "a[href*='/program/']"

    name = "The New Beverly Cinema"
    FEED_FILENAME = "tarantino.xml"

    def __init__(self, listing_url: str = BASE_URL + "/schedule/") -> None:
        super().__init__(listing_url)

    def canonical_key(self, url: str) -> str:
        return url.rstrip("/")

    def discover(self, html: str) -> list[ListingEntry]:
        entries = []
        for card in parse_html(html).select("article.event-card"):
            entry = self.parse_card(card)
            if entry is not None:
                entries.append(entry)
        return entries

    def parse_card(self, card: Tag) -> ListingEntry | None:
        """One schedule card: "Fri February 13 - 7:30 pm / 9:45 pm"."""
        link = card.select_one(self.LINK_SELECTOR)
        if link is None:
            return None
        href = (link.get("href") or "").strip()
        url = self.canonical_key(absolute_url(self.base, href)) if href else ""
        if "thenewbev.com" not in url or "/program/" not in url:
            logger.debug(f"{self.name}: ignoring external card link {href}")
            return None

        title = select_text(link, "h4.event-card__title")
        if not title:
            return None

        day = (select_text(link, "span.event-card__day") or "").replace(",", "")
        month = select_text(link, "span.event-card__month") or ""
        number = select_text(link, "span.event-card__numb") or ""
        times = [element_text(t) for t in link.select("time.event-card__time")]
        showtime = " ".join(p for p in (day, month, number) if p)
        if times:
            showtime = f"{showtime} - {' / '.join(times)}"

        return ListingEntry(
            key=url,
            url=url,
            title=re.sub(r"\s+", " ", title),
            poster_url=image_url(link, "figure.event-card__img img", self.base),
            showtimes=[showtime.strip()] if showtime.strip() else [],
        )

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        running_time, credits = program_details(soup)
        return self.make_film(
            entry,
            entry.title,
            poster_url=first_of(
                lambda: meta_content(soup, "og:image"),
                lambda: image_url(soup, ".movie__poster img, .movie-mast__poster-img img", self.base),
            ),
            cast=" | ".join(credits) or None,
            running_time=running_time,
            synopsis=join_unique(
                paragraphs(soup, SYNOPSIS_SELECTORS, keep=is_synopsis, max_count=MAX_PARAGRAPHS)
            ),
        )


def program_details(soup: BeautifulSoup) -> tuple[int | None, list[str]]:
    """Running time and "Label: value" credits from the ``dl`` on a program page."""
    terms = [element_text(dt) for dt in soup.select("dl dt")]
    values = [element_text(dd) for dd in soup.select("dl dd")]

    running_time = None
    credits = []
    for idx, term in enumerate(terms):
        value = values[idx] if idx < len(values) else ""
        if term.lower() == "running time":
            digits = "".join(c for c in value if c.isdigit())
            running_time = int(digits) if digits else None
        elif value and term.lower() in METADATA_TERMS:
            credits.append(f"{term}: {value}")
    return running_time, credits


def is_synopsis(text: str) -> bool:
    if len(text) < MIN_PARAGRAPH_LENGTH:
        return False
    if text.lower() in ("buy tickets", "view trailer"):
        return False
    if "ticketing." in text or "veezi.com" in text:
        return False
    return not ("New Beverly blog" in text and len(text) < BLOG_BLURB_LENGTH)
