"""Cinema Cristallo (Oderzo) art-house season scraper."""

import logging

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.extract import first_heading, image_url, paragraphs
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.text import join_unique, parse_running_time, text_lines
from cinefeed.utils.urls import discover_links, strip_query

logger = logging.getLogger(__name__)

# Page-builder row holding the season's film grid
SEASON_SECTION = "div.amy-section.wpb_row.vc_custom_1666775304691"
INFO_COLUMN = "div.row.amy-single-movie div.col-md-4.col-sm-4"
POSTER = "div.row.amy-single-movie img"

SYNOPSIS_SELECTORS = (
    "div.amy-single-movie div.entry-content p",
    "div.amy-single-movie div.amy-single-movie-content p",
    "div.entry-content p",
    "article div.entry-content p",
)

_INFO_LABELS = ("data uscita", "durata", "genere")


class CristalloRassegnaScraper(DetailPageScraper):
    """
    Scraper for the "Rassegna film d'autore" page of Cinema Cristallo.

    Only the films inside the season's section are followed; the rest of the
    page links to the regular programme.
    """

    BASE_URL = "https://www.cinemacristallo.com"
    LINK_SELECTOR = 'a[href*="/movie/"]'

    name = "Cinema Cristallo Oderzo"
    FEED_FILENAME = "rassegne.xml"

    def __init__(self, listing_url: str = BASE_URL + "/rassegna-film-dautore/") -> None:
        super().__init__(listing_url)

    def discover(self, html: str) -> list[ListingEntry]:
        soup = parse_html(html)
        entries = []
        for section in soup.select(SEASON_SECTION):
            for key, url, _ in discover_links(
                html, self.base, self.LINK_SELECTOR, key=strip_query, scope=section
            ):
                entries.append(ListingEntry(key=key, url=url))
        return entries

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        poster_url = image_url(soup, POSTER, self.base)
        synopsis = join_unique(paragraphs(soup, SYNOPSIS_SELECTORS))

        column = soup.select_one(INFO_COLUMN)
        if column is None:
            logger.debug(f"{self.name}: no info column on {entry.url}")
            return self.make_film(
                entry, first_heading(soup), poster_url=poster_url, synopsis=synopsis
            )

        info = movie_info(text_lines(column))
        genre = info.get("genere")
        return self.make_film(
            entry,
            info.get("title") or first_heading(soup),
            poster_url=poster_url,
            cast=f"Genere: {genre}" if genre else None,
            release_date=info.get("data uscita"),
            running_time=parse_running_time(info.get("durata")),
            synopsis=synopsis,
        )


def movie_info(lines: list[str]) -> dict[str, str]:
    """
    Read the info column: the first unlabelled line is the title, followed
    by "Data uscita: ...", "Durata: 01 ore 42 minuti" and "Genere: ..." lines.
    """
    info: dict[str, str] = {}
    for line in lines:
        lower = line.lower()
        label = next((name for name in _INFO_LABELS if lower.startswith(name)), None)
        if label is None:
            info.setdefault("title", line)
            continue
        _, sep, value = line.partition(":")
        if sep and value.strip():
            info[label] = value.strip()
    return info
