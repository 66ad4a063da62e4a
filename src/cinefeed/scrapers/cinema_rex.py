"""Cinema Rex Padova scraper."""

import logging
import re
from datetime import datetime
from typing import Any

import httpx

from cinefeed.http import fetch_json
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.merge import merge_films, unique_showtimes
from cinefeed.scrapers.models import Film
from cinefeed.utils.dates import ROME_TZ, weekday_slot
from cinefeed.utils.json_data import dig, dig_list, dig_str

logger = logging.getLogger(__name__)


class CinemaRexScraper(BaseScraper):
    """
    Scraper for Cinema Rex, Padova.

    The programme page is rendered client side from a compact JSON file that
    also lists theatre and music events; only items flagged as films are kept.
    Event start times are epoch milliseconds.
    """

    BASE_URL = "https://www.cinemarex.it"
    JSON_URL = "https://www.cinemarex.it/pages/rexJsonCompact.php"
    EVENT_URL = "https://www.cinemarex.it/programmazione/evento?eventName={slug}"

    name = "Cinema Rex Padova"
    FEED_FILENAME = "cinema_rex_padova.xml"

    async def fetch_films(self, client: httpx.AsyncClient) -> list[Film]:
        data = await fetch_json(client, self.JSON_URL)
        films = self._parse_response(data)
        logger.info(f"{self.name}: Found {len(films)} films")
        return films

    def _parse_response(self, data: Any) -> list[Film]:
        films: list[Film] = []
        for item in dig_list(data, "titoli"):
            if dig(item, "categoria_film") != "y":
                continue
            title = dig_str(item, "titolo")
            if not title:
                continue

            director = dig_str(item, "autore")
            films.append(
                Film(
                    title=title,
                    url=self.EVENT_URL.format(slug=event_name_slug(title)),
                    cast=f"Regia: {director}" if director else None,
                    running_time=_minutes(dig(item, "durata")),
                    synopsis=dig_str(item, "descrizione"),
                    showtimes=self._parse_events(item),
                )
            )
        return merge_films(films)

    def _parse_events(self, item: dict) -> list[str]:
        showtimes = []
        for event in dig_list(item, "eventi"):
            start = dig(event, "inizio")
            if not isinstance(start, int | float):
                continue
            moment = datetime.fromtimestamp(start / 1000, tz=ROME_TZ)
            showtimes.append(weekday_slot(moment))
        return unique_showtimes(showtimes)


def event_name_slug(title: str) -> str:
    """Lowercase ``title`` and replace every non-ASCII-alphanumeric character with "_"."""
    return re.sub(r"[^a-z0-9]", "_", title.lower())


def _minutes(value: Any) -> int | None:
    text = str(value).strip() if value is not None else ""
    return int(text) if text.isdigit() and int(text) > 0 else None
