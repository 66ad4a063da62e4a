"""The Space Cinema scraper."""

import logging
from typing import Any

import httpx

from cinefeed.config import settings
from cinefeed.http import fetch_json
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.merge import merge_films, unique_showtimes
from cinefeed.scrapers.models import Film
from cinefeed.utils.dates import format_date_italian, time_part, today_rome
from cinefeed.utils.json_data import dig, dig_list, dig_str

logger = logging.getLogger(__name__)


class SpaceCinemaScraper(BaseScraper):
    """
    Scraper for The Space Cinema multiplexes.

    The site exposes a JSON microservice listing every film with its
    sessions for a given day. The API rejects requests that do not carry
    the session cookies set by the homepage, hence the warm-up request.
    """

    BASE_URL = "https://www.thespacecinema.it"
    API_PATH = "/api/microservice/showings/cinemas/{cinema_id}/films"

    name = "The Space Cinema - Silea"

    def __init__(self, cinema_id: int | None = None, showing_date: str | None = None) -> None:
        self.cinema_id = cinema_id if cinema_id is not None else settings.space_cinema_id
        self.showing_date = showing_date or settings.showing_date or default_showing_date()

    @property
    def feed_filename(self) -> str:
        return f"space_cinema_{self.cinema_id}.xml"

    async def warm_up(self, client: httpx.AsyncClient) -> None:
        response = await client.get(f"{self.BASE_URL}/")
        response.raise_for_status()
        logger.debug(f"{self.name}: warm-up got {len(client.cookies)} cookies")

    async def fetch_films(self, client: httpx.AsyncClient) -> list[Film]:
        url = self.BASE_URL + self.API_PATH.format(cinema_id=self.cinema_id)
        params = {
            "showingDate": self.showing_date,
            "minEmbargoLevel": "3",
            "includesSession": "true",
            "includeSessionAttributes": "true",
        }
        data = await fetch_json(client, url, params=params)

        films = self._parse_response(data)
        logger.info(f"{self.name}: Found {len(films)} films")
        return films

    def _parse_response(self, data: Any) -> list[Film]:
        """Convert the API payload into films; entries without title or url are dropped."""
        films: list[Film] = []
        for item in dig_list(data, "result"):
            title = dig_str(item, "filmTitle")
            url = dig_str(item, "filmUrl")
            if not title or not url:
                logger.debug(f"{self.name}: skipping API entry without title or url")
                continue

            running_time = dig(item, "runningTime")
            films.append(
                Film(
                    title=title,
                    url=absolute_film_url(self.BASE_URL, url),
                    poster_url=dig_str(item, "posterImageSrc"),
                    cast=dig_str(item, "cast"),
                    release_date=_release_date(dig_str(item, "releaseDate")),
                    running_time=running_time if isinstance(running_time, int) and running_time > 0 else None,
                    synopsis=dig_str(item, "synopsisShort"),
                    showtimes=self._parse_sessions(item),
                )
            )
        return merge_films(films)

    def _parse_sessions(self, item: dict) -> list[str]:
        """Flatten showingGroups[].sessions[] into "09 Febbraio 2026 ore 20:00 - 22:10"."""
        showtimes = []
        for group in dig_list(item, "showingGroups"):
            for session in dig_list(group, "sessions"):
                start = dig_str(session, "startTime")
                if not start:
                    continue
                slot = f"{format_date_italian(start)} ore {time_part(start)}"
                end = dig_str(session, "endTime")
                if end:
                    slot += f" - {time_part(end)}"
                showtimes.append(slot)
        return unique_showtimes(showtimes)


def default_showing_date() -> str:
    """Today's date in the format the API expects: "2026-02-09T00:00:00"."""
    return f"{today_rome().isoformat()}T00:00:00"


def absolute_film_url(base: str, url: str) -> str:
    return url if url.startswith("http") else base + "/" + url.lstrip("/")


def _release_date(value: str | None) -> str | None:
    # "2026-01-29T00:00:00" -> "29 Gennaio 2026", so the feed can date the entry
    if not value:
        return None
    return format_date_italian(value)
