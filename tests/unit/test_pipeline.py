"""Tests for the shared listing → detail page pipeline."""

import httpx
import pytest
from bs4 import Tag

from cinefeed.scrapers.base import DetailPageScraper, parse_html
from cinefeed.scrapers.models import Film, ListingEntry
from cinefeed.utils.urls import strip_query

LISTING_URL = "https://cinema.example.it/programma"
BASE = "https://cinema.example.it"

LISTING_HTML = """
<ul>
  <li><a href="/film/100" data-time="ven 18:00">Primo</a></li>
  <li><a href="/film/200" data-time="ven 21:00">Secondo</a></li>
  <li><a href="/film/100?d=2" data-time="sab 21:00">Primo</a></li>
</ul>
"""


def detail_html(title: str) -> str:
    return f"<html><body><h1>{title}</h1><p class='plot'>Trama di {title}</p></body></html>"


class ExampleScraper(DetailPageScraper):
    name = "Cinema Esempio"
    FEED_FILENAME = "esempio.xml"

    def __init__(self) -> None:
        super().__init__(LISTING_URL)

    def canonical_key(self, url: str) -> str:
        return strip_query(url)

    def listing_title(self, anchor: Tag) -> str | None:
        return anchor.get_text(strip=True)

    def listing_showtimes(self, anchor: Tag) -> list[str]:
        return [anchor["data-time"]]

    def parse_detail(self, html: str, entry: ListingEntry) -> Film | None:
        soup = parse_html(html)
        heading = soup.find("h1")
        plot = soup.select_one("p.plot")
        return self.make_film(
            entry,
            heading.get_text(strip=True) if heading else None,
            synopsis=plot.get_text(strip=True) if plot else None,
        )


class DefaultKeyScraper(ExampleScraper):
    """Uses the library's canonical key instead of ``strip_query``."""

    def canonical_key(self, url: str) -> str:
        return DetailPageScraper.canonical_key(self, url)


class TestDetailPageScraper:
    async def test_rows_of_the_same_film_are_merged(self, mock_client, http_response) -> None:
        client = mock_client(
            {
                LISTING_URL: http_response(LISTING_HTML),
                f"{BASE}/film/100": http_response(detail_html("Primo film")),
                f"{BASE}/film/200": http_response(detail_html("Secondo film")),
            }
        )

        films = await ExampleScraper().fetch_films(client)

        assert [film.url for film in films] == [f"{BASE}/film/100", f"{BASE}/film/200"]
        assert films[0].title == "Primo film"
        assert films[0].showtimes == ["ven 18:00", "sab 21:00"]
        assert films[0].synopsis == "Trama di Primo film"
        # The duplicate row is not fetched a second time
        fetched = [call.args[0] for call in client.get.call_args_list]
        assert f"{BASE}/film/100?d=2" not in fetched

    async def test_default_key_merges_query_variants(self, mock_client, http_response) -> None:
        client = mock_client(
            {
                LISTING_URL: http_response(LISTING_HTML),
                f"{BASE}/film/100": http_response(detail_html("Primo film")),
                f"{BASE}/film/200": http_response(detail_html("Secondo film")),
            }
        )

        films = await DefaultKeyScraper().fetch_films(client)

        assert [film.title for film in films] == ["Primo film", "Secondo film"]
        assert films[0].showtimes == ["ven 18:00", "sab 21:00"]

    async def test_failed_detail_page_is_skipped(self, mock_client, http_response) -> None:
        listing = '<a href="/film/1">a</a><a href="/film/2">b</a><a href="/film/3">c</a>'
        client = mock_client(
            {
                LISTING_URL: http_response(listing),
                f"{BASE}/film/1": http_response(detail_html("Uno")),
                f"{BASE}/film/3": http_response(detail_html("Tre")),
            }
        )

        class NoShowtimes(ExampleScraper):
            def listing_showtimes(self, anchor: Tag) -> list[str]:
                return []

        films = await NoShowtimes().fetch_films(client)

        assert [film.title for film in films] == ["Uno", "Tre"]

    async def test_page_without_title_falls_back_to_listing_title(
        self, mock_client, http_response
    ) -> None:
        client = mock_client(
            {
                LISTING_URL: http_response('<a href="/film/5" data-time="dom 16:00">Dal listino</a>'),
                f"{BASE}/film/5": http_response("<html><body></body></html>"),
            }
        )

        films = await ExampleScraper().fetch_films(client)

        assert films[0].title == "Dal listino"
        assert films[0].showtimes == ["dom 16:00"]

    async def test_empty_listing_returns_no_films(self, mock_client, http_response) -> None:
        client = mock_client({LISTING_URL: http_response("<html><body>Chiuso</body></html>")})

        assert await ExampleScraper().fetch_films(client) == []

    async def test_listing_failure_propagates(self, mock_client) -> None:
        client = mock_client({})

        with pytest.raises(httpx.HTTPStatusError):
            await ExampleScraper().fetch_films(client)


class TestMakeFilm:
    def test_no_title_anywhere_is_none(self) -> None:
        entry = ListingEntry(key="k", url="https://x.it/k")
        assert ExampleScraper().make_film(entry, None) is None

    def test_entry_url_and_poster_are_defaults(self) -> None:
        entry = ListingEntry(key="k", url="https://x.it/k", poster_url="https://x.it/k.jpg")
        film = ExampleScraper().make_film(entry, "Titolo", running_time=90)
        assert film.url == "https://x.it/k"
        assert film.poster_url == "https://x.it/k.jpg"
        assert film.running_time == 90

    def test_explicit_url_overrides_entry(self) -> None:
        entry = ListingEntry(key="k", url="https://x.it/k?ref_date=2026-02-13")
        film = ExampleScraper().make_film(entry, "Titolo", url="https://x.it/k")
        assert film.url == "https://x.it/k"
