"""Unit tests for the Cinema Cristallo season scraper."""

import pytest

from cinefeed.scrapers.cristallo import CristalloRassegnaScraper, movie_info
from cinefeed.scrapers.models import ListingEntry

BASE = "https://www.cinemacristallo.com"

LISTING_HTML = """
<html><body>
<div class="amy-section wpb_row vc_custom_1666775304691">
  <a href="/movie/la-grazia/?lang=it">La grazia</a>
  <a href="/movie/la-grazia/">La grazia</a>
  <a href="/movie/hamnet/">Hamnet</a>
</div>
<div class="amy-section wpb_row">
  <a href="/movie/zootropolis-2/">Zootropolis 2</a>
</div>
</body></html>
"""

DETAIL_HTML = """
<html><body>
<div class="row amy-single-movie">
  <div class="col-md-4 col-sm-4">
    <img src="/wp-content/uploads/la-grazia.jpg">
    <h3>La grazia</h3>
    <p>Data uscita: 15 gennaio 2026</p>
    <p>Durata: 02 ore 11 minuti</p>
    <p>Genere: Drammatico</p>
  </div>
  <div class="col-md-8">
    <div class="entry-content">
      <p>Un presidente alla fine del mandato.</p>
      <p></p>
      <p>Con Toni Servillo.</p>
    </div>
  </div>
</div>
</body></html>
"""


@pytest.fixture
def scraper() -> CristalloRassegnaScraper:
    return CristalloRassegnaScraper()


@pytest.fixture
def entry() -> ListingEntry:
    return ListingEntry(key=f"{BASE}/movie/la-grazia/", url=f"{BASE}/movie/la-grazia/?lang=it")


# ---------------------------------------------------------------------------
# discover — pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestCristalloDiscover:
    def test_only_season_section_is_followed(self, scraper: CristalloRassegnaScraper) -> None:
        entries = scraper.discover(LISTING_HTML)
        assert [e.key for e in entries] == [f"{BASE}/movie/hamnet/", f"{BASE}/movie/la-grazia/"]
        assert entries[1].url == f"{BASE}/movie/la-grazia/?lang=it"

    def test_missing_section(self, scraper: CristalloRassegnaScraper) -> None:
        assert scraper.discover('<a href="/movie/x/">x</a>') == []


# ---------------------------------------------------------------------------
# parse_detail — pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestCristalloParseDetail:
    def test_info_column(self, scraper: CristalloRassegnaScraper, entry: ListingEntry) -> None:
        film = scraper.parse_detail(DETAIL_HTML, entry)
        assert film.title == "La grazia"
        assert film.release_date == "15 gennaio 2026"
        assert film.running_time == 131
        assert film.cast == "Genere: Drammatico"
        assert film.poster_url == f"{BASE}/wp-content/uploads/la-grazia.jpg"
        assert film.synopsis == "Un presidente alla fine del mandato.\n\nCon Toni Servillo."

    def test_without_info_column(self, scraper: CristalloRassegnaScraper, entry: ListingEntry) -> None:
        html = '<h1>Hamnet</h1><div class="entry-content"><p>Trama.</p></div>'
        film = scraper.parse_detail(html, entry)
        assert film.title == "Hamnet"
        assert film.synopsis == "Trama."
        assert film.running_time is None

    def test_movie_info_ignores_empty_values(self) -> None:
        assert movie_info(["Titolo", "Durata:", "Genere: Commedia", "Altro"]) == {
            "title": "Titolo",
            "genere": "Commedia",
        }


# ---------------------------------------------------------------------------
# fetch_films — mocked HTTP
# ---------------------------------------------------------------------------


class TestCristalloFetchFilms:
    async def test_season_films(self, scraper: CristalloRassegnaScraper, mock_client, http_response) -> None:
        client = mock_client(
            {
                f"{BASE}/rassegna-film-dautore/": http_response(LISTING_HTML),
                f"{BASE}/movie/hamnet/": http_response("<h1>Hamnet</h1>"),
                f"{BASE}/movie/la-grazia/?lang=it": http_response(DETAIL_HTML),
            }
        )

        films = await scraper.fetch_films(client)

        assert [film.title for film in films] == ["Hamnet", "La grazia"]
