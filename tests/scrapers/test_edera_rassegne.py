"""Unit tests for the Cinema Edera seasons scraper."""

import pytest

from cinefeed.scrapers.edera_rassegne import EderaRassegneScraper, SeasonFilm
from cinefeed.scrapers.models import ListingEntry

BASE = "https://www.cinemaedera.it"
SEASON_URL = f"{BASE}/rassegne/cinema-e-memoria.html"

LISTING_HTML = """
<html><body>
  <a href="/rassegne/rassegne.html">Tutte le rassegne</a>
  <a href="/rassegne/lunedi-d-autore.html">Lunedì d'autore</a>
  <a href="/rassegne/cinema-e-memoria.html">Cinema e memoria</a>
  <a href="/i-film-della-settimana.html">Programma</a>
</body></html>
"""

SEASON_HTML = """
<html><body>
<h1>Cinema e memoria</h1>
<div id="main-content-wrapper"><section>
  <p>Dal 27 gennaio al 10 febbraio</p>
  <p>Tre film per il Giorno della Memoria.</p>
  <a href="/film/la-zona-d-interesse.html">La zona d'interesse</a>
  <a href="/film/il-figlio-di-saul.html">Il figlio di Saul</a>
  <a href="/film/la-zona-d-interesse.html">Scheda</a>
  <a href="/rassegne/altra.html">Altra rassegna</a>
  <a href="/contatti.html">Contatti</a>
</section></div>
</body></html>
"""

FILM_HTML = """
<html><body>
<h1>La zona d'interesse</h1>
<div class="movie__images"><img class="img-responsive" src="/img/zona.jpg"></div>
<p class="movie__describe">Il comandante di Auschwitz vive accanto al campo.</p>
</body></html>
"""


@pytest.fixture
def scraper() -> EderaRassegneScraper:
    return EderaRassegneScraper()


@pytest.fixture
def entry() -> ListingEntry:
    return ListingEntry(key=SEASON_URL, url=SEASON_URL)


# ---------------------------------------------------------------------------
# Pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestEderaRassegneParsing:
    def test_discover_skips_index_page(self, scraper: EderaRassegneScraper) -> None:
        entries = scraper.discover(LISTING_HTML)
        assert sorted(e.url for e in entries) == [
            SEASON_URL,
            f"{BASE}/rassegne/lunedi-d-autore.html",
        ]

    def test_season_page(self, scraper: EderaRassegneScraper, entry: ListingEntry) -> None:
        film = scraper.parse_detail(SEASON_HTML, entry)
        assert film.title == "Cinema e memoria"
        assert film.release_date == "Dal 27 gennaio al 10 febbraio"
        assert film.synopsis == (
            "Cinema: Cinema Edera\n\n"
            "Dal 27 gennaio al 10 febbraio\n\n"
            "Tre film per il Giorno della Memoria."
        )

    def test_season_film_urls(self, scraper: EderaRassegneScraper) -> None:
        assert scraper.season_film_urls(SEASON_HTML) == [
            f"{BASE}/film/la-zona-d-interesse.html",
            f"{BASE}/film/il-figlio-di-saul.html",
        ]

    def test_season_film(self, scraper: EderaRassegneScraper) -> None:
        film = scraper.parse_season_film(FILM_HTML, f"{BASE}/film/la-zona-d-interesse.html")
        assert film == SeasonFilm(
            title="La zona d'interesse",
            poster_url=f"{BASE}/img/zona.jpg",
            synopsis="Il comandante di Auschwitz vive accanto al campo.",
        )

    def test_season_film_block(self) -> None:
        assert SeasonFilm(title="Shoah").block() == "* Shoah"
        assert SeasonFilm(title="Shoah", synopsis="Documentario.").block() == "* Shoah\nDocumentario."


# ---------------------------------------------------------------------------
# fetch_films — mocked HTTP
# ---------------------------------------------------------------------------


class TestEderaRassegneFetchFilms:
    async def test_season_lists_its_films(
        self, scraper: EderaRassegneScraper, mock_client, http_response
    ) -> None:
        client = mock_client(
            {
                f"{BASE}/rassegne.html": http_response(LISTING_HTML),
                SEASON_URL: http_response(SEASON_HTML),
                f"{BASE}/film/la-zona-d-interesse.html": http_response(FILM_HTML),
            }
        )

        films = await scraper.fetch_films(client)

        # The other season page is missing and its entry is dropped
        assert len(films) == 1
        season = films[0]
        assert season.url == SEASON_URL
        assert season.poster_url == f"{BASE}/img/zona.jpg"
        assert season.synopsis == (
            "Cinema: Cinema Edera\n\n"
            "Dal 27 gennaio al 10 febbraio\n\n"
            "Tre film per il Giorno della Memoria.\n\n"
            "I film della rassegna:\n\n"
            "* La zona d'interesse\nIl comandante di Auschwitz vive accanto al campo."
        )
