"""Unit tests for The Space Cinema scraper."""

import httpx
import pytest

from cinefeed.scrapers.space_cinema import (
    SpaceCinemaScraper,
    absolute_film_url,
    default_showing_date,
)

API_URL = "https://www.thespacecinema.it/api/microservice/showings/cinemas/1009/films"

PAYLOAD = {
    "result": [
        {
            "filmTitle": "Hamnet",
            "filmUrl": "/film/hamnet",
            "posterImageSrc": "https://cdn.thespacecinema.it/hamnet.jpg",
            "cast": "Jessie Buckley, Paul Mescal",
            "releaseDate": "2026-02-05T00:00:00",
            "runningTime": 125,
            "synopsisShort": "La storia del figlio di Shakespeare.",
            "showingGroups": [
                {
                    "sessions": [
                        {"startTime": "2026-02-09T20:00:00", "endTime": "2026-02-09T22:10:00"},
                        {"startTime": "2026-02-09T22:45:00"},
                    ]
                },
                {"sessions": [{"startTime": "2026-02-09T20:00:00", "endTime": "2026-02-09T22:10:00"}]},
            ],
        },
        {"filmTitle": "", "filmUrl": "/film/senza-titolo"},
        {"filmTitle": "Senza URL"},
        {"filmTitle": "Zootropolis 2", "filmUrl": "https://www.thespacecinema.it/film/zootropolis-2", "runningTime": 0},
    ]
}


@pytest.fixture
def scraper() -> SpaceCinemaScraper:
    return SpaceCinemaScraper(cinema_id=1009, showing_date="2026-02-09T00:00:00")


# ---------------------------------------------------------------------------
# _parse_response — pure parsing, no HTTP
# ---------------------------------------------------------------------------


class TestSpaceCinemaParseResponse:
    def test_entries_without_title_or_url_are_dropped(self, scraper: SpaceCinemaScraper) -> None:
        films = scraper._parse_response(PAYLOAD)
        assert [film.title for film in films] == ["Hamnet", "Zootropolis 2"]

    def test_fields_are_mapped(self, scraper: SpaceCinemaScraper) -> None:
        film = scraper._parse_response(PAYLOAD)[0]
        assert film.url == "https://www.thespacecinema.it/film/hamnet"
        assert film.poster_url == "https://cdn.thespacecinema.it/hamnet.jpg"
        assert film.cast == "Jessie Buckley, Paul Mescal"
        assert film.release_date == "05 Febbraio 2026"
        assert film.running_time == 125
        assert film.synopsis == "La storia del figlio di Shakespeare."

    def test_sessions_are_flattened_and_deduplicated(self, scraper: SpaceCinemaScraper) -> None:
        film = scraper._parse_response(PAYLOAD)[0]
        assert film.showtimes == [
            "09 Febbraio 2026 ore 20:00 - 22:10",
            "09 Febbraio 2026 ore 22:45",
        ]

    def test_zero_running_time_is_unknown(self, scraper: SpaceCinemaScraper) -> None:
        assert scraper._parse_response(PAYLOAD)[1].running_time is None

    def test_unexpected_payload_shape(self, scraper: SpaceCinemaScraper) -> None:
        assert scraper._parse_response({"result": None}) == []
        assert scraper._parse_response(["not", "a", "dict"]) == []


class TestSpaceCinemaHelpers:
    def test_absolute_film_url(self) -> None:
        assert absolute_film_url("https://x.it", "film/a") == "https://x.it/film/a"
        assert absolute_film_url("https://x.it", "https://y.it/b") == "https://y.it/b"

    def test_default_showing_date_is_midnight(self) -> None:
        assert default_showing_date().endswith("T00:00:00")

    def test_feed_filename_includes_cinema_id(self) -> None:
        assert SpaceCinemaScraper(cinema_id=1010).feed_filename == "space_cinema_1010.xml"


# ---------------------------------------------------------------------------
# fetch_films — mocked HTTP
# ---------------------------------------------------------------------------


class TestSpaceCinemaFetchFilms:
    async def test_queries_api_for_showing_date(
        self, scraper: SpaceCinemaScraper, mock_client, http_response
    ) -> None:
        client = mock_client(
            {
                "https://www.thespacecinema.it/": http_response("<html></html>"),
                API_URL: http_response(json_data=PAYLOAD),
            }
        )

        await scraper.warm_up(client)
        films = await scraper.fetch_films(client)

        assert len(films) == 2
        api_call = client.get.call_args_list[-1]
        assert api_call.kwargs["params"]["showingDate"] == "2026-02-09T00:00:00"
        assert api_call.kwargs["params"]["includesSession"] == "true"

    async def test_api_error_propagates(
        self, scraper: SpaceCinemaScraper, mock_client, http_response
    ) -> None:
        client = mock_client({API_URL: http_response(status_code=403)})

        with pytest.raises(httpx.HTTPStatusError):
            await scraper.fetch_films(client)
