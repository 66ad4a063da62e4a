"""Scraper registry for mapping venue identifiers to scraper classes."""

from typing import Type

from cinefeed.scrapers.ariston_trieste import AristonTriesteScraper
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.berlinale import BerlinaleScraper
from cinefeed.scrapers.cinema_rex import CinemaRexScraper
from cinefeed.scrapers.cinemazero import CinemazeroScraper
from cinefeed.scrapers.cinergia import CinergiaScraper
from cinefeed.scrapers.cristallo import CristalloRassegnaScraper
from cinefeed.scrapers.edera import MANZONI_URL, EderaScraper
from cinefeed.scrapers.edera_rassegne import EderaRassegneScraper
from cinefeed.scrapers.enrico_pizzuti import EnricoPizzutiScraper
from cinefeed.scrapers.models import Film
from cinefeed.scrapers.new_beverly import NewBeverlyScraper
from cinefeed.scrapers.porto_astra import PortoAstraScraper
from cinefeed.scrapers.space_cinema import SpaceCinemaScraper

# Registry mapping venue identifiers to scraper classes
SCRAPER_REGISTRY: dict[str, Type[BaseScraper]] = {
    "space-cinema": SpaceCinemaScraper,
    "edera": EderaScraper,
    "manzoni": EderaScraper,
    "cinergia": CinergiaScraper,
    "cinemazero": CinemazeroScraper,
    "cinema-rex": CinemaRexScraper,
    "porto-astra": PortoAstraScraper,
    "ariston-trieste": AristonTriesteScraper,
    "cristallo": CristalloRassegnaScraper,
    "edera-rassegne": EderaRassegneScraper,
    "enrico-pizzuti": EnricoPizzutiScraper,
    "berlinale": BerlinaleScraper,
    "new-beverly": NewBeverlyScraper,
}


def get_scraper(scraper_type: str, scraper_config: dict | None = None) -> BaseScraper | None:
    """
    Get a scraper instance by venue identifier.

    Args:
        scraper_type: The venue identifier (e.g., "edera", "berlinale")
        scraper_config: Optional keyword arguments for the scraper constructor

    Returns:
        Scraper instance or None if the identifier is unknown
    """
    scraper_class = SCRAPER_REGISTRY.get(scraper_type)
    if scraper_class is None:
        return None
    config = dict(scraper_config or {})
    # Manzoni shares the Edera site template
    if scraper_type == "manzoni":
        config.setdefault("listing_url", MANZONI_URL)
        config.setdefault("name", "Cinema Multisala Manzoni")
    return scraper_class(**config)


__all__ = [
    "SCRAPER_REGISTRY",
    "get_scraper",
    "BaseScraper",
    "Film",
    "AristonTriesteScraper",
    "BerlinaleScraper",
    "CinemaRexScraper",
    "CinemazeroScraper",
    "CinergiaScraper",
    "CristalloRassegnaScraper",
    "EderaRassegneScraper",
    "EderaScraper",
    "EnricoPizzutiScraper",
    "NewBeverlyScraper",
    "PortoAstraScraper",
    "SpaceCinemaScraper",
]
