"""Feed generation job: scrape every venue of a group and write its RSS document."""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

import httpx

from cinefeed.feeds import FeedGroup
from cinefeed.scrapers import get_scraper
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.models import Film
from cinefeed.services.feed_builder import build_feed, build_merged_feed, write_feed

logger = logging.getLogger(__name__)

FilmListener = Callable[[BaseScraper, list[Film]], None]


async def scrape_venue(client: httpx.AsyncClient, scraper: BaseScraper) -> list[Film]:
    """
    Run one scraper, turning any failure into an empty result.

    A venue that cannot be reached must not prevent the other venues of the
    same feed from being published.
    """
    try:
        await scraper.warm_up(client)
        return await scraper.fetch_films(client)
    except Exception as e:
        logger.error(f"Error scraping {scraper.name}: {e}", exc_info=True)
        return []


def group_scrapers(group: FeedGroup) -> list[BaseScraper]:
    scrapers = []
    for venue in group.venues:
        scraper = get_scraper(venue)
        if scraper is None:
            logger.warning(f"No scraper found for venue '{venue}' in feed '{group.name}'")
            continue
        scrapers.append(scraper)
    return scrapers


def feed_path(group: FeedGroup, scrapers: list[BaseScraper], output_dir: Path) -> Path:
    if not group.merged and scrapers:
        return output_dir / scrapers[0].feed_filename
    return output_dir / f"{group.name}.xml"


async def run_feed_group(
    client: httpx.AsyncClient,
    group: FeedGroup,
    output_dir: Path,
    on_films: FilmListener | None = None,
) -> bool:
    """
    Scrape the venues of ``group`` in order and write its feed.

    Returns False when the feed could not be rendered or written.
    """
    scrapers = group_scrapers(group)
    sections: list[tuple[str, list[Film]]] = []
    for scraper in scrapers:
        logger.info(f"Fetching from {scraper.name}")
        films = await scrape_venue(client, scraper)
        if on_films is not None:
            on_films(scraper, films)
        sections.append((scraper.name, films))

    path = feed_path(group, scrapers, output_dir)
    try:
        if group.merged:
            content = build_merged_feed(
                group.title, group.link, group.description, sections, language=group.language
            )
        else:
            films = [film for _, venue_films in sections for film in venue_films]
            content = build_feed(
                films, group.title, group.link, group.description, language=group.language
            )
        write_feed(path, content)
    except Exception as e:
        logger.error(f"Error writing feed '{group.name}' to {path}: {e}", exc_info=True)
        return False

    total = sum(len(films) for _, films in sections)
    logger.info(f"Feed '{group.name}': {total} items from {len(sections)} venues")
    return True


async def run_feeds(
    client: httpx.AsyncClient,
    groups: Iterable[FeedGroup],
    output_dir: Path,
    on_films: FilmListener | None = None,
) -> bool:
    """Generate every feed in ``groups``; True only when all of them were written."""
    successes = 0
    failures = 0
    for group in groups:
        if await run_feed_group(client, group, output_dir, on_films):
            successes += 1
        else:
            failures += 1

    logger.info(f"Feed generation complete: {successes} written, {failures} failed")
    return failures == 0
