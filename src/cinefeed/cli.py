"""Command line entry point: scrape the venues and write the RSS feeds."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from cinefeed.config import settings
from cinefeed.feeds import FEED_GROUPS, FeedGroup
from cinefeed.http import create_client
from cinefeed.scrapers.base import BaseScraper
from cinefeed.scrapers.models import Film
from cinefeed.tasks.feed_job import run_feeds

LOG_FORMAT = "%(levelname)s %(name)s %(message)s"


def print_films(scraper: BaseScraper, films: list[Film]) -> None:
    """Print a venue's records in a human readable block per film."""
    print(f"\n=== {scraper.name} ({len(films)} films) ===\n")
    for film in films:
        print(f"TITLE       : {film.title}")
        print(f"URL         : {film.url}")
        if film.poster_url:
            print(f"POSTER      : {film.poster_url}")
        if film.cast:
            print(f"CAST        : {film.cast}")
        if film.release_date:
            print(f"RELEASE DATE: {film.release_date}")
        if film.running_time:
            print(f"RUNTIME     : {film.running_time} min")
        if film.synopsis:
            print(f"SYNOPSIS    : {film.synopsis}")
        for showtime in film.showtimes:
            print(f"ORARIO      : {showtime}")
        print()


async def generate(groups: list[FeedGroup], output_dir: Path, listing: bool = False) -> bool:
    """Generate ``groups`` with one shared HTTP client; True if every feed was written."""
    async with create_client() as client:
        return await run_feeds(
            client, groups, output_dir, on_films=print_films if listing else None
        )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Scrape cinema programmes and write them as RSS feeds."
    )
    parser.add_argument(
        "--feed",
        choices=sorted(FEED_GROUPS),
        help="Generate only this feed (default: all feeds)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print every scraped film to stdout",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        metavar="DIR",
        help=f"Directory for the XML files (default: {settings.feeds_dir})",
    )
    args = parser.parse_args()

    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    groups = [FEED_GROUPS[args.feed]] if args.feed else list(FEED_GROUPS.values())
    output_dir = args.output_dir or Path(settings.feeds_dir)

    ok = asyncio.run(generate(groups, output_dir, listing=args.list))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
