"""Collapse duplicate listing rows and film records into one entry per URL."""

from collections.abc import Iterable
from dataclasses import replace

from cinefeed.scrapers.models import Film, ListingEntry


def unique_showtimes(showtimes: Iterable[str]) -> list[str]:
    """Drop empty and exact-duplicate showtime phrases, keeping first-seen order."""
    seen: list[str] = []
    for showtime in showtimes:
        showtime = showtime.strip()
        if showtime and showtime not in seen:
            seen.append(showtime)
    return seen


def merge_entries(entries: Iterable[ListingEntry]) -> list[ListingEntry]:
    """
    Merge listing rows that share a canonical key.

    The first row for a key provides url, title and poster; later rows only
    contribute showtimes. Result is sorted by key.
    """
    merged: dict[str, ListingEntry] = {}
    for entry in entries:
        existing = merged.get(entry.key)
        if existing is None:
            merged[entry.key] = replace(entry, showtimes=unique_showtimes(entry.showtimes))
            continue
        merged[entry.key] = replace(
            existing,
            title=existing.title or entry.title,
            poster_url=existing.poster_url or entry.poster_url,
            showtimes=unique_showtimes(existing.showtimes + entry.showtimes),
        )
    return [merged[key] for key in sorted(merged)]


def merge_films(films: Iterable[Film]) -> list[Film]:
    """
    Merge film records sharing the same URL.

    Field values come from whichever record populated them first; showtimes
    are accumulated without duplicates. Applying the merge to its own output
    returns an equal list.
    """
    merged: dict[str, Film] = {}
    for film in films:
        existing = merged.get(film.url)
        if existing is None:
            merged[film.url] = replace(film, showtimes=unique_showtimes(film.showtimes))
            continue
        merged[film.url] = replace(
            existing,
            poster_url=existing.poster_url or film.poster_url,
            cast=existing.cast or film.cast,
            release_date=existing.release_date or film.release_date,
            running_time=existing.running_time or film.running_time,
            synopsis=existing.synopsis or film.synopsis,
            showtimes=unique_showtimes(existing.showtimes + film.showtimes),
        )
    return list(merged.values())
