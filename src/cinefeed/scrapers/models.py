"""Data models for scrapers."""

from dataclasses import dataclass, field


@dataclass
class Film:
    """
    One programme entry at one venue.

    This is the output format that all scrapers must return and the input
    of the feed builder. ``url`` doubles as the feed item GUID.
    """

    title: str  # Display title, sometimes "Title by Director"
    url: str  # Canonical detail page URL
    poster_url: str | None = None
    cast: str | None = None  # Free-form, e.g. "Regia: X | Cast: Y"
    release_date: str | None = None  # Free-form: a year or an Italian date phrase
    running_time: int | None = None  # Minutes
    synopsis: str | None = None  # Paragraphs joined by blank lines
    showtimes: list[str] = field(default_factory=list)  # e.g. "Venerdì 13 febbraio ore 17:30"

    def __post_init__(self) -> None:
        """Validate that title and url are present."""
        self.title = (self.title or "").strip()
        self.url = (self.url or "").strip()
        if not self.title:
            raise ValueError("title must not be empty")
        if not self.url:
            raise ValueError("url must not be empty")


@dataclass
class ListingEntry:
    """
    A candidate discovered on a listing page, before its detail page is fetched.

    ``key`` is the canonical deduplication key; ``url`` is the address that
    will be fetched. Sources that list one row per screening carry the
    row's title, poster and showtime here so they can be merged by key.
    """

    key: str
    url: str
    title: str | None = None
    poster_url: str | None = None
    showtimes: list[str] = field(default_factory=list)
