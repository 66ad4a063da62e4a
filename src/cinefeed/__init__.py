"""Cinema programme scrapers and RSS feed generation."""

__version__ = "0.1.0"
