"""Text and markup helpers shared by the scrapers."""
