"""Italian date formatting used in showtime phrases and feed dates."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

ROME_TZ = ZoneInfo("Europe/Rome")

ITALIAN_MONTH_NAMES = (
    "Gennaio", "Febbraio", "Marzo", "Aprile", "Maggio", "Giugno",
    "Luglio", "Agosto", "Settembre", "Ottobre", "Novembre", "Dicembre",
)

ITALIAN_WEEKDAY_NAMES = (
    "lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica",
)


def format_date_italian(iso: str) -> str:
    """
    Format the date part of an ISO timestamp as "09 Febbraio 2026".

    Returns the input unchanged when it does not start with ``YYYY-MM-DD``.
    """
    try:
        day = date.fromisoformat(iso[:10])
    except ValueError:
        return iso
    return f"{day.day:02d} {ITALIAN_MONTH_NAMES[day.month - 1]} {day.year}"


def time_part(iso: str) -> str:
    """Return "HH:MM" from "2026-02-09T22:45:00", or the input when there is no time."""
    _, sep, clock = iso.partition("T")
    return clock[:5] if sep and clock else iso


def weekday_slot(moment: datetime) -> str:
    """Format a moment as "venerdì 13/02 ore 17:30"."""
    weekday = ITALIAN_WEEKDAY_NAMES[moment.weekday()]
    return f"{weekday} {moment.day:02d}/{moment.month:02d} ore {moment:%H:%M}"


def today_rome() -> date:
    return datetime.now(ROME_TZ).date()
