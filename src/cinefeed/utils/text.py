"""Text heuristics for picking film fields out of flattened page text."""

import re
from collections.abc import Iterable, Sequence

from bs4 import Tag

# Substrings that identify an Italian month name in a date line. Stems rather
# than full names so that "Febbraio" and "febbraio" both match.
ITALIAN_MONTH_STEMS = (
    "braio",  # febbraio
    "enna",  # gennaio
    "arzo",  # marzo
    "rile",  # aprile
    "aggio",  # maggio
    "ugno",  # giugno
    "uglio",  # luglio
    "osto",  # agosto
    "embre",  # settembre, novembre, dicembre
    "obre",  # ottobre
)

ITALIAN_MONTHS = (
    "gennaio", "febbraio", "marzo", "aprile", "maggio", "giugno",
    "luglio", "agosto", "settembre", "ottobre", "novembre", "dicembre",
)

ITALIAN_WEEKDAYS = (
    "lunedì", "martedì", "mercoledì", "giovedì", "venerdì", "sabato", "domenica",
)

ENGLISH_MONTHS = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)

ENGLISH_WEEKDAYS = (
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
)

_HOUR_UNITS = ("ore", "ora", "hour", "hr")
_MINUTE_UNITS = ("min", "′", "'")
_TIME_RE = re.compile(r"^\d{1,2}[:.]\d{2}$")


def clean_text(text: str) -> str:
    """Drop control characters and collapse runs of whitespace."""
    text = "".join(c for c in text if c in "\n\t" or c.isprintable())
    return re.sub(r"\s+", " ", text).strip()


def element_text(element: Tag | None) -> str:
    """Join the trimmed, non-empty text nodes of ``element`` with single spaces."""
    if element is None:
        return ""
    return " ".join(element.stripped_strings)


def text_lines(element: Tag | None) -> list[str]:
    """Return the page as an ordered list of trimmed, non-empty text nodes."""
    if element is None:
        return []
    return list(element.stripped_strings)


def normalise_time_token(token: str) -> str:
    """
    Normalise a dotted time token to colon form.

    Only the first ``.`` is replaced: "17.30" → "17:30".
    """
    return token.strip().replace(".", ":", 1)


def is_time_token(text: str) -> bool:
    """True for bare time tokens such as "17:30" or "17.30"."""
    return bool(_TIME_RE.match(text.strip()))


def looks_like_time(text: str) -> bool:
    """
    True for "HH:MM" lines, optionally prefixed with a dash ("- 21:00").

    Requires at least four characters and exactly one colon between digits.
    """
    s = text.strip().lstrip("-").strip()
    if len(s) < 4 or ":" not in s:
        return False
    parts = s.split(":")
    return len(parts) == 2 and all(p.isdigit() for p in parts)


def has_italian_month(text: str) -> bool:
    lower = text.lower()
    return any(stem in lower for stem in ITALIAN_MONTH_STEMS)


def looks_like_date_line(text: str) -> bool:
    """
    True for a line that reads like a screening day.

    Either a numeric date with a four digit year ("13/02/2026"), or a line
    carrying both a month name and a weekday name, in English or Italian.
    """
    lower = text.lower()
    if "/" in text and re.search(r"\b\d{4}\b", text):
        return True
    has_month = any(m in lower for m in ITALIAN_MONTHS + ENGLISH_MONTHS)
    has_weekday = any(d in lower for d in ITALIAN_WEEKDAYS + ENGLISH_WEEKDAYS)
    return has_month and has_weekday


def parse_running_time(text: str | None) -> int | None:
    """
    Parse a running time into minutes.

    Accepts "132 min", "01 ore 42 minuti", "123′", "98" and similar. When a
    number is followed by an hour or minute unit, hours and minutes are
    summed; otherwise the leading integer is used.

    Examples:
        "132 min"            → 132
        "01 ore 42 minuti"   → 102
        "2 ore"              → 120
        "123′"               → 123
    """
    if not text:
        return None

    tokens = re.findall(r"\d+|[^\d\s]+", text.lower())
    hours = minutes = 0
    found_unit = False
    for idx, token in enumerate(tokens):
        if not token.isdigit() or idx + 1 >= len(tokens):
            continue
        unit = tokens[idx + 1].strip(".,:")
        if unit.startswith(_HOUR_UNITS) or unit == "h":
            hours = int(token)
            found_unit = True
        elif unit.startswith(_MINUTE_UNITS) or unit == "m":
            minutes = int(token)
            found_unit = True

    if found_unit:
        total = hours * 60 + minutes
        return total if total > 0 else None

    match = re.match(r"\s*(\d+)", text)
    if match:
        value = int(match.group(1))
        return value if value > 0 else None
    return None


def value_after_label(line: str, label: str) -> str | None:
    """
    Return the value of a "Label: value" line, or None if the line has another label.

    The label comparison is case-insensitive; the colon is optional.
    """
    if not line.lower().startswith(label.lower()):
        return None
    value = line[len(label):].strip(" :\t")
    return value or None


def line_after(lines: Sequence[str], labels: Iterable[str]) -> str | None:
    """Return the line immediately following the first line equal to any label."""
    wanted = {label.lower() for label in labels}
    for idx, line in enumerate(lines):
        if line.lower() in wanted and idx + 1 < len(lines):
            return lines[idx + 1]
    return None


def join_unique(parts: Iterable[str], separator: str = "\n\n") -> str | None:
    """Join the non-empty, first-seen parts; None when nothing remains."""
    seen: list[str] = []
    for part in parts:
        part = part.strip()
        if part and part not in seen:
            seen.append(part)
    return separator.join(seen) if seen else None
