"""URL canonicalisation and candidate discovery on listing pages."""

import re
from collections.abc import Callable, Iterable
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

# Volatile "_YYYYMMDDHHMM" / "-YYYYMMDDHHMM" suffix on a path segment
_TIMESTAMP_SUFFIX_RE = re.compile(r"^(.+)[_-]\d{12}$")

# Characters that terminate an id inside raw HTML or an inline script
_TOKEN_END = "\"'\\<>?#& \t\r\n"


def origin(url: str) -> str:
    """Return scheme and host of ``url``: "https://www.cinemamanzoni.it"."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}"


def absolute_url(base: str, href: str) -> str:
    """Resolve ``href`` against ``base``, leaving absolute URLs untouched."""
    href = href.strip()
    if href.startswith(("http://", "https://")):
        return href
    if not href.startswith("/"):
        href = "/" + href
    return urljoin(origin(base) + "/", href)


def strip_query(url: str) -> str:
    """Drop the query string and fragment."""
    return url.split("#", 1)[0].split("?", 1)[0]


def canonical_film_key(url: str) -> str:
    """
    Canonical deduplication key for a film URL.

    Drops the query string and fragment, strips a trailing ``_YYYYMMDDHHMM``
    or ``-YYYYMMDDHHMM`` suffix from the last path segment and normalises the
    trailing slash, so that each screening of the same film maps to the
    same key.

    Examples:
        "/film/42_202602091700/"   → "/film/42/"
        "/film/42-202602091801"    → "/film/42/"
        "/film/100?d=2"            → "/film/100/"
        "/film/the-room/"          → "/film/the-room/"
    """
    url = strip_query(url.strip()).rstrip("/")
    head, sep, segment = url.rpartition("/")
    match = _TIMESTAMP_SUFFIX_RE.match(segment)
    if match:
        segment = match.group(1)
    return f"{head}{sep}{segment}/"


def discover_links(
    html: str,
    base: str,
    selector: str,
    key: Callable[[str], str] = canonical_film_key,
    accept: Callable[[str], bool] | None = None,
    scope: Tag | None = None,
    unique: bool = True,
) -> list[tuple[str, str, Tag]]:
    """
    Collect anchors matching ``selector`` and deduplicate them by canonical key.

    Args:
        html: Listing page markup (ignored when ``scope`` is given)
        base: URL used to resolve relative hrefs
        selector: CSS selector for candidate anchors, e.g. ``a[href*="/film/"]``
        key: Canonical key function applied to the absolute URL
        accept: Optional predicate on the absolute URL
        scope: Restrict the query to this element instead of the whole page
        unique: Keep only the first anchor per key; otherwise keep every
            anchor so rows can be merged later

    Returns:
        ``(key, url, anchor)`` tuples sorted by key
    """
    root = scope if scope is not None else BeautifulSoup(html, "html.parser")
    found: list[tuple[str, str, Tag]] = []
    seen: set[str] = set()
    for anchor in root.select(selector):
        href = (anchor.get("href") or "").strip()
        if not href or href.startswith(("#", "javascript:", "mailto:")):
            continue
        url = absolute_url(base, href)
        if accept is not None and not accept(url):
            continue
        k = key(url)
        if unique and k in seen:
            continue
        seen.add(k)
        found.append((k, url, anchor))
    return sorted(found, key=lambda item: item[0])


def scan_raw_ids(
    body: str,
    needles: Iterable[str],
    min_digits: int = 1,
    suffixes: tuple[str, ...] | None = None,
) -> list[str]:
    """
    Fallback discovery over raw markup or inline JSON.

    Finds every occurrence of each needle (and its JSON-escaped form, with
    ``/`` written as ``\\/``), reads the digits that follow, and keeps ids of
    at least ``min_digits`` digits. When ``suffixes`` is given, the id must
    be immediately followed by one of them or by the end of the token.

    Returns the unique ids sorted lexicographically.
    """
    ids: set[str] = set()
    for needle in needles:
        variants = {needle, needle.replace("/", "\\/")}
        for variant in variants:
            for match in re.finditer(re.escape(variant), body):
                rest = body[match.end():]
                digits = re.match(r"\d*", rest).group(0)
                if len(digits) < min_digits or not digits:
                    continue
                after = rest[len(digits):]
                if suffixes is not None and not _ends_token(after, suffixes):
                    continue
                ids.add(digits)
    return sorted(ids)


def _ends_token(after: str, suffixes: tuple[str, ...]) -> bool:
    return not after or after.startswith(suffixes) or after[0] in _TOKEN_END
