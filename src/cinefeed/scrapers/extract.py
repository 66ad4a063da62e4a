"""Field extractors shared by the detail-page scrapers.

Each helper is one link of a fallback chain: it returns None when its
signal is absent, so scrapers can combine them with :func:`first_of`.
"""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from bs4 import BeautifulSoup, Tag

from cinefeed.utils.text import element_text
from cinefeed.utils.urls import absolute_url

T = TypeVar("T")


def first_of(*strategies: Callable[[], T | None]) -> T | None:
    """Run ``strategies`` in order and return the first non-empty result."""
    for strategy in strategies:
        value = strategy()
        if value:
            return value
    return None


def select_text(root: Tag | None, selector: str) -> str | None:
    """Text of the first element matching ``selector``."""
    if root is None:
        return None
    element = root.select_one(selector)
    return element_text(element) or None


def meta_content(soup: BeautifulSoup, prop: str) -> str | None:
    """Content of ``<meta property="...">``, e.g. ``og:title``."""
    meta = soup.find("meta", attrs={"property": prop})
    if meta is None:
        return None
    content = (meta.get("content") or "").strip()
    return content or None


def first_heading(
    root: Tag | None,
    selector: str = "h1",
    skip: Iterable[str] = (),
) -> str | None:
    """
    Text of the first heading matching ``selector`` whose text is not a section label.

    ``skip`` holds labels such as "Plot" or "Trama" compared case-insensitively.
    """
    if root is None:
        return None
    skipped = {s.lower() for s in skip}
    for heading in root.select(selector):
        text = element_text(heading)
        if text and text.lower() not in skipped:
            return text
    return None


def image_url(root: Tag | None, selector: str, base: str) -> str | None:
    """Absolute ``src`` of the first image matching ``selector``."""
    if root is None:
        return None
    img = root.select_one(selector)
    if img is None:
        return None
    src = (img.get("src") or "").strip()
    return absolute_url(base, src) if src else None


def inside_tag(element: Tag, name: str, max_depth: int = 20) -> bool:
    """True when one of the first ``max_depth`` ancestors of ``element`` is a ``name`` tag."""
    for depth, parent in enumerate(element.parents):
        if depth >= max_depth:
            break
        if parent.name == name:
            return True
    return False


@dataclass(frozen=True)
class BlockRules:
    """
    Stop conditions for collecting a multi-line text block.

    Thresholds are per-source heuristics. ``min_length`` drops short lines
    and ``stop_below`` ends the block on a short line. ``stop_markers`` end
    it on a line equal to or starting with a marker, ``stop_contains`` on a
    line containing one. ``skip_prefixes`` and ``skip_contains`` drop
    boilerplate lines. ``max_lines`` bounds how many lines are examined.
    """

    min_length: int = 0
    stop_below: int = 0
    stop_markers: tuple[str, ...] = ()
    stop_contains: tuple[str, ...] = ()
    skip_prefixes: tuple[str, ...] = ()
    skip_contains: tuple[str, ...] = ()
    max_lines: int | None = None


def collect_block(lines: Sequence[str], rules: BlockRules) -> list[str]:
    """Accumulate lines until a stop condition of ``rules`` is met."""
    collected: list[str] = []
    for line in lines[: rules.max_lines]:
        if any(line == m or line.startswith(m) for m in rules.stop_markers):
            break
        if any(s in line for s in rules.stop_contains):
            break
        if rules.stop_below and len(line) < rules.stop_below:
            break
        if line in collected or (rules.skip_prefixes and line.startswith(rules.skip_prefixes)):
            continue
        if any(s in line for s in rules.skip_contains):
            continue
        if len(line) <= rules.min_length:
            continue
        collected.append(line)
    return collected


def paragraphs(
    root: Tag | None,
    selectors: Iterable[str],
    keep: Callable[[str], bool] | None = None,
    max_count: int | None = None,
) -> list[str]:
    """
    Paragraph texts from the first selector that yields any.

    ``keep`` filters individual paragraphs; ``max_count`` caps the result.
    """
    if root is None:
        return []
    for selector in selectors:
        found = []
        for element in root.select(selector):
            text = element_text(element)
            if not text or (keep is not None and not keep(text)):
                continue
            found.append(text)
            if max_count is not None and len(found) >= max_count:
                break
        if found:
            return found
    return []
