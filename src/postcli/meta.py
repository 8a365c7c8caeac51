"""
Read post metadata (title, description, published date) out of post HTML.

This is deliberately pattern matching over a few known <meta> tag shapes,
not an HTML parser. Nothing here raises: a value that can't be found is
returned as an empty string and the caller decides whether that's fatal.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Sequence, Tuple

from .text import is_valid_date


# Brand suffix stripped from titles ("My Post - Jordan Joe Cooper" -> "My Post")
TITLE_SUFFIX = ' - Jordan Joe Cooper'

Probe = Tuple[str, str]

TITLE_PROBES: Sequence[Probe] = (
    ('property', 'og:title'),
    ('name', 'twitter:title'),
)
DESCRIPTION_PROBES: Sequence[Probe] = (
    ('name', 'description'),
    ('property', 'og:description'),
)
DATE_PROBES: Sequence[Probe] = (
    ('name', 'article:published_time'),
    ('property', 'article:published_time'),
)

TITLE_TAG_RE = re.compile(r'<title>([^<]+)</title>', re.IGNORECASE)


@dataclass
class PostMeta:
    """Metadata as found in a post file. Empty strings mean "not found"."""
    title: str = ''
    description: str = ''
    date: str = ''


@lru_cache(maxsize=None)
def _probe_pattern(attr: str, value: str) -> 're.Pattern[str]':
    return re.compile(
        r'<meta\s+[^>]*' + re.escape(attr) + '="' + re.escape(value) + r'"[^>]*content="([^"]*)"',
        re.IGNORECASE,
    )


def extract_meta(markup: str, probes: Sequence[Probe]) -> str:
    """Return the content of the first <meta> tag matching one of the probes.

    Probes are (attribute, value) pairs tried in order, e.g.
    ('property', 'og:title'). Content is returned as written in the file
    (no entity decoding), trimmed.
    """
    for attr, value in probes:
        match = _probe_pattern(attr, value).search(markup)
        if match:
            content = match.group(1).strip()
            if content:
                return content
    return ''


def strip_suffix(title: str, suffix: str = TITLE_SUFFIX) -> str:
    title = title.strip()
    if suffix and title.endswith(suffix):
        title = title[:-len(suffix)]
    return title.strip()


def extract_title(markup: str, suffix: str = TITLE_SUFFIX) -> str:
    """Title from og:title, then twitter:title, then <title>."""
    title = extract_meta(markup, TITLE_PROBES)
    if not title:
        match = TITLE_TAG_RE.search(markup)
        if not match:
            return ''
        title = match.group(1)
    return strip_suffix(title, suffix)


def extract_description(markup: str) -> str:
    return extract_meta(markup, DESCRIPTION_PROBES)


def extract_date(markup: str) -> str:
    """Published date as YYYY-MM-DD, or '' if absent or not a real date."""
    value = extract_meta(markup, DATE_PROBES)
    return value if is_valid_date(value) else ''


def extract_post_meta(markup: str, suffix: str = TITLE_SUFFIX) -> PostMeta:
    return PostMeta(
        title=extract_title(markup, suffix),
        description=extract_description(markup),
        date=extract_date(markup),
    )
