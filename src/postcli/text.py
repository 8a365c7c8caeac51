"""
String helpers shared by the writer and the synchronizer: slugs, dates
and escaping.
"""

import re
import unicodedata
from datetime import datetime, timezone
from email.utils import format_datetime

from .errors import InvalidDateError


MONTHS = (
    'January', 'February', 'March', 'April', 'May', 'June', 'July',
    'August', 'September', 'October', 'November', 'December',
)

DATE_FORMAT = '%Y-%m-%d'
DATE_RE = re.compile(r'\d{4}-\d{2}-\d{2}', re.ASCII)


def slugify(text: str) -> str:
    """Convert text to URL-safe slug."""
    # Normalize unicode
    text = unicodedata.normalize('NFKD', text)
    text = text.encode('ascii', 'ignore').decode('ascii')

    # Lowercase, whitespace becomes a dash, everything else is dropped
    text = text.lower().strip()
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'[^a-z0-9-]', '', text)

    # Collapse multiple dashes
    text = re.sub(r'-+', '-', text)

    return text.strip('-')


def normalize_slug(text: str, default: str = '') -> str:
    """Clean a user-supplied slug (or filename).

    Falls back to ``default`` when nothing survives normalization.
    """
    text = text.strip()
    if text.endswith('.html'):
        text = text[:-len('.html')]
    return slugify(text) or default


def is_valid_date(value: str) -> bool:
    """True if value is YYYY-MM-DD and names a real calendar day."""
    if not DATE_RE.fullmatch(value):
        return False
    try:
        datetime.strptime(value, DATE_FORMAT)
    except ValueError:
        return False
    return True


def today_utc() -> str:
    return datetime.now(timezone.utc).strftime(DATE_FORMAT)


def format_display_date(iso: str) -> str:
    """YYYY-MM-DD -> "February 23, 2026".

    Anything that doesn't look like a date comes back unchanged.
    """
    try:
        year, month, day = (int(part) for part in iso.split('-'))
    except ValueError:
        return iso
    if not 1 <= month <= 12:
        return iso
    return f"{MONTHS[month - 1]} {day}, {year}"


def format_rss_date(iso: str) -> str:
    """YYYY-MM-DD -> RSS pubDate at midnight UTC, e.g. "Thu, 01 Jan 2026 00:00:00 +0000"."""
    if not DATE_RE.fullmatch(iso):
        raise InvalidDateError(iso)
    try:
        when = datetime.strptime(iso, DATE_FORMAT)
    except ValueError:
        raise InvalidDateError(iso) from None
    return format_datetime(when.replace(tzinfo=timezone.utc))


def escape_html(text: str) -> str:
    """Escape &, <, >, " for HTML text and attribute values."""
    text = text.replace('&', '&amp;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')
    text = text.replace('"', '&quot;')
    return text


def escape_xml(text: str) -> str:
    """Escape &, <, >, " for RSS element text."""
    text = text.replace('&', '&amp;')
    text = text.replace('<', '&lt;')
    text = text.replace('>', '&gt;')
    text = text.replace('"', '&quot;')
    return text
