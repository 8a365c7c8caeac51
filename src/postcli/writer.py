"""
Create a new post from post-template.html.

The template is filled by literal string replacement of its placeholder
tokens, written to posts/<slug>.html, and then registered on the homepage
and in the feed.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .errors import (
    InvalidDateError,
    PostError,
    PostExistsError,
    PostSyncError,
    RequiredValueError,
    TemplateNotFoundError,
)
from .sync import SyncResult, sync_post
from .text import escape_html, format_display_date, is_valid_date, normalize_slug, slugify, today_utc

if TYPE_CHECKING:
    from .site import SiteConfig


RSS_LINK_MARKER = 'application/rss+xml'

# Where the template's <head> leaves room for the feed link.
FEED_LINK_ANCHOR = (
    '  <link rel="manifest" href="../site.webmanifest">\n'
    '  \n'
    '  <link rel="stylesheet"'
)
FEED_LINK_REPLACEMENT = (
    '  <link rel="manifest" href="../site.webmanifest">\n'
    '  <link rel="alternate" type="application/rss+xml" title="{site_name}" href="../feed.xml">\n'
    '\n'
    '  <link rel="stylesheet"'
)


@dataclass
class NewPost:
    """Validated fields for a post that is about to be written."""
    title: str
    description: str
    keywords: str
    date: str  # YYYY-MM-DD
    slug: str

    @property
    def display_date(self) -> str:
        return format_display_date(self.date)

    @property
    def filename(self) -> str:
        return f"{self.slug}.html"


def prepare_post(title: str, description: str = '', keywords: str = '',
                 date: Optional[str] = None, slug: Optional[str] = None,
                 today: Optional[str] = None) -> NewPost:
    """Resolve defaults and validate the fields for a new post.

    The date defaults to today (UTC) and the slug to one derived from the title.
    """
    title = (title or '').strip()
    if not title:
        raise RequiredValueError('title')

    date = (date or '').strip() or today or today_utc()
    if not is_valid_date(date):
        raise InvalidDateError(date)

    default_slug = slugify(title)
    slug = normalize_slug(slug or '', default_slug)
    if not slug:
        raise RequiredValueError('slug')

    return NewPost(
        title=title,
        description=(description or '').strip(),
        keywords=(keywords or '').strip(),
        date=date,
        slug=slug,
    )


def ensure_feed_link(content: str, site_name: str) -> str:
    """Add the RSS <link> to <head> if the template doesn't already have one.

    Templates without the expected anchor are left alone.
    """
    if RSS_LINK_MARKER in content:
        return content
    replacement = FEED_LINK_REPLACEMENT.format(site_name=escape_html(site_name))
    return content.replace(FEED_LINK_ANCHOR, replacement, 1)


def render_post(template: str, post: NewPost, site_name: str) -> str:
    """Fill template placeholders (see post-template.html)."""
    content = template
    content = content.replace('POST_TITLE', escape_html(post.title))
    content = content.replace('POST_DESCRIPTION', escape_html(post.description))
    content = content.replace('POST_KEYWORDS', escape_html(post.keywords))
    content = content.replace('POST_SLUG', post.slug)
    content = content.replace('YYYY-MM-DD', post.date)
    content = content.replace('Month Day, Year', post.display_date)
    return ensure_feed_link(content, site_name)


def write_post(config: 'SiteConfig', post: NewPost) -> Path:
    """Write posts/<slug>.html from the template. Never overwrites."""
    if not config.template_path.exists():
        raise TemplateNotFoundError(config.template_path)

    out_path = config.posts_dir / post.filename
    if out_path.exists():
        raise PostExistsError(out_path)

    template = config.template_path.read_text(encoding='utf-8')
    content = render_post(template, post, config.site_name)

    config.posts_dir.mkdir(parents=True, exist_ok=True)
    try:
        with open(out_path, 'x', encoding='utf-8') as f:
            f.write(content)
    except FileExistsError:
        raise PostExistsError(out_path) from None

    return out_path


def create_post(config: 'SiteConfig', post: NewPost,
                quiet: bool = False) -> tuple[Path, SyncResult]:
    """Write the post, then add it to the homepage and feed.

    If the second step fails the post file stays on disk and
    PostSyncError reports both facts.
    """
    out_path = write_post(config, post)
    if not quiet:
        print(f"Created: {out_path}")

    try:
        result = sync_post(config, out_path, quiet=quiet)
    except (PostError, OSError) as e:
        raise PostSyncError(out_path, e) from e

    return out_path, result
