"""
Add a post to the homepage list (index.html) and the RSS feed (feed.xml).

Both files are edited by inserting text next to a fixed marker; nothing
is parsed or re-serialized, so the rest of each file stays byte-for-byte
the same. The homepage is written first. If the feed then fails, the
homepage keeps its new entry and PartialSyncError says so.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import (
    MarkerNotFoundError,
    MissingFieldError,
    PartialSyncError,
    PostError,
    PostNotFoundError,
)
from .meta import extract_post_meta
from .text import escape_html, escape_xml, format_display_date, format_rss_date

if TYPE_CHECKING:
    from .site import SiteConfig


BASE_URL = 'https://jordanjoecooper.com'

# index.html: start of the Writing list. New <li> goes right after it.
LIST_MARKER = '<ul class="post-list">'
# feed.xml: first RSS item. New <item> goes right before it.
ITEM_MARKER = '<item>'

LIST_ITEM_TEMPLATE = """      <li>
        <h2 class="post-title">
          <span class="post-date">{display_date}</span>
          <a href="posts/{slug}.html">{title}</a>
        </h2>
      </li>"""

# Inserted at the old first item's column; ends with that item's indentation.
FEED_ITEM_TEMPLATE = """<item>
      <title>{title}</title>
      <link>{url}</link>
      <guid>{url}</guid>
      <pubDate>{pub_date}</pubDate>
      <description>{description}</description>
    </item>
    """


@dataclass
class SyncResult:
    title: str
    slug: str
    url: str
    index_updated: bool = False
    feed_updated: bool = False


def build_list_item(title: str, slug: str, date: str) -> str:
    return LIST_ITEM_TEMPLATE.format(
        display_date=format_display_date(date),
        slug=slug,
        title=escape_html(title),
    )


def build_feed_item(title: str, url: str, date: str, description: str) -> str:
    return FEED_ITEM_TEMPLATE.format(
        title=escape_xml(title),
        url=url,
        pub_date=format_rss_date(date),
        description=escape_xml(description),
    )


def insert_after_marker(content: str, marker: str, fragment: str, path: Path) -> str:
    idx = content.find(marker)
    if idx == -1:
        raise MarkerNotFoundError(path, marker)
    insert_at = idx + len(marker)
    return content[:insert_at] + '\n' + fragment + content[insert_at:]


def insert_before_marker(content: str, marker: str, fragment: str, path: Path) -> str:
    idx = content.find(marker)
    if idx == -1:
        raise MarkerNotFoundError(path, marker)
    return content[:idx] + fragment + content[idx:]


def update_index(index_path: Path, title: str, slug: str, date: str):
    """Insert a new <li> as the first entry of the homepage post list."""
    content = index_path.read_text(encoding='utf-8')
    item = build_list_item(title, slug, date)
    index_path.write_text(
        insert_after_marker(content, LIST_MARKER, item, index_path),
        encoding='utf-8',
    )


def update_feed(feed_path: Path, title: str, url: str, date: str, description: str):
    """Insert a new <item> ahead of the first item in the feed."""
    content = feed_path.read_text(encoding='utf-8')
    item = build_feed_item(title, url, date, description)
    feed_path.write_text(
        insert_before_marker(content, ITEM_MARKER, item, feed_path),
        encoding='utf-8',
    )


def sync_post(config: 'SiteConfig', post_path: Path, quiet: bool = False) -> SyncResult:
    """Register an existing post file on the homepage and in the feed.

    Title, description and a valid published date must all be readable
    from the post's meta tags; otherwise nothing is written.
    """
    post_path = Path(post_path)
    try:
        markup = post_path.read_text(encoding='utf-8')
    except UnicodeDecodeError as e:
        raise PostError(f"could not read {post_path}: {e}") from e
    meta = extract_post_meta(markup, config.title_suffix)
    for field in ('title', 'description', 'date'):
        if not getattr(meta, field):
            raise MissingFieldError(field, post_path)

    slug = post_path.stem
    result = SyncResult(title=meta.title, slug=slug, url=config.post_url(slug))

    try:
        update_index(config.index_path, meta.title, slug, meta.date)
    except UnicodeDecodeError as e:
        raise PostError(f"could not read {config.index_path}: {e}") from e
    result.index_updated = True
    if not quiet:
        print(f"Updated {config.index_path.name} (Writing section).")

    try:
        update_feed(config.feed_path, meta.title, result.url, meta.date, meta.description)
    except (OSError, UnicodeDecodeError, MarkerNotFoundError) as e:
        raise PartialSyncError(config.index_path, config.feed_path, e) from e
    result.feed_updated = True
    if not quiet:
        print(f"Updated {config.feed_path.name}.")
        print(f"Done. New post added to homepage and RSS: {meta.title}")

    return result


def resolve_post_path(config: 'SiteConfig', path) -> Path:
    """Resolve an update-links argument (e.g. posts/my-post.html) to a post file.

    Relative paths are taken from the site root. The file must be an
    existing .html file directly inside the posts directory.
    """
    path = Path(path)
    if not path.is_absolute():
        path = config.root / path
    path = path.resolve()

    if path.suffix != '.html' or path.parent != config.posts_dir.resolve():
        raise PostError(f"path must be {config.posts_dir.name}/<slug>.html: {path}")
    if not path.is_file():
        raise PostNotFoundError(path)
    return path
