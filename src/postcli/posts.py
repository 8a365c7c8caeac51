"""Scan the posts/ directory. The directory listing is the only post database."""

from dataclasses import dataclass
from pathlib import Path

from .errors import PostNotFoundError
from .meta import TITLE_SUFFIX, extract_post_meta


@dataclass
class Post:
    """A post file on disk and the metadata read from it."""
    slug: str  # filename without .html
    title: str
    date: str  # YYYY-MM-DD, '' when missing
    path: Path
    description: str = ''

    @property
    def filename(self) -> str:
        return self.path.name


def read_post(path: Path, title_suffix: str = TITLE_SUFFIX) -> Post:
    """Read one post file. Title falls back to the slug."""
    meta = extract_post_meta(path.read_text(encoding='utf-8'), title_suffix)
    slug = path.stem
    return Post(
        slug=slug,
        title=meta.title or slug,
        date=meta.date,
        path=path,
        description=meta.description,
    )


def list_posts(posts_dir: Path, title_suffix: str = TITLE_SUFFIX) -> list[Post]:
    """All .html files directly in posts_dir, newest first.

    Posts without a usable date sort last; equal dates keep filename order.
    A missing directory is just an empty site.
    """
    if not posts_dir.is_dir():
        return []

    posts = []
    for html_file in sorted(posts_dir.iterdir()):
        if not html_file.is_file() or html_file.suffix != '.html':
            continue
        try:
            posts.append(read_post(html_file, title_suffix))
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: skipping {html_file.name}: {e}")

    posts.sort(key=lambda p: p.date, reverse=True)
    return posts


def find_post(posts: list[Post], name: str) -> Post:
    """Look a post up by slug or filename (my-post or my-post.html)."""
    slug = name.strip()
    if slug.endswith('.html'):
        slug = slug[:-len('.html')]
    for post in posts:
        if post.slug == slug:
            return post
    raise PostNotFoundError(name)
