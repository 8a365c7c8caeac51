"""Regenerate sitemap.xml from the posts on disk."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

from .posts import Post, list_posts
from .text import escape_xml, today_utc

if TYPE_CHECKING:
    from .site import SiteConfig


def _url_entry(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    lines = ['  <url>', f'    <loc>{escape_xml(loc)}</loc>']
    if lastmod:
        lines.append(f'    <lastmod>{lastmod}</lastmod>')
    lines.append(f'    <changefreq>{changefreq}</changefreq>')
    lines.append(f'    <priority>{priority}</priority>')
    lines.append('  </url>')
    return '\n'.join(lines) + '\n'


def build_sitemap(base_url: str, posts: list[Post], today: str) -> str:
    """Homepage first, then one <url> per post (newest first)."""
    base_url = base_url.rstrip('/')
    sitemap = '<?xml version="1.0" encoding="UTF-8"?>\n'
    sitemap += '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
    sitemap += _url_entry(base_url, today, 'daily', '1.0')
    for post in posts:
        sitemap += _url_entry(f"{base_url}/posts/{post.slug}.html",
                              post.date, 'monthly', '0.7')
    sitemap += '</urlset>\n'
    return sitemap


def write_sitemap(config: 'SiteConfig', today: Optional[str] = None, quiet: bool = False) -> Path:
    posts = list_posts(config.posts_dir, config.title_suffix)
    content = build_sitemap(config.base_url, posts, today or today_utc())
    config.sitemap_path.write_text(content, encoding='utf-8')
    if not quiet:
        print(f"Built sitemap with {len(posts)} posts -> {config.sitemap_path}")
    return config.sitemap_path
