"""
postcli - a small authoring helper for a hand-written static site

Modules:
- text: slugs, date formatting, HTML/XML escaping
- meta: title/description/date extraction from post <meta> tags
- posts: listing the posts/ directory
- writer: new posts from post-template.html
- sync: adding a post to index.html and feed.xml
- sitemap: sitemap.xml regeneration
"""

from .errors import (
    ConfigError,
    InvalidDateError,
    MarkerNotFoundError,
    MissingFieldError,
    PartialSyncError,
    PostError,
    PostExistsError,
    PostNotFoundError,
    PostSyncError,
    RequiredValueError,
    TemplateNotFoundError,
)
from .meta import PostMeta, extract_meta, extract_post_meta
from .posts import Post, find_post, list_posts
from .site import SiteConfig, find_root, load_config
from .sitemap import build_sitemap, write_sitemap
from .sync import SyncResult, resolve_post_path, sync_post
from .writer import NewPost, create_post, prepare_post, write_post

__version__ = "0.1.0"

__all__ = [
    # Data structures
    'Post',
    'PostMeta',
    'NewPost',
    'SiteConfig',
    'SyncResult',
    # Operations
    'extract_meta',
    'extract_post_meta',
    'list_posts',
    'find_post',
    'find_root',
    'load_config',
    'prepare_post',
    'write_post',
    'create_post',
    'sync_post',
    'resolve_post_path',
    'build_sitemap',
    'write_sitemap',
    # Errors
    'PostError',
    'ConfigError',
    'TemplateNotFoundError',
    'RequiredValueError',
    'InvalidDateError',
    'PostExistsError',
    'PostNotFoundError',
    'MissingFieldError',
    'MarkerNotFoundError',
    'PartialSyncError',
    'PostSyncError',
]
