"""
Site layout and configuration.

A site root is the directory that holds post-template.html and index.html.
An optional postcli.yaml next to them can override the public base URL,
the brand suffix stripped from titles, the site name used in the feed
link, and the editor:

    base_url: https://example.com
    title_suffix: " - Example"
    site_name: Example
    editor: vim
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from .errors import ConfigError
from .meta import TITLE_SUFFIX
from .sync import BASE_URL


CONFIG_FILE = 'postcli.yaml'
TEMPLATE_FILE = 'post-template.html'
INDEX_FILE = 'index.html'
FEED_FILE = 'feed.xml'
SITEMAP_FILE = 'sitemap.xml'
POSTS_DIR = 'posts'

SITE_NAME = 'Jordan Joe Cooper'


@dataclass
class SiteConfig:
    """Where things live and how the site presents itself."""
    root: Path
    base_url: str = BASE_URL
    title_suffix: str = TITLE_SUFFIX
    site_name: str = SITE_NAME
    editor: Optional[str] = None

    @property
    def posts_dir(self) -> Path:
        return self.root / POSTS_DIR

    @property
    def template_path(self) -> Path:
        return self.root / TEMPLATE_FILE

    @property
    def index_path(self) -> Path:
        return self.root / INDEX_FILE

    @property
    def feed_path(self) -> Path:
        return self.root / FEED_FILE

    @property
    def sitemap_path(self) -> Path:
        return self.root / SITEMAP_FILE

    def post_url(self, slug: str) -> str:
        return f"{self.base_url.rstrip('/')}/{POSTS_DIR}/{slug}.html"


def find_root(start: Path = None) -> Path:
    """Walk up from start (default: cwd) to the directory holding the template and homepage."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        if (directory / TEMPLATE_FILE).exists() and (directory / INDEX_FILE).exists():
            return directory
    raise ConfigError(
        f"site root not found (no {TEMPLATE_FILE} + {INDEX_FILE} above {current})"
    )


def load_config(root: Path) -> SiteConfig:
    """Build a SiteConfig for root, applying postcli.yaml if present."""
    config = SiteConfig(root=root)

    config_file = root / CONFIG_FILE
    if not config_file.exists():
        return config

    try:
        with open(config_file) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"could not parse {config_file}: {e}") from e

    if data is None:
        return config
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    if data.get('base_url'):
        config.base_url = str(data['base_url'])
    if 'title_suffix' in data:
        config.title_suffix = str(data['title_suffix'] or '')
    if data.get('site_name'):
        config.site_name = str(data['site_name'])
    if data.get('editor'):
        config.editor = str(data['editor'])

    return config
