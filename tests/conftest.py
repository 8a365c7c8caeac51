"""
Pytest configuration and shared fixtures
"""

import shutil
import sys
from pathlib import Path

import pytest

# Add source directory to Python path for imports
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from postcli.site import SiteConfig  # noqa: E402


@pytest.fixture
def fixtures_path():
    """Path to test fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def site_root(tmp_path, fixtures_path):
    """A throwaway copy of the sample site: template, homepage, feed, one post"""
    root = tmp_path / "site"
    shutil.copytree(fixtures_path / "site", root)
    return root


@pytest.fixture
def config(site_root):
    return SiteConfig(root=site_root)


@pytest.fixture
def make_post(config):
    """Write a post file with the given meta tags into posts/"""
    def _make_post(slug, title='My Post', description='Desc', date='2026-01-01'):
        tags = []
        if title is not None:
            tags.append(f'<meta property="og:title" content="{title} - Jordan Joe Cooper">')
        if description is not None:
            tags.append(f'<meta name="description" content="{description}">')
        if date is not None:
            tags.append(f'<meta name="article:published_time" content="{date}">')
        html = "<html>\n<head>\n  " + "\n  ".join(tags) + "\n</head>\n<body></body>\n</html>\n"
        path = config.posts_dir / f"{slug}.html"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding='utf-8')
        return path
    return _make_post


@pytest.fixture
def sample_post_html():
    """Post head with every supported meta tag shape"""
    return """
    <html>
    <head>
      <title>Fallback Title - Jordan Joe Cooper</title>
      <meta name="description" content="  A short description.  ">
      <meta property="og:title" content="Sample Post - Jordan Joe Cooper">
      <meta property="og:description" content="OG description">
      <meta name="twitter:title" content="Twitter Title">
      <meta property="article:published_time" content="2026-02-23">
    </head>
    <body></body>
    </html>
    """
