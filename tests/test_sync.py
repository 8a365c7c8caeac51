"""Tests for sync.py - adding a post to index.html and feed.xml."""

import pytest
from bs4 import BeautifulSoup

from postcli.errors import (
    MarkerNotFoundError,
    MissingFieldError,
    PartialSyncError,
    PostError,
    PostNotFoundError,
)
from postcli.sync import (
    ITEM_MARKER,
    LIST_MARKER,
    build_feed_item,
    build_list_item,
    resolve_post_path,
    sync_post,
)


class TestFragments:

    def test_list_item(self):
        item = build_list_item('My Post', 'my-post', '2026-01-01')
        assert '<span class="post-date">January 1, 2026</span>' in item
        assert '<a href="posts/my-post.html">My Post</a>' in item

    def test_list_item_escapes_title(self):
        item = build_list_item('Tom & Jerry <3', 'tom-jerry', '2026-01-01')
        assert '>Tom &amp; Jerry &lt;3</a>' in item

    def test_feed_item(self):
        url = 'https://jordanjoecooper.com/posts/my-post.html'
        item = build_feed_item('A & B', url, '2026-01-01', 'x < y')
        assert '<title>A &amp; B</title>' in item
        assert f'<link>{url}</link>' in item
        assert f'<guid>{url}</guid>' in item
        assert '<pubDate>Thu, 01 Jan 2026 00:00:00 +0000</pubDate>' in item
        assert '<description>x &lt; y</description>' in item


class TestSyncPost:

    def test_homepage_item_inserted_after_marker(self, config, make_post):
        before = config.index_path.read_text()
        sync_post(config, make_post('my-post'), quiet=True)
        after = config.index_path.read_text()

        head, _, tail = after.partition(LIST_MARKER)
        old_head, _, old_tail = before.partition(LIST_MARKER)
        assert head == old_head
        assert tail.startswith('\n      <li>')
        assert 'January 1, 2026' in tail
        assert tail.index('posts/my-post.html') < tail.index('posts/first-post.html')
        assert tail.endswith(old_tail)

    def test_homepage_still_parses_with_new_post_first(self, config, make_post):
        sync_post(config, make_post('my-post'), quiet=True)
        soup = BeautifulSoup(config.index_path.read_text(), 'html.parser')
        links = [a['href'] for a in soup.select('ul.post-list li a')]
        assert links == ['posts/my-post.html', 'posts/first-post.html']
        first_date = soup.select_one('ul.post-list li .post-date').get_text()
        assert first_date == 'January 1, 2026'

    def test_feed_item_inserted_before_first_item(self, config, make_post):
        before = config.feed_path.read_text()
        sync_post(config, make_post('my-post'), quiet=True)
        after = config.feed_path.read_text()

        idx = before.index(ITEM_MARKER)
        assert after.startswith(before[:idx] + '<item>')
        assert after.endswith(before[idx:])
        assert after.index('my-post.html') < after.index('first-post.html')

        soup = BeautifulSoup(after, 'html.parser')
        items = soup.find_all('item')
        assert len(items) == 2
        assert items[0].find('title').get_text() == 'My Post'
        assert items[0].find('pubdate').get_text() == 'Thu, 01 Jan 2026 00:00:00 +0000'
        assert items[0].find('description').get_text() == 'Desc'
        assert items[0].find('guid').get_text() == 'https://jordanjoecooper.com/posts/my-post.html'

    def test_result(self, config, make_post):
        result = sync_post(config, make_post('my-post'), quiet=True)
        assert result.title == 'My Post'
        assert result.slug == 'my-post'
        assert result.url == 'https://jordanjoecooper.com/posts/my-post.html'
        assert result.index_updated
        assert result.feed_updated

    def test_configured_base_url(self, config, make_post):
        config.base_url = 'https://example.org/'
        result = sync_post(config, make_post('my-post'), quiet=True)
        assert result.url == 'https://example.org/posts/my-post.html'
        assert '<link>https://example.org/posts/my-post.html</link>' in config.feed_path.read_text()

    def test_prints_progress(self, config, make_post, capsys):
        sync_post(config, make_post('my-post'))
        out = capsys.readouterr().out
        assert 'Updated index.html' in out
        assert 'Updated feed.xml' in out

    @pytest.mark.parametrize('field', ['title', 'description', 'date'])
    def test_missing_field_changes_nothing(self, config, make_post, field):
        index_before = config.index_path.read_text()
        feed_before = config.feed_path.read_text()
        post_path = make_post('broken', **{field: None})

        with pytest.raises(MissingFieldError) as excinfo:
            sync_post(config, post_path, quiet=True)

        assert excinfo.value.field == field
        assert f'could not extract {field}' in str(excinfo.value)
        assert config.index_path.read_text() == index_before
        assert config.feed_path.read_text() == feed_before

    def test_invalid_date_is_a_date_error(self, config, make_post):
        with pytest.raises(MissingFieldError) as excinfo:
            sync_post(config, make_post('broken', date='2026-02-30'), quiet=True)
        assert excinfo.value.field == 'date'

    def test_homepage_marker_missing(self, config, make_post):
        config.index_path.write_text('<html><ul class="posts"></ul></html>')
        feed_before = config.feed_path.read_text()
        with pytest.raises(MarkerNotFoundError):
            sync_post(config, make_post('my-post'), quiet=True)
        assert config.feed_path.read_text() == feed_before

    def test_feed_failure_leaves_homepage_updated(self, config, make_post):
        config.feed_path.write_text('<rss><channel></channel></rss>')
        with pytest.raises(PartialSyncError) as excinfo:
            sync_post(config, make_post('my-post'), quiet=True)

        assert excinfo.value.updated == config.index_path
        assert excinfo.value.failed == config.feed_path
        assert isinstance(excinfo.value.cause, MarkerNotFoundError)
        assert 'posts/my-post.html' in config.index_path.read_text()

    def test_missing_feed_file_is_partial(self, config, make_post):
        config.feed_path.unlink()
        with pytest.raises(PartialSyncError):
            sync_post(config, make_post('my-post'), quiet=True)
        assert 'posts/my-post.html' in config.index_path.read_text()

    def test_undecodable_feed_is_partial(self, config, make_post):
        config.feed_path.write_bytes(b'<rss><channel>\xff<item></item></channel></rss>')
        with pytest.raises(PartialSyncError) as excinfo:
            sync_post(config, make_post('my-post'), quiet=True)
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)
        assert 'posts/my-post.html' in config.index_path.read_text()

    def test_undecodable_index_changes_nothing(self, config, make_post):
        config.index_path.write_bytes(b'<ul class="post-list">\xff</ul>')
        feed_before = config.feed_path.read_text()
        with pytest.raises(PostError, match='could not read'):
            sync_post(config, make_post('my-post'), quiet=True)
        assert config.feed_path.read_text() == feed_before

    def test_undecodable_post_is_a_post_error(self, config):
        post_path = config.posts_dir / 'binary.html'
        post_path.write_bytes(b'\xff\xfe not utf-8')
        index_before = config.index_path.read_text()
        with pytest.raises(PostError, match='could not read'):
            sync_post(config, post_path, quiet=True)
        assert config.index_path.read_text() == index_before


class TestResolvePostPath:

    def test_relative_to_root(self, config):
        path = resolve_post_path(config, 'posts/first-post.html')
        assert path == (config.posts_dir / 'first-post.html').resolve()

    def test_absolute(self, config):
        target = config.posts_dir / 'first-post.html'
        assert resolve_post_path(config, target) == target.resolve()

    def test_must_be_in_posts(self, config):
        with pytest.raises(PostError, match='path must be'):
            resolve_post_path(config, 'index.html')

    def test_must_be_html(self, config):
        (config.posts_dir / 'notes.md').write_text('notes')
        with pytest.raises(PostError, match='path must be'):
            resolve_post_path(config, 'posts/notes.md')

    def test_missing_file(self, config):
        with pytest.raises(PostNotFoundError):
            resolve_post_path(config, 'posts/nope.html')
