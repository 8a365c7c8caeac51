"""
postcli - create and edit posts, and keep the homepage + RSS feed in sync.

Run from anywhere inside the site (the directory with post-template.html
and index.html, or below it):

Usage:
    postcli                                  # interactive menu
    postcli new                              # create a new post (prompts)
    postcli new "Title" "Description" "keywords" 2026-02-23 my-slug
    postcli edit [slug]                      # open a post in $EDITOR
    postcli list                             # list all posts, newest first
    postcli update-links posts/my-post.html  # add an existing post to index.html + feed.xml
    postcli sitemap                          # rebuild sitemap.xml
"""

import argparse
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Optional

from .errors import PostError, PostSyncError, RequiredValueError
from .posts import find_post, list_posts
from .site import SiteConfig, find_root, load_config
from .sitemap import write_sitemap
from .sync import resolve_post_path, sync_post
from .text import slugify, today_utc
from .writer import create_post, prepare_post


DEFAULT_EDITOR = 'nano'


def read_line(prompt: str, default: str = '') -> str:
    """Prompt for one line. Empty input (or EOF) gives the default."""
    label = f"{prompt} ({default})" if default else prompt
    try:
        answer = input(f"{label}: ")
    except EOFError:
        return default
    return answer.strip() or default


def resolve_editor(config: SiteConfig) -> str:
    return (config.editor
            or os.environ.get('EDITOR')
            or os.environ.get('VISUAL')
            or DEFAULT_EDITOR)


def run_new(config: SiteConfig, title: Optional[str] = None,
            description: Optional[str] = None, keywords: Optional[str] = None,
            date: Optional[str] = None, slug: Optional[str] = None) -> Path:
    """Create a post. Values not given on the command line are prompted for."""
    if not title:
        title = read_line('Title')
        if not title:
            raise RequiredValueError('title')
    default_slug = slugify(title)

    if not description:
        description = read_line('Description (meta, one line)')
    if not keywords:
        keywords = read_line('Keywords (comma-separated)')
    if not date:
        date = read_line('Date (YYYY-MM-DD)', today_utc())
    if not slug:
        slug = read_line('Slug (filename)', default_slug)

    post = prepare_post(title, description, keywords, date, slug)
    out_path, _ = create_post(config, post)

    print()
    print(f"Next: edit the post body in {out_path}")
    return out_path


def run_edit(config: SiteConfig, slug: Optional[str] = None):
    """Open a post in the editor, by slug or picked from a numbered list."""
    posts = list_posts(config.posts_dir, config.title_suffix)
    if not posts:
        raise PostError("no posts yet; create one with: postcli new")

    if slug:
        target = find_post(posts, slug)
    else:
        print()
        for i, post in enumerate(posts, 1):
            date_str = f" ({post.date})" if post.date else ''
            print(f"  {i}) {post.title}{date_str}")
        print()
        choice = read_line(f"Edit which? (1-{len(posts)})")
        try:
            n = int(choice)
        except ValueError:
            raise PostError("invalid number") from None
        if not 1 <= n <= len(posts):
            raise PostError("invalid number")
        target = posts[n - 1]

    editor = resolve_editor(config)
    print(f"Opening {target.filename} in {editor}...\n")
    # stdin/stdout/stderr are inherited so the editor runs interactively
    result = subprocess.run([*shlex.split(editor), str(target.path)])
    if result.returncode != 0:
        raise PostError(f"{editor} exited with status {result.returncode}")

    print(f"Done. Run 'postcli update-links posts/{target.filename}' "
          f"if you changed title/date/description.")


def run_list(config: SiteConfig):
    posts = list_posts(config.posts_dir, config.title_suffix)
    if not posts:
        print("  No posts.")
        return

    print()
    for post in posts:
        print(f"  {post.title}")
        date_str = f"  {post.date}" if post.date else ''
        print(f"    posts/{post.filename}{date_str}")
    print()


def run_update_links(config: SiteConfig, path: str):
    sync_post(config, resolve_post_path(config, path))


def run_menu(config: SiteConfig):
    """Main menu, until the user quits (or stdin closes)."""
    while True:
        print(f"\n  Posts - {config.site_name}\n")
        print("  1) New post")
        print("  2) Edit post")
        print("  3) List posts")
        print("  q) Quit\n")
        try:
            choice = input("  Choice (1-3 or q): ").strip().lower()
        except EOFError:
            return

        if choice in ('', 'q', 'quit'):
            return
        if choice in ('1', 'new', 'n'):
            action = run_new
        elif choice in ('2', 'edit', 'e'):
            action = run_edit
        elif choice in ('3', 'list', 'l'):
            action = run_list
        else:
            print("  Unknown option. Use 1-3 or q.")
            continue

        try:
            action(config)
        except (PostError, OSError) as e:
            print(f"Error: {e}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='postcli',
        description='Create and edit posts, and keep the homepage and RSS feed in sync'
    )
    parser.add_argument('--root', type=Path,
                        help='Site root (default: nearest directory above cwd '
                             'with post-template.html and index.html)')
    subparsers = parser.add_subparsers(dest='command', metavar='command')

    new = subparsers.add_parser('new', aliases=['n'],
                                help='Create a new post (prompts for missing values)')
    new.add_argument('title', nargs='?', help='Post title')
    new.add_argument('description', nargs='?', help='Meta description (one line)')
    new.add_argument('keywords', nargs='?', help='Comma-separated keywords')
    new.add_argument('date', nargs='?', help='Publish date, YYYY-MM-DD (default: today, UTC)')
    new.add_argument('slug', nargs='?', help='Filename without .html (default: from title)')
    new.set_defaults(func=lambda config, args: run_new(
        config, args.title, args.description, args.keywords, args.date, args.slug))

    edit = subparsers.add_parser('edit', aliases=['e'],
                                 help='Edit a post (pick from list or open by slug)')
    edit.add_argument('slug', nargs='?', help='Post slug or filename')
    edit.set_defaults(func=lambda config, args: run_edit(config, args.slug))

    lister = subparsers.add_parser('list', aliases=['l'], help='List all posts')
    lister.set_defaults(func=lambda config, args: run_list(config))

    update = subparsers.add_parser('update-links', aliases=['sync'],
                                   help='Update index.html and feed.xml from a post file')
    update.add_argument('path', help='Post file, e.g. posts/my-post.html')
    update.set_defaults(func=lambda config, args: run_update_links(config, args.path))

    sitemap = subparsers.add_parser('sitemap', help='Rebuild sitemap.xml from posts/')
    sitemap.set_defaults(func=lambda config, args: write_sitemap(config))

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        root = args.root.resolve() if args.root else find_root()
        config = load_config(root)
        if args.command is None:
            run_menu(config)
        else:
            args.func(config, args)
    except PostSyncError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Run manually: postcli update-links posts/{e.path.name}", file=sys.stderr)
        return 1
    except (PostError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print()
        return 130

    return 0


if __name__ == '__main__':
    sys.exit(main())
