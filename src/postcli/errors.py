"""
Exceptions raised by postcli operations.

Every failure the CLI reports as "Error: ..." derives from PostError.
"""

from pathlib import Path


class PostError(Exception):
    """Base class for all postcli failures."""


class ConfigError(PostError):
    """Site root could not be found or postcli.yaml is malformed."""


class TemplateNotFoundError(PostError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"post template not found: {path}")


class RequiredValueError(PostError):
    """A required field (title, slug) ended up empty."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"{field} is required")


class InvalidDateError(PostError, ValueError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid date {value!r}, use YYYY-MM-DD")


class PostExistsError(PostError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"file already exists: {path}")


class PostNotFoundError(PostError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"post not found: {name}")


class MissingFieldError(PostError):
    """A field needed for the homepage/feed could not be read from a post."""

    HINTS = {
        'title': 'check og:title or <title>',
        'description': 'check meta name="description"',
        'date': 'check meta name="article:published_time" (YYYY-MM-DD)',
    }

    def __init__(self, field: str, path: Path):
        self.field = field
        self.path = path
        hint = self.HINTS.get(field, '')
        message = f"could not extract {field} from {path}"
        if hint:
            message += f" ({hint})"
        super().__init__(message)


class MarkerNotFoundError(PostError):
    def __init__(self, path: Path, marker: str):
        self.path = path
        self.marker = marker
        super().__init__(f"could not find {marker} in {path}")


class PartialSyncError(PostError):
    """The homepage was updated but the feed was not.

    Nothing is rolled back; the homepage keeps its new entry.
    """

    def __init__(self, updated: Path, failed: Path, cause: Exception):
        self.updated = updated
        self.failed = failed
        self.cause = cause
        super().__init__(
            f"updated {updated.name} but failed to update {failed.name}: {cause}"
        )


class PostSyncError(PostError):
    """A new post was written but could not be added to the homepage/feed."""

    def __init__(self, path: Path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(
            f"post created at {path} but failed to update homepage/feed: {cause}"
        )
