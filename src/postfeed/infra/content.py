"""Loads posts from a directory of Markdown files with YAML frontmatter.

Follows the Jekyll ``_posts`` convention: files are named
``YYYY-MM-DD-slug.md`` and carry ``title``, and optionally ``date``, ``url``
(or ``permalink``) and ``excerpt`` in their frontmatter.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from postfeed.core.config import ContentSettings
from postfeed.core.exceptions import (
    InvalidConfigurationValueError,
    InvalidDateFormatError,
    PostMetadataError,
    PostsDirectoryNotFoundError,
)
from postfeed.core.text import slugify
from postfeed.core.types import Post, parse_post_date

if TYPE_CHECKING:
    import datetime as dt
    from pathlib import Path

logger = logging.getLogger(__name__)

POST_SUFFIXES = (".md", ".markdown")
_DATED_FILENAME_RE = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<slug>.+)$")


def split_filename(path: Path) -> tuple[str | None, str]:
    """Split ``2025-12-11-my-post.md`` into ``("2025-12-11", "my-post")``."""
    match = _DATED_FILENAME_RE.match(path.stem)
    if match:
        return match.group("date"), match.group("slug")
    return None, path.stem


class ContentStore:
    """Reads posts from disk and returns them newest first."""

    def __init__(self, settings: ContentSettings | None = None) -> None:
        self.settings = settings or ContentSettings()

    @property
    def posts_dir(self) -> Path:
        return self.settings.abs_posts_dir

    def iter_post_files(self) -> list[Path]:
        if not self.posts_dir.is_dir():
            raise PostsDirectoryNotFoundError(self.posts_dir)
        return sorted(
            path for path in self.posts_dir.iterdir() if path.is_file() and path.suffix.lower() in POST_SUFFIXES
        )

    def load(self) -> list[Post]:
        """Load every published post, sorted by date descending.

        Raises:
            PostsDirectoryNotFoundError: If the posts directory does not exist
            PostMetadataError: If a post has malformed frontmatter or lacks title, url or date

        """
        loaded: list[tuple[Post, str]] = []
        for path in self.iter_post_files():
            post = self.load_file(path)
            if post is not None:
                loaded.append((post, path.name))

        loaded.sort(key=lambda item: (item[0].date, item[1]), reverse=True)
        logger.info("Loaded %d posts from %s", len(loaded), self.posts_dir)
        return [post for post, _ in loaded]

    def load_file(self, path: Path) -> Post | None:
        """Parse a single post file. Returns None for unpublished posts."""
        try:
            parsed = frontmatter.loads(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, ValueError) as exc:
            msg = f"Invalid frontmatter: {exc}"
            raise PostMetadataError(msg, source=path) from exc

        metadata = parsed.metadata if isinstance(parsed.metadata, dict) else {}
        if metadata.get("published") is False:
            logger.debug("Skipping unpublished post %s", path.name)
            return None

        return Post.from_metadata(self._resolve_metadata(path, metadata, parsed.content), source=path)

    def _resolve_metadata(self, path: Path, metadata: dict[str, Any], body: str) -> dict[str, Any]:
        filename_date, slug = split_filename(path)
        resolved: dict[str, Any] = {}

        if "title" in metadata:
            resolved["title"] = metadata["title"]

        date_value = metadata.get("date", filename_date)
        if date_value is not None:
            resolved["date"] = date_value

        url = metadata.get("url") or metadata.get("permalink")
        if url is None:
            post_date = self._known_date(date_value)
            if post_date is not None:
                url = self._build_permalink(post_date, metadata.get("slug") or slug)
        if url is not None:
            resolved["url"] = url

        excerpt = metadata.get("excerpt")
        if excerpt is None:
            excerpt = self._body_excerpt(body)
        if excerpt is not None:
            resolved["excerpt"] = str(excerpt)

        return resolved

    @staticmethod
    def _known_date(value: Any) -> dt.date | None:
        if value is None:
            return None
        try:
            return parse_post_date(value)
        except InvalidDateFormatError:
            # Reported by Post validation.
            return None

    def _build_permalink(self, post_date: dt.date, slug: str) -> str:
        try:
            return self.settings.permalink.format(
                year=f"{post_date.year:04d}",
                month=f"{post_date.month:02d}",
                day=f"{post_date.day:02d}",
                slug=slugify(slug),
            )
        except (KeyError, IndexError) as exc:
            msg = f"Unknown placeholder {exc} in permalink pattern {self.settings.permalink!r}"
            raise InvalidConfigurationValueError(msg) from exc

    def _body_excerpt(self, body: str) -> str | None:
        text = body.strip()
        if not text:
            return None
        return text.split(self.settings.excerpt_separator, 1)[0].strip() or None
