"""Post listing renderer for home and index pages.

Turns an ordered sequence of posts (newest first) into a ``FeedListing``:
at most ``limit`` entries in input order, long-form dates, and excerpts
reduced to truncated plain text. An empty input produces the configured
placeholder message instead of an empty listing.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from postfeed.core.config import FeedSettings, OutputFormat
from postfeed.core.exceptions import InvalidConfigurationValueError
from postfeed.core.text import make_excerpt
from postfeed.core.types import FeedListing, Post, RenderedEntry
from postfeed.engine.filters import long_date
from postfeed.engine.template_loader import TemplateLoader

logger = logging.getLogger(__name__)

TEMPLATES = {
    OutputFormat.HTML: "post_list.html.jinja2",
    OutputFormat.MARKDOWN: "post_list.md.jinja2",
}


def _coerce_post(post: Post | Mapping[str, Any]) -> Post:
    if isinstance(post, Post):
        return post
    return Post.from_metadata(post)


class FeedRenderer:
    """Renders post listings as entries, HTML fragments or Markdown fragments."""

    def __init__(self, settings: FeedSettings | None = None, loader: TemplateLoader | None = None) -> None:
        self.settings = settings or FeedSettings()
        self._loader = loader

    @property
    def loader(self) -> TemplateLoader:
        if self._loader is None:
            self._loader = TemplateLoader()
        return self._loader

    def _resolve_limit(self, limit: int | None) -> int | None:
        resolved = limit if limit is not None else self.settings.limit
        if resolved is not None and resolved < 1:
            msg = f"Listing limit must be a positive integer, got {resolved}"
            raise InvalidConfigurationValueError(msg)
        return resolved

    def render_entry(self, post: Post) -> RenderedEntry:
        """Prepare a single post for display."""
        return RenderedEntry(
            title=post.title,
            url=post.url,
            date=post.date,
            date_display=long_date(post.date, self.settings.date_format),
            excerpt=make_excerpt(
                post.excerpt,
                max_chars=self.settings.excerpt_length,
                ellipsis=self.settings.ellipsis,
            ),
        )

    def render(self, posts: Sequence[Post | Mapping[str, Any]], limit: int | None = None) -> FeedListing:
        """Render posts into a listing.

        Args:
            posts: Posts ordered newest first; mappings are validated into ``Post``
            limit: Maximum number of entries. Falls back to ``settings.limit``;
                ``None`` means unbounded.

        Returns:
            A listing with at most ``limit`` entries in input order, or the
            placeholder message when ``posts`` is empty.

        Raises:
            PostMetadataError: If a post mapping lacks title, url or date, or has a malformed date
            InvalidConfigurationValueError: If ``limit`` is not positive

        """
        resolved_limit = self._resolve_limit(limit)
        validated = [_coerce_post(post) for post in posts]

        if not validated:
            logger.debug("No posts to render; using placeholder")
            return FeedListing(placeholder=self.settings.placeholder)

        selected = validated if resolved_limit is None else validated[:resolved_limit]
        entries = [self.render_entry(post) for post in selected]
        logger.debug("Rendered %d of %d posts", len(entries), len(validated))
        return FeedListing(entries=entries)

    def to_fragment(self, listing: FeedListing, output_format: OutputFormat | str | None = None) -> str:
        """Render a listing through the HTML or Markdown template."""
        fmt = OutputFormat(output_format) if output_format is not None else self.settings.output_format
        return self.loader.render_template(TEMPLATES[fmt], listing=listing).strip() + "\n"

    def to_html(self, listing: FeedListing) -> str:
        return self.to_fragment(listing, OutputFormat.HTML)

    def to_markdown(self, listing: FeedListing) -> str:
        return self.to_fragment(listing, OutputFormat.MARKDOWN)

    def render_fragment(
        self,
        posts: Sequence[Post | Mapping[str, Any]],
        limit: int | None = None,
        output_format: OutputFormat | str | None = None,
    ) -> str:
        """Render posts straight to a fragment in the requested format."""
        return self.to_fragment(self.render(posts, limit=limit), output_format)


def render_listing(
    posts: Sequence[Post | Mapping[str, Any]],
    limit: int | None = None,
    settings: FeedSettings | None = None,
) -> FeedListing:
    """Render posts with a throwaway ``FeedRenderer``."""
    return FeedRenderer(settings).render(posts, limit=limit)
