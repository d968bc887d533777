"""Post listing renderer for static blog home and index pages."""

from postfeed.core.types import FeedListing, Post, RenderedEntry
from postfeed.engine.renderer import FeedRenderer, render_listing

__all__ = ["FeedListing", "FeedRenderer", "Post", "RenderedEntry", "render_listing"]

__version__ = "0.1.0"
