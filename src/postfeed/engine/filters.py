"""Custom Jinja2 filters for listing templates."""

import html
from datetime import date
from urllib.parse import quote

from postfeed.core.text import DEFAULT_ELLIPSIS, DEFAULT_EXCERPT_LENGTH, make_excerpt, strip_markup

DEFAULT_DATE_FORMAT = "%B %d, %Y"


def long_date(value: date, format_str: str = DEFAULT_DATE_FORMAT) -> str:
    """Format a date as a long-form calendar string, e.g. ``December 11, 2025``.

    Args:
        value: Date to format
        format_str: strftime format string

    Returns:
        Formatted date string

    """
    if not isinstance(value, date):
        return str(value)
    return value.strftime(format_str)


def excerpt(value: str | None, length: int = DEFAULT_EXCERPT_LENGTH, ellipsis: str = DEFAULT_ELLIPSIS) -> str:
    """Strip markup and truncate; empty string when nothing remains."""
    return make_excerpt(value, max_chars=length, ellipsis=ellipsis) or ""


def markdown_link_text(value: str) -> str:
    """Escape characters that would end a Markdown link label early."""
    return value.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")


def markdown_text(value: str) -> str:
    """Entity-escape ``&``, ``<`` and ``>`` so plain text never becomes raw HTML in Markdown."""
    return html.escape(value, quote=False)


def markdown_url(value: str) -> str:
    """Percent-encode spaces, parentheses and angle brackets in a Markdown link destination."""
    return quote(value, safe="/:?#[]@!$&'*+,;=%~")


__all__ = ["excerpt", "long_date", "markdown_link_text", "markdown_text", "markdown_url", "strip_markup"]
