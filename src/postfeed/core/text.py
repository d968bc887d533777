"""Plain-text helpers for excerpts and slugs."""

import html
import re
from unicodedata import normalize

from markdown_it import MarkdownIt

# --- Markdown Renderer ---
_md = MarkdownIt("commonmark", {"html": True})

_HIDDEN_BLOCK_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
_BLOCK_TAG_RE = re.compile(
    r"</?(?:p|div|br|hr|li|ul|ol|dl|dt|dd|h[1-6]|pre|blockquote|table|tr|td|th|section|article)\b[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"</?[a-zA-Z][^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
_CODE_SPAN_RE = re.compile(r"(`+[^`]*`+)")
# `<` right after an identifier and opening a type argument: Vec<T>, List<? extends T>, Vec<u8>.
_GENERIC_OPEN_RE = re.compile(
    r"(?<=\w)<(?=[A-Z?'&_]|(?:[ui](?:8|16|32|64|128|size)|f32|f64|bool|char|str|dyn|impl)\b)"
)
_GENERIC_CHARS = frozenset(" _,?'&:;[]<>")

DEFAULT_EXCERPT_LENGTH = 150
DEFAULT_ELLIPSIS = "..."


def _generic_end(text: str, start: int) -> int | None:
    """Return the index just past the balanced ``<...>`` run at ``start``, or None."""
    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "<":
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                return index + 1
        elif not (char.isalnum() or char in _GENERIC_CHARS):
            return None
    return None


def _escape_generic_runs(text: str) -> str:
    parts: list[str] = []
    pos = 0
    for match in _GENERIC_OPEN_RE.finditer(text):
        start = match.start()
        if start < pos:
            continue
        end = _generic_end(text, start)
        if end is None:
            continue
        parts.append(text[pos:start])
        parts.append(text[start:end].replace("<", "&lt;").replace(">", "&gt;"))
        pos = end
    parts.append(text[pos:])
    return "".join(parts)


def _protect_generics(text: str) -> str:
    """Entity-escape type arguments such as ``Vec<T>`` so they survive tag stripping.

    Code spans and fenced blocks are left alone; CommonMark already escapes them.
    """
    lines = []
    in_fence = False
    for line in text.split("\n"):
        if line.lstrip().startswith(("```", "~~~")):
            in_fence = not in_fence
            lines.append(line)
            continue
        if in_fence:
            lines.append(line)
            continue
        parts = _CODE_SPAN_RE.split(line)
        lines.append(
            "".join(part if index % 2 else _escape_generic_runs(part) for index, part in enumerate(parts))
        )
    return "\n".join(lines)


def strip_markup(text: str | None) -> str:
    """Reduce Markdown or HTML to collapsed plain text.

    The text is rendered as CommonMark first, so emphasis markers, link
    syntax and code fences disappear along with any raw HTML tags.

    Examples:
        >>> strip_markup("Hello **world** <em>again</em>")
        'Hello world again'

    """
    if not text:
        return ""
    rendered = _md.render(_protect_generics(text))
    rendered = _HIDDEN_BLOCK_RE.sub(" ", rendered)
    rendered = _COMMENT_RE.sub(" ", rendered)
    rendered = _BLOCK_TAG_RE.sub(" ", rendered)
    rendered = _TAG_RE.sub("", rendered)
    plain = html.unescape(rendered)
    return _WHITESPACE_RE.sub(" ", plain).strip()


def truncate_text(
    text: str,
    max_chars: int = DEFAULT_EXCERPT_LENGTH,
    ellipsis: str = DEFAULT_ELLIPSIS,
) -> str:
    """Truncate text to ``max_chars`` characters, appending ``ellipsis`` when cut.

    A cut that falls inside a word backs up to the last space, provided one
    exists in the second half of the budget.
    The result never exceeds ``max_chars + len(ellipsis)`` characters.

    Args:
        text: Plain text to truncate
        max_chars: Character budget for the text itself
        ellipsis: Marker appended when the text was shortened

    Returns:
        The original text if it fits, otherwise the shortened text plus marker

    """
    if max_chars < 1:
        msg = f"max_chars must be positive, got {max_chars}"
        raise ValueError(msg)
    if len(text) <= max_chars:
        return text

    cut = text[:max_chars]
    if not text[max_chars].isspace():
        last_space = cut.rfind(" ")
        if last_space >= max_chars // 2:
            cut = cut[:last_space]
    cut = cut.rstrip(" ,.;:-")
    return f"{cut}{ellipsis}"


def make_excerpt(
    text: str | None,
    max_chars: int = DEFAULT_EXCERPT_LENGTH,
    ellipsis: str = DEFAULT_ELLIPSIS,
) -> str | None:
    """Strip markup from an excerpt and truncate it. Returns None when nothing is left."""
    plain = strip_markup(text)
    if not plain:
        return None
    return truncate_text(plain, max_chars=max_chars, ellipsis=ellipsis)


def slugify(text: str, max_len: int = 60) -> str:
    """Convert text to a safe URL-friendly slug.

    Examples:
        >>> slugify("Generics in Rust vs Java")
        'generics-in-rust-vs-java'
        >>> slugify("Café")
        'cafe'

    """
    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")

    if not slug:
        return "untitled"

    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")

    return slug
