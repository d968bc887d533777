"""Core data types for postfeed."""

import datetime as dt
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from postfeed.core.exceptions import InvalidDateFormatError, PostMetadataError

REQUIRED_FIELDS = ("title", "url", "date")


def parse_post_date(value: Any) -> dt.date:
    """Coerce a frontmatter date value into a calendar date.

    Accepts ``date`` and ``datetime`` objects, and ISO 8601 strings such as
    ``2025-12-11`` or ``2025-12-11T09:30:00+00:00``.

    Raises:
        InvalidDateFormatError: If the value is not a recognisable date.

    """
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return dt.date.fromisoformat(text)
        except ValueError:
            pass
        try:
            return dt.datetime.fromisoformat(text).date()
        except ValueError as exc:
            raise InvalidDateFormatError(value) from exc
    raise InvalidDateFormatError(value)


def _describe_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ())) or "post"
        parts.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(parts)


class Post(BaseModel):
    """A single blog post as seen by the listing renderer."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    date: dt.date
    excerpt: str | None = None

    @field_validator("title", "url", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: Any) -> Any:
        # YAML reads `title: 1984` as an int.
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title", "url")
    @classmethod
    def _require_text(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            msg = "must not be blank"
            raise ValueError(msg)
        return stripped

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> dt.date:
        try:
            return parse_post_date(value)
        except InvalidDateFormatError as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, Any], source: Path | None = None) -> "Post":
        """Build a post from a metadata mapping, raising a configuration error on bad input."""
        data = {key: metadata[key] for key in (*REQUIRED_FIELDS, "excerpt") if key in metadata}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = exc.errors(include_url=False, include_context=False)
            msg = f"Invalid post metadata ({_describe_errors(errors)})"
            raise PostMetadataError(msg, source=source, errors=errors) from exc


class RenderedEntry(BaseModel):
    """A post prepared for display in a listing."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    date: dt.date
    date_display: str
    excerpt: str | None = None


class FeedListing(BaseModel):
    """Result of a render pass.

    ``placeholder`` is set only when the input held no posts, so a listing is
    never empty: ``items`` yields either the entries or the placeholder text.
    """

    entries: list[RenderedEntry] = Field(default_factory=list)
    placeholder: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def items(self) -> list[RenderedEntry | str]:
        if self.entries:
            return list(self.entries)
        return [self.placeholder or ""]
