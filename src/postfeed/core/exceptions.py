"""Centralized exceptions for postfeed."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class PostfeedError(Exception):
    """Base exception for all postfeed errors."""


class ConfigError(PostfeedError):
    """Base exception for build-time configuration errors."""


class InvalidDateFormatError(ConfigError):
    """Raised when a post date cannot be parsed."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Invalid date: {value!r}. Expected YYYY-MM-DD or an ISO 8601 datetime.")


class PostMetadataError(ConfigError):
    """Raised when a post is missing required metadata or carries malformed values."""

    def __init__(
        self,
        message: str,
        source: Path | None = None,
        errors: Sequence[dict[str, Any]] | None = None,
    ) -> None:
        self.source = source
        self.errors = list(errors or [])
        prefix = f"{source}: " if source is not None else ""
        super().__init__(f"{prefix}{message}")


class InvalidConfigurationValueError(ConfigError):
    """Raised when a configuration value is invalid."""


class PostsDirectoryNotFoundError(ConfigError):
    """Raised when the posts directory does not exist."""

    def __init__(self, posts_dir: Path) -> None:
        self.posts_dir = posts_dir
        super().__init__(f"Posts directory not found: {posts_dir}")
