import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from postfeed.core.exceptions import InvalidConfigurationValueError

CONFIG_FILENAME = ".postfeed.toml"


def _deep_merge(destination: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and key in destination and isinstance(destination[key], Mapping):
            destination[key] = _deep_merge(dict(destination[key]), dict(value))
        else:
            destination[key] = value
    return destination


class OutputFormat(str, Enum):
    HTML = "html"
    MARKDOWN = "markdown"


class FeedSettings(BaseModel):
    """How a listing is bounded and displayed."""

    limit: int | None = Field(default=None, ge=1, description="Maximum number of entries (None = all)")
    excerpt_length: int = Field(default=150, ge=1, description="Character budget for excerpts")
    ellipsis: str = Field(default="...", description="Marker appended to truncated excerpts")
    date_format: str = Field(default="%B %d, %Y", description="strftime pattern for entry dates")
    placeholder: str = Field(default="No posts yet.", description="Message shown when there are no posts")
    output_format: OutputFormat = Field(default=OutputFormat.HTML, description="Fragment format")


class ContentSettings(BaseModel):
    """Where posts live and how missing metadata is derived.

    ``posts_dir`` is relative to ``site_root`` unless absolute.
    """

    site_root: Path = Field(default_factory=Path.cwd, description="Root directory of the site")
    posts_dir: Path = Field(default=Path("_posts"), description="Posts directory")
    permalink: str = Field(
        default="/{year}/{month}/{day}/{slug}.html",
        description="URL pattern used when a post has no explicit url",
    )
    excerpt_separator: str = Field(default="\n\n", description="Body separator ending the excerpt")

    @property
    def abs_posts_dir(self) -> Path:
        if self.posts_dir.is_absolute():
            return self.posts_dir
        return self.site_root / self.posts_dir


class PostfeedConfig(BaseSettings):
    """Root configuration.

    Supports environment variable overrides with the pattern:
    POSTFEED_SECTION__KEY (e.g., POSTFEED_FEED__LIMIT)
    """

    feed: FeedSettings = Field(default_factory=FeedSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="POSTFEED_",
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> "PostfeedConfig":
        """Loads configuration from .postfeed.toml and environment variables.

        Priority (highest to lowest):
        1. Environment variables (POSTFEED_SECTION__KEY)
        2. Config file (.postfeed.toml in the site root)
        3. Defaults
        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {config_file}: {exc}"
                raise InvalidConfigurationValueError(msg) from exc

        for section in ("feed", "content"):
            value = file_settings.get(section, {})
            if not isinstance(value, Mapping):
                msg = f"Configuration '{section}' in {config_file} must be a table, got {type(value).__name__}"
                raise InvalidConfigurationValueError(msg)

        try:
            env_settings = cls().model_dump(exclude_unset=True)
            merged_config = _deep_merge(file_settings, env_settings)
            merged_config.setdefault("content", {})["site_root"] = root_path
            return cls.model_validate(merged_config)
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise InvalidConfigurationValueError(msg) from exc
