import os
from pathlib import Path

import pytest

from postfeed.core.config import ContentSettings, FeedSettings, OutputFormat, PostfeedConfig
from postfeed.core.exceptions import InvalidConfigurationValueError


@pytest.fixture(autouse=True)
def chdir_to_tmp_path(tmp_path: Path):
    """Ensure tests run in a clean directory."""
    original_dir = Path.cwd()
    os.chdir(tmp_path)
    yield
    os.chdir(original_dir)


def test_load_defaults(tmp_path: Path):
    """It should load default settings when no config file or env vars are present."""
    config = PostfeedConfig.load(tmp_path)

    assert isinstance(config.feed, FeedSettings)
    assert isinstance(config.content, ContentSettings)
    assert config.feed.limit is None
    assert config.feed.excerpt_length == 150
    assert config.feed.ellipsis == "..."
    assert config.feed.date_format == "%B %d, %Y"
    assert config.feed.placeholder == "No posts yet."
    assert config.feed.output_format is OutputFormat.HTML
    assert config.content.site_root == tmp_path
    assert config.content.abs_posts_dir == tmp_path / "_posts"


def test_load_from_toml_file(tmp_path: Path):
    """It should load settings from a .postfeed.toml file."""
    (tmp_path / ".postfeed.toml").write_text(
        """
[feed]
limit = 5
placeholder = "Nothing here."
output_format = "markdown"

[content]
posts_dir = "posts"
"""
    )

    config = PostfeedConfig.load(tmp_path)

    assert config.feed.limit == 5
    assert config.feed.placeholder == "Nothing here."
    assert config.feed.output_format is OutputFormat.MARKDOWN
    assert config.feed.excerpt_length == 150  # Default is kept
    assert config.content.abs_posts_dir == tmp_path / "posts"


def test_env_vars_override_toml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / ".postfeed.toml").write_text("[feed]\nlimit = 5\nexcerpt_length = 80\n")
    monkeypatch.setenv("POSTFEED_FEED__LIMIT", "3")

    config = PostfeedConfig.load(tmp_path)

    assert config.feed.limit == 3
    assert config.feed.excerpt_length == 80


def test_absolute_posts_dir_is_kept(tmp_path: Path):
    elsewhere = tmp_path / "elsewhere"
    settings = ContentSettings(site_root=tmp_path / "site", posts_dir=elsewhere)

    assert settings.abs_posts_dir == elsewhere


@pytest.mark.parametrize(
    "content",
    [
        "[feed]\nlimit = 0\n",
        "[feed]\nexcerpt_length = -1\n",
        '[feed]\noutput_format = "pdf"\n',
        "[feed\nlimit = 5\n",
        'content = "x"\n',
        "feed = 5\n",
    ],
)
def test_invalid_config_file_is_configuration_error(tmp_path: Path, content: str):
    (tmp_path / ".postfeed.toml").write_text(content)

    with pytest.raises(InvalidConfigurationValueError):
        PostfeedConfig.load(tmp_path)


def test_invalid_env_value_is_configuration_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("POSTFEED_FEED__LIMIT", "many")

    with pytest.raises(InvalidConfigurationValueError):
        PostfeedConfig.load(tmp_path)
