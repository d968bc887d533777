"""Shared fixtures for postfeed tests."""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from textwrap import dedent

import pytest
from hypothesis import HealthCheck, settings

from postfeed.core.types import Post

# The autouse env fixture below is function scoped; it holds no per-example state.
settings.register_profile(
    "postfeed",
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
settings.load_profile("postfeed")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    """Keep developer POSTFEED_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("POSTFEED_"):
            monkeypatch.delenv(key)
    yield
    logging.getLogger().handlers.clear()


@pytest.fixture
def sample_posts() -> list[Post]:
    """Two posts, newest first."""
    return [
        Post(
            title="Generics in Rust",
            url="/2025/12/11/generics-in-rust.html",
            date=date(2025, 12, 11),
            excerpt="Rust generics are **monomorphized** at compile time.",
        ),
        Post(
            title="Generics in Java",
            url="/2025/12/01/generics-in-java.html",
            date=date(2025, 12, 1),
        ),
    ]


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A site with a `_posts` directory holding two dated posts."""
    posts_dir = tmp_path / "_posts"
    posts_dir.mkdir()
    (posts_dir / "2025-12-01-generics-in-java.md").write_text(
        dedent(
            """\
            ---
            title: Generics in Java
            ---
            Java erases type parameters at runtime.

            The rest of the article.
            """
        ),
        encoding="utf-8",
    )
    (posts_dir / "2025-12-11-generics-in-rust.md").write_text(
        dedent(
            """\
            ---
            title: Generics in Rust
            excerpt: Rust generics are <em>monomorphized</em>.
            ---
            Body text.
            """
        ),
        encoding="utf-8",
    )
    return tmp_path
