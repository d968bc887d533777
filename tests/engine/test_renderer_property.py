from datetime import date, timedelta

from hypothesis import given, strategies as st

from postfeed.core.config import FeedSettings
from postfeed.core.types import Post
from postfeed.engine.renderer import FeedRenderer

# --- Strategies ---


def plain_text(min_size=0, max_size=300):
    return st.text(
        alphabet=st.characters(blacklist_categories=("Cc", "Cs", "Co")),
        min_size=min_size,
        max_size=max_size,
    )


def post_strategy():
    return st.builds(
        Post,
        title=st.text(alphabet=st.characters(whitelist_categories=("L", "N")), min_size=1, max_size=40),
        url=st.from_regex(r"/[a-z0-9-]{1,30}\.html", fullmatch=True),
        date=st.dates(min_value=date(2000, 1, 1), max_value=date(2030, 12, 31)),
        excerpt=st.one_of(st.none(), plain_text()),
    )


def newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: p.date, reverse=True)


@given(posts=st.lists(post_strategy(), min_size=1, max_size=20), limit=st.integers(min_value=1, max_value=25))
def test_output_never_exceeds_limit(posts, limit):
    listing = FeedRenderer().render(newest_first(posts), limit=limit)

    assert len(listing.entries) <= limit
    assert len(listing.entries) == min(limit, len(posts))


@given(posts=st.lists(post_strategy(), min_size=1, max_size=20), limit=st.one_of(st.none(), st.integers(1, 25)))
def test_output_preserves_input_order(posts, limit):
    ordered = newest_first(posts)

    listing = FeedRenderer().render(ordered, limit=limit)

    expected = ordered if limit is None else ordered[:limit]
    assert [(e.title, e.url, e.date) for e in listing.entries] == [(p.title, p.url, p.date) for p in expected]


@given(
    posts=st.lists(post_strategy(), min_size=1, max_size=10),
    budget=st.integers(min_value=1, max_value=200),
    ellipsis=st.sampled_from(["...", "…", " [more]"]),
)
def test_excerpt_never_exceeds_budget_plus_ellipsis(posts, budget, ellipsis):
    renderer = FeedRenderer(FeedSettings(excerpt_length=budget, ellipsis=ellipsis))

    listing = renderer.render(posts)

    for entry in listing.entries:
        if entry.excerpt is not None:
            assert len(entry.excerpt) <= budget + len(ellipsis)


@given(limit=st.one_of(st.none(), st.integers(1, 25)))
def test_empty_input_always_yields_placeholder(limit):
    listing = FeedRenderer().render([], limit=limit)

    assert listing.items == ["No posts yet."]


def test_consecutive_days_render_newest_first():
    start = date(2025, 12, 1)
    posts = [
        Post(title=f"Day {i}", url=f"/day-{i}.html", date=start + timedelta(days=i)) for i in range(10, 0, -1)
    ]

    listing = FeedRenderer().render(posts, limit=3)

    assert [e.date_display for e in listing.entries] == ["December 11, 2025", "December 10, 2025", "December 09, 2025"]
