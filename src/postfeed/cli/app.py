import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from postfeed.core.config import OutputFormat, PostfeedConfig
from postfeed.core.exceptions import ConfigError
from postfeed.core.types import Post
from postfeed.engine.renderer import FeedRenderer
from postfeed.infra.content import ContentStore
from postfeed.logging_setup import configure_logging

app = typer.Typer(name="postfeed", help="Render blog post listings for home and index pages.")

console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")):
    """
    Render blog post listings for home and index pages.
    """
    configure_logging(logging.DEBUG if verbose else None)


def _load(site_root: Path) -> tuple[PostfeedConfig, list[Post]]:
    config = PostfeedConfig.load(site_root)
    posts = ContentStore(config.content).load()
    return config, posts


def _fail(exc: ConfigError) -> typer.Exit:
    console.print(f"[bold red]Configuration error:[/bold red] {escape(str(exc))}", highlight=False, soft_wrap=True)
    return typer.Exit(code=1)


@app.command()
def render(
    site_root: Path = typer.Argument(Path("."), help="Root directory of the site."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum number of posts to list."),
    fmt: OutputFormat | None = typer.Option(None, "--format", "-f", help="Fragment format."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the fragment to this file."),
):
    """
    Render the post listing as an HTML or Markdown fragment.
    """
    try:
        config, posts = _load(site_root)
        renderer = FeedRenderer(config.feed)
        fragment = renderer.render_fragment(posts, limit=limit, output_format=fmt)
    except ConfigError as exc:
        raise _fail(exc) from exc

    if output is None:
        typer.echo(fragment, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(fragment, encoding="utf-8")
    logger.info("Wrote listing to %s", output)


@app.command("list")
def list_posts(
    site_root: Path = typer.Argument(Path("."), help="Root directory of the site."),
    limit: int | None = typer.Option(None, "--limit", "-n", min=1, help="Maximum number of posts to list."),
):
    """
    Show the listing as a table.
    """
    try:
        config, posts = _load(site_root)
        listing = FeedRenderer(config.feed).render(posts, limit=limit)
    except ConfigError as exc:
        raise _fail(exc) from exc

    if listing.is_empty:
        console.print(listing.placeholder, highlight=False)
        return

    table = Table(title="Posts")
    table.add_column("Date", style="bold cyan", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("URL")
    table.add_column("Excerpt")

    for entry in listing.entries:
        table.add_row(entry.date_display, entry.title, entry.url, entry.excerpt or "")

    console.print(table)


if __name__ == "__main__":
    app()
