"""Jinja2 template loader for listing fragments.

Provides centralized template loading with the listing filters registered.
"""

from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from postfeed.core.text import slugify
from postfeed.engine import filters


def _autoescape(template_name: str | None) -> bool:
    """Escape HTML fragments only; Markdown output is emitted verbatim."""
    return template_name is not None and ".html" in template_name


class TemplateLoader:
    """Loads and renders Jinja2 templates for listing fragments.

    Supports:
    - Autoescaping for ``*.html.jinja2`` templates
    - Custom filters (long dates, excerpts, slugify)
    - Configurable template directory
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize TemplateLoader.

        Args:
            template_dir: Path to template directory. Defaults to the packaged postfeed/engine/templates

        """
        if template_dir is None:
            package_templates = files("postfeed.engine").joinpath("templates")
            template_dir = Path(str(package_templates))

        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=_autoescape,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=False,
            undefined=StrictUndefined,
        )

        self._register_filters()

    def _register_filters(self) -> None:
        """Register custom Jinja2 filters."""
        self.env.filters["long_date"] = filters.long_date
        self.env.filters["excerpt"] = filters.excerpt
        self.env.filters["strip_markup"] = filters.strip_markup
        self.env.filters["md_link_text"] = filters.markdown_link_text
        self.env.filters["md_text"] = filters.markdown_text
        self.env.filters["md_url"] = filters.markdown_url
        self.env.filters["slugify"] = slugify

    def load_template(self, template_name: str) -> Template:
        """Load a template by name.

        Raises:
            TemplateNotFound: If template does not exist

        """
        return self.env.get_template(template_name)

    def render_template(self, template_name: str, **context: Any) -> str:
        """Load and render a template with context.

        Args:
            template_name: Template path relative to template_dir (e.g., "post_list.html.jinja2")
            **context: Template context variables

        Returns:
            Rendered template string

        """
        template = self.load_template(template_name)
        return template.render(**context)
