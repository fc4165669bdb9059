"""Template rendering engine for Statue.

This module uses Jinja2 to render the page views: homepage, content
page and directory listing, all wrapped in a shared layout with
navigation and footer.

Key class:
- TemplateEngine: Handles template rendering and provides context to templates.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .content import ContentEntry, DirectoryDescriptor
from .sidebar import SidebarNode

# Templates shipped with the package; project templates override them by name.
_DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates" / "default"

RECENT_LIMIT = 6


def format_date(value: Any) -> str:
    """Format a metadata date for display (``M/D/YYYY``).

    Args:
        value: ISO date string, date or datetime.

    Returns:
        Display string; unparseable strings are returned unchanged.
    """
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, date):
        return f"{value.month}/{value.day}/{value.year}"
    return str(value)


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        config: Site configuration.
        directories: Top-level directories used for navigation and footer.
        env: Jinja2 environment.
    """

    def __init__(
        self,
        config: dict[str, Any],
        templates_dir: Path | None = None,
        directories: Sequence[DirectoryDescriptor] = (),
    ):
        """Initialize the template engine.

        Args:
            config: Site configuration.
            templates_dir: Optional project directory with override templates.
            directories: Top-level content directories.
        """
        self.config = config
        self.directories = list(directories)
        search_path = [_DEFAULT_TEMPLATES_DIR]
        if templates_dir is not None and templates_dir.is_dir():
            search_path.insert(0, templates_dir)
        self.env = Environment(
            loader=FileSystemLoader(search_path),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
        )
        self.env.filters["format_date"] = format_date
        self._install_globals()

    def _install_globals(self) -> None:
        """Install global variables in the Jinja environment."""
        self.env.globals["config"] = self.config
        self.env.globals["site"] = self.config.get("site", {})
        self.env.globals["search"] = self.config.get("search", {})
        self.env.globals["directories"] = self.directories
        self.env.globals["current_year"] = date.today().year

    def render_homepage(self, recent: Sequence[ContentEntry]) -> str:
        """Render the homepage with directory cards and the latest entries."""
        site = self.config.get("site", {})
        return self._render(
            "home.html.jinja",
            title=site.get("name", ""),
            description=site.get("description", ""),
            recent=list(recent)[:RECENT_LIMIT],
        )

    def render_page(
        self, entry: ContentEntry, sidebar: Sequence[SidebarNode] = ()
    ) -> str:
        """Render a content entry inside the layout.

        Args:
            entry: Entry to render.
            sidebar: Navigation tree of the entry's top-level directory.
        """
        site = self.config.get("site", {})
        return self._render(
            "page.html.jinja",
            title=f"{entry.title} | {site.get('name', '')}",
            description=entry.metadata.get("description") or site.get("description", ""),
            entry=entry,
            metadata=entry.metadata,
            body=Markup(entry.content),
            sidebar=list(sidebar),
        )

    def render_listing(
        self, directory: DirectoryDescriptor, entries: Sequence[ContentEntry]
    ) -> str:
        """Render the listing page of a top-level directory."""
        site = self.config.get("site", {})
        return self._render(
            "listing.html.jinja",
            title=f"{directory.title} | {site.get('name', '')}",
            description=f"Browse all {directory.title.lower()} content",
            directory=directory,
            entries=list(entries),
        )

    def _render(self, name: str, **context: Any) -> str:
        return self.env.get_template(name).render(**context)
