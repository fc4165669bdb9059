"""Site building functionality for Statue.

This module contains the core logic for building a static site from the
content tree. It loads configuration, scans content, renders templates
and writes the output directory together with sitemap.xml and robots.txt.

Key functions:
- build_site: Main function to build the entire site.
- create_repository: Wire scanner, cache and repository for a project.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

from jinja2 import TemplateError

from .cache import ContentCache
from .config import load_config
from .content import ContentEntry, ContentScanner, DirectoryDescriptor
from .html_utils import escape_html, join_root_url
from .repository import ContentRepository
from .sidebar import SidebarBuilder
from .templates import TemplateEngine
from .utils import ensure_clean_dir
from .variables import TemplateVariables

logger = logging.getLogger(__name__)

# Stylesheets shipped with the package, copied to /styles.
_STYLES_DIR = Path(__file__).parent / "styles"


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path | str,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        entries: All content entries of the site.
        directories: Top-level content directories.
        output_dir: Directory where the site was built.
    """

    entries: list[ContentEntry]
    directories: list[DirectoryDescriptor]
    output_dir: Path


def create_repository(
    project_root: Path,
    config: dict[str, Any],
    cache: ContentCache | None = None,
) -> ContentRepository:
    """Create the content repository for a project.

    Args:
        project_root: Root directory of the project.
        config: Site configuration.
        cache: Cache to use; a fresh production cache when omitted.

    Returns:
        ContentRepository reading ``config["content_dir"]``.
    """
    content_dir = project_root / config.get("content_dir", "content")
    scanner = ContentScanner.from_path(content_dir, TemplateVariables(config))
    return ContentRepository(scanner, cache)


def _date_key(entry: ContentEntry) -> datetime:
    parsed = _parse_date(entry.metadata.get("date"))
    return parsed or datetime.min


def _parse_date(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value).replace(tzinfo=None)
        except ValueError:
            return None
    return None


def sort_by_date(entries: Iterable[ContentEntry]) -> list[ContentEntry]:
    """Sort entries newest first; undated entries go last."""
    return sorted(entries, key=_date_key, reverse=True)


def build_site(
    project_root: Path,
    development: bool = False,
    output_dir_override: Path | None = None,
    cache: ContentCache | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        project_root: Root directory of the project.
        development: Rescan content on every read instead of caching.
        output_dir_override: Optional path to write the build output instead
            of the configured output_dir.
        cache: Optional cache owned by the caller (e.g. the dev server).

    Returns:
        BuildResult containing all entries, directories and output directory.

    Raises:
        ContentError: If a content file cannot be read or parsed.
        BuildError: If a page fails to render.
    """
    config = load_config(project_root)
    output_dir = output_dir_override or (
        project_root / config.get("output_dir", "build")
    )
    logger.info("Cleaning %s", output_dir)
    ensure_clean_dir(output_dir)
    _copy_static(project_root / config.get("static_dir", "static"), output_dir)

    repository = create_repository(
        project_root, config, cache or ContentCache(development=development)
    )
    logger.info("Processing content")
    entries = repository.get_all()
    directories = repository.get_directories()
    # Every view of this build reads the same scan, even in development.
    snapshot = ContentCache()
    snapshot.populate(entries)
    view = ContentRepository(repository.scanner, snapshot)
    sidebars = SidebarBuilder(view)

    engine = TemplateEngine(
        config,
        templates_dir=project_root / config.get("templates_dir", "templates"),
        directories=directories,
    )

    homepage = _render("index", engine.render_homepage, sort_by_date(entries))
    _write_html(output_dir / "index.html", homepage)
    for entry in entries:
        sidebar = sidebars.build(entry.main_directory)
        html = _render(entry.path, engine.render_page, entry, sidebar)
        _write_html(output_dir / entry.url.strip("/") / "index.html", html)
    for directory in directories:
        listing = view.get_by_directory(directory.name)
        html = _render(directory.path, engine.render_listing, directory, listing)
        _write_html(output_dir / directory.url.strip("/") / "index.html", html)

    base_url = str(config.get("site", {}).get("url", "")).rstrip("/")
    _write_sitemap(output_dir, base_url, entries, directories)
    _write_robots(output_dir, base_url)
    logger.info(
        "Built %d pages and %d directory listings into %s",
        len(entries),
        len(directories),
        output_dir,
    )
    return BuildResult(entries=entries, directories=directories, output_dir=output_dir)


def _render(source: Path | str, view, *args) -> str:
    try:
        return view(*args)
    except TemplateError as exc:
        raise BuildError(source, f"Template error: {exc}", exc) from exc


def _copy_static(static_dir: Path, output_dir: Path) -> None:
    """Copy the project's static files and the bundled styles."""
    if static_dir.is_dir():
        shutil.copytree(static_dir, output_dir, dirs_exist_ok=True)
    shutil.copytree(_STYLES_DIR, output_dir / "styles", dirs_exist_ok=True)


def _write_html(target: Path, html: str) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w", encoding="utf-8") as f:
        f.write(html)


def _write_sitemap(
    output_dir: Path,
    base_url: str,
    entries: Iterable[ContentEntry],
    directories: Iterable[DirectoryDescriptor],
) -> None:
    """Generate and write sitemap.xml.

    Args:
        output_dir: Output directory for the sitemap.
        base_url: Absolute site URL without trailing slash.
        entries: All content entries.
        directories: Top-level directories.
    """
    today = date.today().isoformat()
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        _sitemap_url(base_url or "/", "daily", "1.0"),
    ]
    for directory in directories:
        lines.append(_sitemap_url(join_root_url(base_url, directory.url), "weekly", "0.8"))
    for entry in entries:
        parsed = _parse_date(entry.metadata.get("date"))
        lastmod = parsed.date().isoformat() if parsed else today
        lines.append(
            _sitemap_url(join_root_url(base_url, entry.url), "monthly", "0.6", lastmod)
        )
    lines.append("</urlset>")
    (output_dir / "sitemap.xml").write_text("\n".join(lines), encoding="utf-8")


def _sitemap_url(
    loc: str, changefreq: str, priority: str, lastmod: str | None = None
) -> str:
    parts = ["  <url>", f"    <loc>{escape_html(loc)}</loc>"]
    if lastmod:
        parts.append(f"    <lastmod>{lastmod}</lastmod>")
    parts.append(f"    <changefreq>{changefreq}</changefreq>")
    parts.append(f"    <priority>{priority}</priority>")
    parts.append("  </url>")
    return "\n".join(parts)


def _write_robots(output_dir: Path, base_url: str) -> None:
    robots = f"User-agent: *\nAllow: /\n\nSitemap: {base_url}/sitemap.xml\n"
    (output_dir / "robots.txt").write_text(robots, encoding="utf-8")
