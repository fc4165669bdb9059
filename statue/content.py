"""Content processing for Statue.

This module walks the content tree, parses front matter, renders markdown
and creates ContentEntry objects representing site pages.

Key classes:
- ContentEntry: Dataclass representing one markdown source file.
- DirectoryDescriptor: Dataclass describing a content directory.
- FileContentLoader: ContentSource implementation for the local file system.
- EntryBuilder: Builds a ContentEntry from one source file.
- ContentScanner: Walks a ContentSource and builds every entry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from .extractors import ContentError, build_metadata, extract_frontmatter
from .protocols import ContentRenderer, ContentSource
from .renderers import MarkdownRenderer
from .utils import format_title, is_markdown
from .variables import TemplateVariables

logger = logging.getLogger(__name__)

ROOT_DIRECTORY = "root"


@dataclass
class ContentEntry:
    """Represents one markdown source file.

    Attributes:
        slug: Filename stem, unique within its directory.
        path: Content-root-relative source path.
        url: Site-absolute route of the page.
        directory: Content-root-relative directory, ``""`` at the root.
        main_directory: First segment of ``directory`` or ``"root"``.
        depth: Number of segments in ``directory``.
        content: Rendered HTML without its leading ``<h1>``.
        metadata: Front matter plus guaranteed ``title``, ``description``,
            ``date`` and ``author`` keys.
    """

    slug: str
    path: str
    url: str
    directory: str
    main_directory: str
    depth: int
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        """True if the entry sits directly in the content root."""
        return self.directory == ""

    @property
    def title(self) -> str:
        return self.metadata["title"]


@dataclass(frozen=True)
class DirectoryDescriptor:
    """Describes a content directory for navigation and listings."""

    name: str
    path: str
    title: str
    url: str


class FileContentLoader:
    """Reads the content tree from the local file system.

    Attributes:
        content_dir: Root directory of the markdown sources.
    """

    def __init__(self, content_dir: Path):
        self.content_dir = content_dir

    def exists(self) -> bool:
        return self.content_dir.is_dir()

    def iter_markdown(self) -> Iterator[PurePosixPath]:
        """Yield markdown files depth-first, entries visited in name order."""
        yield from self._walk(self.content_dir, PurePosixPath())

    def _walk(self, folder: Path, rel: PurePosixPath) -> Iterator[PurePosixPath]:
        for path in sorted(folder.iterdir(), key=lambda p: p.name):
            if path.is_dir():
                yield from self._walk(path, rel / path.name)
            elif path.is_file() and is_markdown(path):
                yield rel / path.name

    def iter_directories(self) -> Iterator[str]:
        if not self.exists():
            return
        for path in sorted(self.content_dir.iterdir(), key=lambda p: p.name):
            if path.is_dir():
                yield path.name

    def read_text(self, path: PurePosixPath) -> str:
        return (self.content_dir / path).read_text(encoding="utf-8")


def derive_url(directory: str, slug: str) -> str:
    """Derive the site-absolute URL of an entry.

    Args:
        directory: Content-root-relative directory, ``""`` at the root.
        slug: Filename stem.

    Returns:
        ``/<directory>/<slug>``, or ``/<slug>`` for root files.
    """
    if directory:
        return f"/{directory}/{slug}"
    return f"/{slug}"


class EntryBuilder:
    """Builds ContentEntry objects from source files.

    Attributes:
        source: Content source the files are read from.
        variables: Template variables for placeholder substitution.
        renderer: Markdown renderer.
    """

    def __init__(
        self,
        source: ContentSource,
        variables: TemplateVariables,
        renderer: ContentRenderer | None = None,
    ):
        self.source = source
        self.variables = variables
        self.renderer = renderer or MarkdownRenderer()

    def build(self, rel: PurePosixPath) -> ContentEntry:
        """Build a ContentEntry from a source file.

        Args:
            rel: Content-root-relative path of the markdown file.

        Returns:
            ContentEntry object.

        Raises:
            ContentError: If the file cannot be read.
            FrontmatterError: If the front matter block is malformed.
        """
        try:
            raw = self.source.read_text(rel)
        except (OSError, UnicodeDecodeError) as exc:
            raise ContentError(rel, f"Unable to read file: {exc}") from exc

        frontmatter, body = extract_frontmatter(raw, rel)
        slug = rel.name[: -len(".md")]
        directory = "" if rel.parent == PurePosixPath() else rel.parent.as_posix()

        markdown = self.variables.substitute(body)
        html = self.renderer.render(markdown, directory)
        segments = directory.split("/") if directory else []

        return ContentEntry(
            slug=slug,
            path=rel.as_posix(),
            url=derive_url(directory, slug),
            directory=directory,
            main_directory=segments[0] if segments else ROOT_DIRECTORY,
            depth=len(segments),
            content=html,
            metadata=build_metadata(frontmatter, slug, self.variables),
        )


class ContentScanner:
    """Walks a content source and builds every entry.

    There is no partial success: the first unreadable file or malformed
    front matter block aborts the scan.
    """

    def __init__(
        self,
        source: ContentSource,
        variables: TemplateVariables,
        renderer: ContentRenderer | None = None,
    ):
        self.source = source
        self._builder = EntryBuilder(source, variables, renderer)

    @classmethod
    def from_path(
        cls, content_dir: Path, variables: TemplateVariables
    ) -> ContentScanner:
        return cls(FileContentLoader(content_dir), variables)

    def scan(self) -> list[ContentEntry]:
        """Build entries for all markdown files in walk order.

        Returns:
            List of ContentEntry objects, empty if the content root is missing.
        """
        if not self.source.exists():
            logger.warning("Content folder not found: %s", _describe(self.source))
            return []
        entries = [self._builder.build(rel) for rel in self.source.iter_markdown()]
        logger.debug("Scanned %d content files", len(entries))
        return entries

    def scan_directories(self) -> list[DirectoryDescriptor]:
        """Describe the immediate child directories of the content root."""
        if not self.source.exists():
            logger.warning("Content folder not found: %s", _describe(self.source))
            return []
        return [
            DirectoryDescriptor(
                name=name,
                path=name,
                title=format_title(name),
                url=f"/{name}",
            )
            for name in self.source.iter_directories()
        ]


def _describe(source: ContentSource) -> str:
    return str(getattr(source, "content_dir", source))
