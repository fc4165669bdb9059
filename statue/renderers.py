"""Markdown rendering for Statue.

This module adapts mistune to the content pipeline: links are rewritten
to site-absolute URLs relative to the directory of the file being
rendered, and the leading ``<h1>`` is removed from the output because
templates render the page title themselves.

Key classes:
- MarkdownRenderer: Renders Markdown to HTML for a given content directory.
"""

from __future__ import annotations

from collections.abc import Sequence

import mistune

from .html_utils import strip_first_heading
from .links import transform_href

DEFAULT_PLUGINS = ("strikethrough", "footnotes", "table", "url")


class _LinkRewritingRenderer(mistune.HTMLRenderer):
    """HTML renderer that resolves link targets against a content directory.

    Attributes:
        directory: Content-root-relative directory of the current file.
    """

    def __init__(self, directory: str):
        super().__init__(escape=False)
        self.directory = directory

    def link(self, text: str, url: str, title: str | None = None) -> str:
        """Render a link with its href rewritten.

        Args:
            text: Rendered link text.
            url: Link target from the markdown source.
            title: Title attribute.

        Returns:
            HTML anchor tag string.
        """
        return super().link(text, transform_href(url, self.directory), title)


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    A fresh mistune instance is created per call because the link renderer
    is bound to the directory of the file being rendered.
    """

    def __init__(self, plugins: Sequence[str] = DEFAULT_PLUGINS):
        self.plugins = list(plugins)

    @property
    def source_type(self) -> str:
        """Return the source type identifier."""
        return "markdown"

    def render(self, content: str, directory: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.
            directory: Directory containing the page.

        Returns:
            Rendered HTML without its first ``<h1>``.
        """
        markdown = mistune.create_markdown(
            renderer=_LinkRewritingRenderer(directory), plugins=self.plugins
        )
        return strip_first_heading(markdown(content))
