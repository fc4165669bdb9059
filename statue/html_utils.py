"""HTML utility functions for Statue.

This module provides HTML string manipulation helpers used by the content
pipeline and the build driver.

Functions:
    strip_first_heading: Remove the first ``<h1>`` element from HTML.
    escape_html: Escape special HTML characters in a string.
    join_root_url: Join a base URL with a path.
"""

from __future__ import annotations

import re

# Non-greedy up to the first closing tag; only the first match is removed.
_FIRST_H1_RE = re.compile(r"<h1(?:\s[^>]*)?>.*?</h1>", re.IGNORECASE | re.DOTALL)


def strip_first_heading(html: str) -> str:
    """Remove the first ``<h1>`` element and its inner content.

    Templates render the page title separately, so the leading heading of
    the rendered markdown would otherwise appear twice. Later ``<h1>``
    elements are preserved.

    Args:
        html: Rendered HTML.

    Returns:
        HTML without its first level-one heading.

    Examples:
        >>> strip_first_heading('<h1 id="t">Title</h1>\\n<p>Body</p>')
        '\\n<p>Body</p>'
    """
    return _FIRST_H1_RE.sub("", html, count=1)


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for inclusion in HTML and XML.

    Examples:
        >>> escape_html('Tom & Jerry')
        'Tom &amp; Jerry'
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def join_root_url(root_url: str, path: str) -> str:
    """Safely join a root URL and a path, avoiding double slashes.

    Args:
        root_url: Base URL (e.g., https://example.com/blog).
        path: Path beginning with or without a leading slash.

    Returns:
        Combined URL with proper slash handling.

    Examples:
        >>> join_root_url('https://example.com/', '/about')
        'https://example.com/about'
    """
    if not root_url:
        return path
    base = root_url.rstrip("/")
    suffix = path if path.startswith("/") else f"/{path}"
    return f"{base}{suffix}"
