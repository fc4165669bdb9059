"""Link rewriting for rendered markdown.

Markdown sources link to each other by file name (``./setup.md``,
``../guides/intro.md``, ``other-page``). The site serves every page at a
directory-aware absolute route, so those hrefs are rewritten relative to
the directory of the file being rendered.
"""

from __future__ import annotations

import posixpath
import re

URI_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")


def _join(directory: str, href: str) -> str:
    joined = posixpath.join("/", directory, href) if directory else "/" + href
    normalized = posixpath.normpath(joined)
    # normpath keeps a leading "//" as an implementation-defined root.
    if normalized.startswith("//"):
        normalized = "/" + normalized.lstrip("/")
    return normalized


def transform_href(href: str, directory: str) -> str:
    """Resolve a markdown link target to a site-absolute URL.

    Args:
        href: Link target as written in the markdown source.
        directory: Content-root-relative directory of the current file
            (``""`` for files at the content root).

    Returns:
        The rewritten href. Empty hrefs, fragment-only links and links with
        a URI scheme (``https:``, ``mailto:``, ``tel:``...) are returned
        unchanged.

    Examples:
        >>> transform_href("./other.md", "blog")
        '/blog/other'
        >>> transform_href("../docs/setup.md", "blog")
        '/docs/setup'
        >>> transform_href("other-file", "blog")
        '/blog/other-file'
    """
    if not href or href.startswith("#") or URI_SCHEME_RE.match(href):
        return href

    if href.endswith(".md"):
        href = href[: -len(".md")]

    if href.startswith(("./", "../")):
        resolved = _join(directory, href).rstrip("/")
        return resolved or "/"
    if not href.startswith("/"):
        resolved = _join(directory, href)
        if href.endswith("/") and not resolved.endswith("/"):
            resolved += "/"
        return resolved
    return href
