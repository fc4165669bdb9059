"""Protocol definitions for Statue.

These protocols let the scanner run against something other than the
local file system, which keeps the content pipeline a pure function of
its inputs in tests.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Iterator
from pathlib import PurePosixPath
from typing import Protocol, runtime_checkable


@runtime_checkable
class ContentSource(Protocol):
    """Protocol for reading the content tree.

    All paths are relative to the content root and use POSIX separators.
    """

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the content root exists."""
        ...

    @abstractmethod
    def iter_markdown(self) -> Iterator[PurePosixPath]:
        """Yield markdown files, depth-first, pre-order.

        Returns:
            Iterator of content-root-relative paths.
        """
        ...

    @abstractmethod
    def iter_directories(self) -> Iterator[str]:
        """Yield the names of the immediate child directories of the root."""
        ...

    @abstractmethod
    def read_text(self, path: PurePosixPath) -> str:
        """Read a content file.

        Args:
            path: Content-root-relative path.

        Returns:
            File contents decoded as UTF-8.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        ...


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering markdown bodies to HTML."""

    @abstractmethod
    def render(self, content: str, directory: str) -> str:
        """Render content to HTML.

        Args:
            content: Source content to render.
            directory: Directory containing the page (for link resolution).

        Returns:
            Rendered HTML.
        """
        ...
