"""Query layer over scanned content.

All queries derive their results from ``get_all()``; none of them walks
the file system on its own.
"""

from __future__ import annotations

import logging

from .cache import ContentCache
from .content import ROOT_DIRECTORY, ContentEntry, ContentScanner, DirectoryDescriptor
from .utils import format_title

logger = logging.getLogger(__name__)


def _strip_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def in_directory(entry: ContentEntry, directory: str) -> bool:
    """Check if an entry sits in ``directory`` or one of its subdirectories.

    The match respects directory boundaries: ``blog2`` is not inside ``blog``.
    """
    return entry.directory == directory or entry.directory.startswith(directory + "/")


class ContentRepository:
    """Lookups by URL and directory over the content set.

    Attributes:
        scanner: Scanner producing the entries.
        cache: Cache owning the scan result.
    """

    def __init__(self, scanner: ContentScanner, cache: ContentCache | None = None):
        self.scanner = scanner
        self.cache = cache or ContentCache()

    def get_all(self) -> list[ContentEntry]:
        return self.cache.get_or_load(self.scanner.scan)

    def clear_cache(self) -> None:
        self.cache.invalidate()

    def get_by_url(self, url: str) -> ContentEntry | None:
        """Find the entry served at ``url``.

        One trailing slash is ignored on both sides of the comparison.

        Args:
            url: Site-absolute URL.

        Returns:
            The first matching entry, or None.
        """
        wanted = _strip_slash(url)
        for entry in self.get_all():
            if _strip_slash(entry.url) == wanted:
                logger.debug("Lookup %s matched %s", url, entry.path)
                return entry
        logger.debug("Lookup %s found no content", url)
        return None

    def get_by_directory(self, directory: str) -> list[ContentEntry]:
        """Return entries in ``directory`` and its subdirectories.

        Args:
            directory: Content-root-relative directory, or ``"root"`` for
                entries placed directly in the content root.
        """
        if directory == ROOT_DIRECTORY:
            return [entry for entry in self.get_all() if entry.is_root]
        return [entry for entry in self.get_all() if in_directory(entry, directory)]

    def get_subdirectories(self, directory: str) -> list[DirectoryDescriptor]:
        """Describe the first-level subdirectories below ``directory``.

        Only subdirectories that contain content (at any depth) are
        reported, in the order they are first met during the walk.
        """
        names: dict[str, None] = {}
        prefix = directory + "/"
        for entry in self.get_all():
            if entry.is_root or not entry.directory.startswith(prefix):
                continue
            names.setdefault(entry.directory[len(prefix) :].split("/")[0], None)
        return [
            DirectoryDescriptor(
                name=name,
                path=f"{directory}/{name}",
                title=format_title(name),
                url=f"/{directory}/{name}",
            )
            for name in names
        ]

    def get_directories(self) -> list[DirectoryDescriptor]:
        """Describe the top-level directories of the content root."""
        return self.scanner.scan_directories()
