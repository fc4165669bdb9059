"""Process-wide cache of scanned content.

A scan walks and renders the whole content tree, so outside development
the result is kept after the first read. In development every read
rescans so that edits show up immediately.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from .content import ContentEntry


class ContentCache:
    """Holds the last scan result.

    Two states: cold (nothing cached) and warm. ``get_or_load`` moves
    cold to warm at most once per scan, even with concurrent callers.

    Attributes:
        development: When True nothing is ever cached.
    """

    def __init__(self, development: bool = False):
        self.development = development
        self._entries: list[ContentEntry] | None = None
        self._lock = threading.Lock()

    @property
    def is_warm(self) -> bool:
        return self._entries is not None

    def get(self) -> list[ContentEntry] | None:
        return self._entries

    def populate(self, entries: list[ContentEntry]) -> None:
        if self.development:
            return
        with self._lock:
            self._entries = entries

    def invalidate(self) -> None:
        with self._lock:
            self._entries = None

    def get_or_load(
        self, loader: Callable[[], list[ContentEntry]]
    ) -> list[ContentEntry]:
        """Return cached entries, calling ``loader`` when cold.

        Args:
            loader: Callable performing a full scan.

        Returns:
            The cached list (the same object on every warm read), or a fresh
            scan in development mode.
        """
        if self.development:
            return loader()
        entries = self._entries
        if entries is not None:
            return entries
        with self._lock:
            if self._entries is None:
                self._entries = loader()
            return self._entries
