"""Sidebar navigation trees.

Each top-level content directory gets a sidebar: pages placed directly in
the directory come first as plain links, then one group per first-level
subdirectory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from .content import ContentEntry
from .repository import ContentRepository, in_directory
from .utils import format_title

DEFAULT_ORDER = 999

_ROOT_GROUP = object()


@dataclass
class SidebarItem:
    """Link to a single page."""

    title: str
    url: str
    order: float = DEFAULT_ORDER


@dataclass
class SidebarGroup:
    """Titled group of sidebar nodes."""

    title: str
    children: list[SidebarNode] = field(default_factory=list)
    url: str | None = None


SidebarNode = Union[SidebarItem, SidebarGroup]


def entry_order(entry: ContentEntry) -> float:
    """Return the numeric ``order`` front-matter value of an entry.

    Anything that is not a number (booleans included) falls back to
    :data:`DEFAULT_ORDER`.
    """
    value: Any = entry.metadata.get("order")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_ORDER
    return value


class SidebarBuilder:
    """Builds sidebar trees from the content repository."""

    def __init__(self, repository: ContentRepository):
        self.repository = repository

    def build(self, directory: str) -> list[SidebarNode]:
        """Build the sidebar of one directory.

        Args:
            directory: Content-root-relative directory.

        Returns:
            Root-level items sorted by ``order`` followed by one group per
            subdirectory, groups in first-encountered order. Sorting is
            stable, so equal orders keep the scan order.
        """
        groups: dict[Any, list[SidebarItem]] = {}
        prefix = directory + "/"
        for entry in self.repository.get_all():
            if not in_directory(entry, directory):
                continue
            if entry.directory == directory:
                key: Any = _ROOT_GROUP
            else:
                key = entry.directory[len(prefix) :].split("/")[0]
            groups.setdefault(key, []).append(
                SidebarItem(title=entry.title, url=entry.url, order=entry_order(entry))
            )

        result: list[SidebarNode] = []
        result.extend(_sorted(groups.pop(_ROOT_GROUP, [])))
        for key, items in groups.items():
            result.append(SidebarGroup(title=format_title(key), children=_sorted(items)))
        return result

    def build_full(self) -> list[SidebarGroup]:
        """Build one sidebar group per top-level directory with content."""
        result: list[SidebarGroup] = []
        for descriptor in self.repository.get_directories():
            children = self.build(descriptor.name)
            if children:
                result.append(
                    SidebarGroup(
                        title=descriptor.title, children=children, url=descriptor.url
                    )
                )
        return result


def _sorted(items: list[SidebarItem]) -> list[SidebarNode]:
    return sorted(items, key=lambda item: item.order)
