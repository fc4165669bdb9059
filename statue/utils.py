"""Utility functions for Statue.

This module contains small string and path helpers used throughout the
Statue codebase.

Key functions:
    format_title: Convert slugs and directory names to human-readable titles.
    truncate_content: Shorten text for listings.
    is_markdown: Check if a path is a Markdown source file.
    ensure_clean_dir: Ensure a directory exists and is empty.
"""

from __future__ import annotations

import shutil
from pathlib import Path, PurePath


def format_title(slug: str) -> str:
    """Convert a slug to a human-readable title.

    Splits on hyphens and upper-cases the first character of every word.
    The rest of each word is kept as written, so acronyms survive.

    Args:
        slug: Filename stem or directory name.

    Returns:
        Human-readable title string.

    Examples:
        >>> format_title("my-first-post")
        'My First Post'

        >>> format_title("API-guide")
        'API Guide'
    """
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def truncate_content(content: str, max_length: int = 200) -> str:
    """Shorten text to ``max_length`` characters, appending an ellipsis.

    Args:
        content: Text to shorten.
        max_length: Maximum number of characters kept.

    Returns:
        The original text when short enough, otherwise the truncated text.
    """
    if len(content) <= max_length:
        return content
    return content[:max_length] + "..."


def is_markdown(path: PurePath) -> bool:
    """Check if a path is a Markdown file.

    The match is case-sensitive: ``notes.MD`` is not content.

    Args:
        path: Path to check.

    Returns:
        True if the file name ends with ``.md``.
    """
    return path.name.endswith(".md")


def ensure_clean_dir(path: Path) -> None:
    """Ensure a directory exists and is empty.

    If the directory exists, removes all contents. Creates the
    directory if it doesn't exist.

    Args:
        path: Directory path to clean or create.
    """
    if path.exists():
        shutil.rmtree(str(path))
    path.mkdir(parents=True, exist_ok=True)
