"""Front matter and metadata extraction for Statue.

Content files may start with a YAML block fenced by ``---`` lines. This
module splits that block from the markdown body and assembles the
metadata mapping every content entry carries.

Key functions:
- extract_frontmatter: Split a source file into front matter and body.
- build_metadata: Apply substitution and defaults to front matter.
"""

from __future__ import annotations

import re
from datetime import date
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

import yaml

from .utils import format_title

if TYPE_CHECKING:
    from .variables import TemplateVariables

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE
)


class ContentError(Exception):
    """Error while reading a content file.

    Attributes:
        source_path: Path to the source file that caused the error.
        message: Human-readable error message.
    """

    def __init__(self, source_path: PurePath | str | None, message: str):
        self.source_path = source_path
        self.message = message
        prefix = f"{source_path}: " if source_path is not None else ""
        super().__init__(f"{prefix}{message}")


class FrontmatterError(ContentError):
    """Front matter block that is not a valid YAML mapping."""


def extract_frontmatter(
    text: str, source: PurePath | str | None = None
) -> tuple[dict[str, Any], str]:
    """Extract YAML frontmatter from content.

    Args:
        text: Raw file content.
        source: Path reported in errors.

    Returns:
        Tuple of (frontmatter dict, remaining content). Files without a
        front matter block return an empty dict and the whole text.

    Raises:
        FrontmatterError: If the block is not valid YAML or not a mapping.
    """
    # Editors on Windows may save a byte order mark before the fence.
    text = text.removeprefix("\ufeff")
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontmatterError(source, f"Invalid front matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontmatterError(source, "Front matter must be a mapping")
    return data, text[match.end() :]


def _normalize_date(value: Any) -> Any:
    # YAML turns unquoted dates into date/datetime objects.
    if isinstance(value, date):
        return value.isoformat()
    return value


def build_metadata(
    frontmatter: dict[str, Any], slug: str, variables: TemplateVariables
) -> dict[str, Any]:
    """Build the metadata mapping of a content entry.

    String values are expanded with ``variables``. ``title``,
    ``description``, ``date`` and ``author`` are always present; other
    keys are passed through.

    Args:
        frontmatter: Parsed front matter.
        slug: Slug of the entry, used for the fallback title.
        variables: Template variables used for substitution.

    Returns:
        Metadata dictionary.
    """
    metadata = variables.substitute_metadata(frontmatter)
    title = metadata.get("title")
    metadata["title"] = str(title) if title not in (None, "") else format_title(slug)
    description = metadata.get("description")
    metadata["description"] = str(description) if description not in (None, "") else ""
    metadata["date"] = _normalize_date(metadata.get("date")) or None
    metadata["author"] = metadata.get("author") or None
    return metadata
