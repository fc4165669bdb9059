"""Template-variable substitution for markdown sources.

Authors can reference site configuration inside content files with
``{{site.name}}``-style placeholders. The placeholders are expanded in the
markdown body and in string front-matter values before rendering.

Key classes:
- TemplateVariables: Flattened variable map plus ``substitute``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

logger = logging.getLogger(__name__)

PLACEHOLDER_RE = re.compile(r"\{\{([^}]+)\}\}")

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def flatten_config(config: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Flatten nested mappings into dot-separated keys.

    Args:
        config: Nested configuration mapping.
        prefix: Key prefix for the current nesting level.

    Returns:
        Flat dictionary, e.g. ``{"contact.address.city": "Springfield"}``.
        Lists and scalars are kept as leaf values.
    """
    flat: dict[str, Any] = {}
    for key, value in config.items():
        name = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(flatten_config(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TemplateVariables:
    """Variable map used to expand ``{{name}}`` placeholders.

    Attributes:
        config: Site configuration the variables are derived from.
        clock: Callable returning today's date; computed ``date.*``
            variables are evaluated from it on every substitution.
    """

    def __init__(
        self,
        config: Mapping[str, Any],
        clock: Callable[[], date] | None = None,
    ):
        self.config = config
        self.clock = clock or date.today
        self._flat = flatten_config(config)

    def mapping(self) -> dict[str, Any]:
        """Return the flattened variables including computed keys."""
        variables = dict(self._flat)
        address = self.config.get("contact", {}).get("address", {}) or {}
        variables["contact.address.full"] = (
            f"{address.get('street', '')}, {address.get('city', '')}, "
            f"{address.get('state', '')} {address.get('zipCode', '')}"
        )
        today = self.clock()
        variables["date.now"] = f"{today.month}/{today.day}/{today.year}"
        variables["date.year"] = str(today.year)
        variables["date.month"] = MONTH_NAMES[today.month - 1]
        variables["date.day"] = str(today.day)
        return variables

    def substitute(self, text: str) -> str:
        """Replace known placeholders in ``text``.

        Unknown placeholders are left verbatim and logged; substituted values
        are never expanded again.
        """
        variables = self.mapping()

        def repl(match: re.Match) -> str:
            name = match.group(1).strip()
            if name in variables:
                return _stringify(variables[name])
            logger.warning("Template variable not found: %s", name)
            return match.group(0)

        return PLACEHOLDER_RE.sub(repl, text)

    def substitute_metadata(self, metadata: Mapping[str, Any]) -> dict[str, Any]:
        """Substitute string values of a front-matter mapping.

        Non-string values pass through unchanged.
        """
        return {
            key: self.substitute(value) if isinstance(value, str) else value
            for key, value in metadata.items()
        }
