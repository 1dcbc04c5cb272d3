"""Placeholder scanning for ``{{name}}`` markers in template content."""

from __future__ import annotations

import re

# ``{{`` + one or more non-brace characters + ``}}``. Nested or unbalanced
# braces never match.
PLACEHOLDER_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def placeholder_name(match: re.Match[str]) -> str:
    return match.group(1).strip()


def extract_placeholders(content: str | None) -> list[str]:
    """Return distinct placeholder identifiers in first-occurrence order."""
    if not content:
        return []
    names: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(content):
        name = placeholder_name(match)
        if name:
            names.setdefault(name, None)
    return list(names)
