"""Materialise final prompt text from a template and caller-supplied values."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from .placeholders import PLACEHOLDER_PATTERN, placeholder_name

logger = logging.getLogger(__name__)


def render_value(value: Any) -> str:
    """Canonical text for a substituted value."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, str)):
        return str(value)
    return json.dumps(value, ensure_ascii=False)


def substitute(content: str, values: Mapping[str, Any]) -> str:
    """Replace each placeholder whose name is in ``values``.

    Placeholders without a value are left exactly as written so that missing
    data shows up in the output.
    """
    if not content:
        return content

    def _replace(match: re.Match[str]) -> str:
        name = placeholder_name(match)
        if name and name in values:
            return render_value(values[name])
        if name:
            logger.debug("No value supplied for placeholder %s; leaving it in place", name)
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, content)
