"""Keeps a template's variable list in step with the placeholders in its content.

Every function here is pure: callers (the editor, the template service) decide
when to run them and what to do with the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Sequence

from .exceptions import PromptValidationError
from .models import PromptVariable
from .placeholders import PLACEHOLDER_PATTERN, extract_placeholders, placeholder_name

_MULTIPLE_SPACES = re.compile(r" {2,}")
_LINE_EDGE_SPACES = re.compile(r"^[ \t]+|[ \t]+$", re.MULTILINE)
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


@dataclass(slots=True)
class ReconcileResult:
    variables: list[PromptVariable]
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)


def auto_variable(name: str) -> PromptVariable:
    return PromptVariable(
        name=name,
        description=f"Auto-detected variable: {name}",
        type="string",
        required=False,
        default_value="",
    )


def reconcile(content: str | None, existing: Sequence[PromptVariable]) -> ReconcileResult:
    """Align ``existing`` with the placeholders present in ``content``.

    Variables whose placeholder disappeared are dropped, new placeholders get
    an auto-generated optional string variable appended at the end, and the
    variables present on both sides are returned untouched in their original
    order.
    """
    placeholders = extract_placeholders(content)
    present = set(placeholders)
    existing_names = {variable.name for variable in existing}

    removed = list(dict.fromkeys(v.name for v in existing if v.name not in present))
    added = [name for name in placeholders if name not in existing_names]

    variables = [variable for variable in existing if variable.name in present]
    variables.extend(auto_variable(name) for name in added)
    return ReconcileResult(variables=variables, added=added, removed=removed)


def rename_variable(content: str, old_name: str, new_name: str) -> str:
    """Point every ``{{old_name}}`` placeholder at ``new_name``.

    Names are compared as plain text after trimming, so metacharacters in a
    name carry no pattern meaning. Occurrences of the old name outside
    ``{{...}}`` are left alone.
    """
    old_name = old_name.strip()
    new_name = new_name.strip()
    if "{" in new_name or "}" in new_name:
        raise PromptValidationError(f"Variable name '{new_name}' must not contain braces")
    if not content or not old_name or not new_name:
        return content

    def _replace(match: re.Match[str]) -> str:
        if placeholder_name(match) == old_name:
            return "{{" + new_name + "}}"
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, content)


def remove_variable_references(content: str, name: str) -> str:
    """Delete every ``{{name}}`` placeholder and tidy the whitespace left behind.

    The cleanup collapses runs of spaces, trims each line and squeezes three
    or more consecutive newlines down to two. It can touch formatting that
    was unrelated to the removed placeholder.
    """
    name = name.strip()
    if not content or not name:
        return content

    def _drop(match: re.Match[str]) -> str:
        return "" if placeholder_name(match) == name else match.group(0)

    updated = PLACEHOLDER_PATTERN.sub(_drop, content)
    if updated == content:
        return content
    updated = _MULTIPLE_SPACES.sub(" ", updated)
    updated = _LINE_EDGE_SPACES.sub("", updated)
    return _EXCESS_NEWLINES.sub("\n\n", updated)


def rename_in_template(
    content: str, variables: Sequence[PromptVariable], old_name: str, new_name: str
) -> tuple[str, ReconcileResult]:
    """Rename a variable in both the content and the variable list, keeping its metadata."""
    old_name = old_name.strip()
    new_name = new_name.strip()
    updated = rename_variable(content, old_name, new_name)
    taken = new_name != old_name and any(variable.name == new_name for variable in variables)
    renamed: list[PromptVariable] = []
    for variable in variables:
        if variable.name == old_name and new_name:
            if taken:
                continue
            variable = replace(variable, name=new_name)
        renamed.append(variable)
    return updated, reconcile(updated, renamed)


def remove_from_template(
    content: str, variables: Sequence[PromptVariable], name: str
) -> tuple[str, ReconcileResult]:
    updated = remove_variable_references(content, name)
    return updated, reconcile(updated, variables)
