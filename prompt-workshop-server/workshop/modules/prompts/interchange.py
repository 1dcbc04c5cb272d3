"""YAML interchange format for prompt templates.

Export resolves category and tag ids to their display names; import resolves
names back to ids. Structural problems with a document raise
:class:`MalformedInterchangeError`, while names or ids that do not resolve are
dropped quietly so that files stay importable between environments whose
catalogs differ.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

import yaml

from .exceptions import MalformedInterchangeError
from .models import VARIABLE_TYPES, PromptTemplateCreateInput, PromptVariable, dedupe_ids
from .substitution import render_value

logger = logging.getLogger(__name__)


class Lookup(Protocol):
    def name_for(self, entity_id: Optional[str]) -> Optional[str]:
        ...

    def find_by_name(self, name: Optional[str]) -> Optional[str]:
        ...


class TemplateLike(Protocol):
    name: str
    description: str
    content: str
    variables: Sequence[PromptVariable]
    category_id: Optional[str]
    tag_ids: Sequence[str]


class _InterchangeDumper(yaml.SafeDumper):
    """Block style throughout, literal blocks for multi-line strings."""

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    if "\n" in value:
        return dumper.represent_scalar("tag:yaml.org,2002:str", value, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", value)


_InterchangeDumper.add_representer(str, _represent_str)


def build_interchange_document(template: TemplateLike, categories: Lookup, tags: Lookup) -> dict[str, Any]:
    document: dict[str, Any] = {
        "name": template.name,
        "description": template.description or "",
        "content": template.content,
        "variables": [variable.to_dict() for variable in template.variables],
    }
    category_name = categories.name_for(template.category_id)
    if category_name is not None:
        document["category"] = category_name
    tag_names = [tags.name_for(tag_id) for tag_id in dedupe_ids(template.tag_ids)]
    document["tags"] = [name for name in tag_names if name is not None]
    return document


def export_to_interchange(template: TemplateLike, categories: Lookup, tags: Lookup) -> str:
    document = build_interchange_document(template, categories, tags)
    return yaml.dump(
        document,
        Dumper=_InterchangeDumper,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        indent=2,
    )


def import_from_interchange(text: str, categories: Lookup, tags: Lookup) -> PromptTemplateCreateInput:
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.warning("Rejected interchange document: %s", exc)
        raise MalformedInterchangeError("Invalid YAML format or content") from exc

    if not isinstance(document, dict):
        raise MalformedInterchangeError("Interchange document must be a mapping")

    name = _required_text(document, "name")
    content = _required_text(document, "content")

    description = document.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise MalformedInterchangeError("'description' must be a string")

    variables = _parse_variables(document.get("variables"))

    category_id = None
    category_name = document.get("category")
    if category_name is not None:
        if not isinstance(category_name, str):
            raise MalformedInterchangeError("'category' must be a string")
        category_id = categories.find_by_name(category_name)
        if category_id is None:
            logger.info("Category '%s' not found; importing without a category", category_name)

    tag_names = document.get("tags")
    if tag_names is None:
        tag_names = []
    if not isinstance(tag_names, list) or not all(isinstance(item, str) for item in tag_names):
        raise MalformedInterchangeError("'tags' must be a list of names")
    tag_ids = []
    for tag_name in tag_names:
        tag_id = tags.find_by_name(tag_name)
        if tag_id is None:
            logger.info("Tag '%s' not found; dropping it from the import", tag_name)
            continue
        tag_ids.append(tag_id)

    return PromptTemplateCreateInput(
        name=name.strip(),
        description=description,
        content=content,
        category_id=category_id,
        tag_ids=dedupe_ids(tag_ids),
        variables=variables,
    )


def _required_text(document: dict[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None:
        raise MalformedInterchangeError(f"'{key}' is required")
    if not isinstance(value, str) or not value.strip():
        raise MalformedInterchangeError(f"'{key}' must be a non-empty string")
    return value


def _parse_variables(raw: Any) -> list[PromptVariable]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedInterchangeError("'variables' must be a list")

    variables: list[PromptVariable] = []
    seen: set[str] = set()
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise MalformedInterchangeError(f"Variable #{index + 1} must be a mapping")
        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            raise MalformedInterchangeError(f"Variable #{index + 1} has no name")
        name = name.strip()
        if name in seen:
            raise MalformedInterchangeError(f"Variable '{name}' is declared more than once")
        seen.add(name)

        var_type = item.get("type") or "string"
        if var_type not in VARIABLE_TYPES:
            raise MalformedInterchangeError(f"Variable '{name}' has unsupported type '{var_type}'")
        required = item.get("required", False)
        if not isinstance(required, bool):
            raise MalformedInterchangeError(f"Variable '{name}' has a non-boolean 'required'")
        description = item.get("description") or ""
        if not isinstance(description, str):
            raise MalformedInterchangeError(f"Variable '{name}' has a non-string description")
        default_value = item.get("defaultValue")
        if isinstance(default_value, (dict, list)):
            raise MalformedInterchangeError(f"Variable '{name}' has a non-scalar default value")

        variables.append(
            PromptVariable(
                name=name,
                description=description,
                type=var_type,
                required=required,
                default_value=None if default_value is None else render_value(default_value),
            )
        )
    return variables
