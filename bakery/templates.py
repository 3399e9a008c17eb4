"""Placeholder substitution for step names and instructions.

Two placeholder forms are understood:

- `{time}` is replaced by the merged parameter of that name. Unknown names are
  left exactly as written.
- `{group:dry}` is replaced by the ingredients of the group called `dry`,
  e.g. `2 cups Flour, 10 teaspoons Sugar`. Unknown or empty groups become "".
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from bakery.models import IngredientGroup


PLACEHOLDER = re.compile(r"\{(group:)?([^{}]+)\}")

GROUP_SEPARATOR = ", "


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def merge_params(
    default_params: Mapping[str, Any] | None,
    step_params: Mapping[str, Any] | None,
) -> dict[str, Any]:
    return {**(default_params or {}), **(step_params or {})}


def missing_params(required: Iterable[str], params: Mapping[str, Any]) -> list[str]:
    return [name for name in required if name not in params]


def format_group(group: "IngredientGroup | None") -> str:
    if group is None:
        return ""
    return GROUP_SEPARATOR.join(entry.display() for entry in group.ingredients)


def substitute(
    text: str,
    params: Mapping[str, Any],
    groups: Sequence["IngredientGroup"] = (),
) -> str:
    by_name: dict[str, IngredientGroup] = {}
    for group in groups:
        by_name.setdefault(group.name, group)

    def replace(match: re.Match[str]) -> str:
        is_group, key = match.group(1), match.group(2)
        if is_group:
            return format_group(by_name.get(key))
        if key in params:
            return format_value(params[key])
        return match.group(0)

    return PLACEHOLDER.sub(replace, text)


def resolve_name(name_template: str, params: Mapping[str, Any]) -> str:
    return substitute(name_template, params)


def resolve_instructions(
    instruction_templates: Iterable[str],
    params: Mapping[str, Any],
    groups: Sequence["IngredientGroup"] = (),
) -> list[str]:
    """One formatted string per template, in the order given."""
    return [substitute(text, params, groups) for text in instruction_templates]
