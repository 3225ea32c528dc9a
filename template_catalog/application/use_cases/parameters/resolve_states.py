"""Use case for resolving the effective state of a template's parameters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from template_catalog.domain.entities import ParameterState, TemplateParameter

from .conditions import evaluate_condition

_ACTION_FIELDS: dict[str, tuple[str, bool]] = {
    "show": ("visible", True),
    "hide": ("visible", False),
    "require": ("required", True),
    "disable": ("enabled", False),
}


def resolve_states(
    parameters: Sequence[TemplateParameter],
    values: Mapping[str, Any],
) -> dict[str, ParameterState]:
    """Return the visible/required/enabled state of every parameter, by id.

    Rules are applied in declaration order: by target parameter first, then
    by the rule's position in the target's ``dependencies``. A later matching
    rule overwrites the field an earlier one set. Conditions only read the
    input ``values``, never another parameter's resolved state, so a single
    pass is enough. A hidden parameter is never required.

    The parameter list must already have passed ``ensure_valid_parameters``.
    """

    states: dict[str, ParameterState] = {}
    for parameter in parameters:
        current = {
            "visible": True,
            "required": parameter.required,
            "enabled": True,
        }
        for dependency in parameter.dependencies:
            if not evaluate_condition(
                dependency.condition, values.get(dependency.depends_on)
            ):
                continue
            field_name, field_value = _ACTION_FIELDS[dependency.action]
            current[field_name] = field_value

        if not current["visible"]:
            current["required"] = False
        states[parameter.id] = ParameterState(**current)
    return states


__all__ = ["resolve_states"]
