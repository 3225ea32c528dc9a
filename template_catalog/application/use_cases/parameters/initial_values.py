"""Use case for building the starting input values of a template form."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from template_catalog.domain.entities import TemplateParameter
from template_catalog.utils import now_in_app_timezone


def _fallback_value(parameter_type: str) -> Any:
    if parameter_type == "number":
        return 0
    if parameter_type == "boolean":
        return False
    if parameter_type == "date":
        return now_in_app_timezone().date().isoformat()
    return ""


def build_initial_values(parameters: Sequence[TemplateParameter]) -> dict[str, Any]:
    """Return each parameter's default value keyed by parameter name."""

    values: dict[str, Any] = {}
    for parameter in parameters:
        if parameter.default_value is not None:
            values[parameter.name] = parameter.default_value
        else:
            values[parameter.name] = _fallback_value(parameter.type)
    return values


__all__ = ["build_initial_values"]
