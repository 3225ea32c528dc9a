"""Validation helpers for parameter values supplied by a user."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from template_catalog.domain.entities import (
    MISSING_REQUIRED,
    OUT_OF_RANGE,
    TYPE_MISMATCH,
    ParameterValidation,
    TemplateParameter,
    ValidationOutcome,
)

from .resolve_states import resolve_states


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _validate_number(parameter: TemplateParameter, value: Any) -> ValidationOutcome:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return ValidationOutcome.fail(
            TYPE_MISMATCH, f"'{parameter.label}' debe ser un número"
        )
    if isinstance(value, float) and not math.isfinite(value):
        return ValidationOutcome.fail(
            TYPE_MISMATCH, f"'{parameter.label}' debe ser un número finito"
        )
    if parameter.min is not None and value < parameter.min:
        return ValidationOutcome.fail(
            OUT_OF_RANGE,
            f"'{parameter.label}' debe ser mayor o igual a {_format_bound(parameter.min)}",
        )
    if parameter.max is not None and value > parameter.max:
        return ValidationOutcome.fail(
            OUT_OF_RANGE,
            f"'{parameter.label}' debe ser menor o igual a {_format_bound(parameter.max)}",
        )
    return ValidationOutcome.ok()


def _validate_select(parameter: TemplateParameter, value: Any) -> ValidationOutcome:
    if isinstance(value, str) and value in parameter.options:
        return ValidationOutcome.ok()
    return ValidationOutcome.fail(
        TYPE_MISMATCH,
        f"'{parameter.label}' debe ser una de las opciones: {', '.join(parameter.options)}",
    )


def _validate_text(parameter: TemplateParameter, value: Any) -> ValidationOutcome:
    if not isinstance(value, str):
        return ValidationOutcome.fail(
            TYPE_MISMATCH, f"'{parameter.label}' debe ser texto"
        )
    if parameter.validation is not None and value:
        if re.fullmatch(parameter.validation.pattern, value) is None:
            message = parameter.validation.message or (
                f"'{parameter.label}' no tiene el formato esperado"
            )
            return ValidationOutcome.fail(TYPE_MISMATCH, message)
    return ValidationOutcome.ok()


def _validate_boolean(parameter: TemplateParameter, value: Any) -> ValidationOutcome:
    if value is True or value is False:
        return ValidationOutcome.ok()
    return ValidationOutcome.fail(
        TYPE_MISMATCH, f"'{parameter.label}' debe ser verdadero o falso"
    )


def _parse_calendar_date(value: Any) -> date | None:
    if isinstance(value, (date, datetime)):
        return value
    if not isinstance(value, str):
        return None
    candidate = value.strip()
    try:
        return date.fromisoformat(candidate)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def _validate_date(parameter: TemplateParameter, value: Any) -> ValidationOutcome:
    if _parse_calendar_date(value) is None:
        return ValidationOutcome.fail(
            TYPE_MISMATCH, f"'{parameter.label}' debe ser una fecha válida (AAAA-MM-DD)"
        )
    return ValidationOutcome.ok()


_TYPE_VALIDATORS = {
    "number": _validate_number,
    "select": _validate_select,
    "text": _validate_text,
    "boolean": _validate_boolean,
    "date": _validate_date,
}


def validate_value(
    parameter: TemplateParameter,
    value: Any,
    *,
    required: bool | None = None,
) -> ValidationOutcome:
    """Validate ``value`` against the declared type and constraints of ``parameter``.

    ``required`` overrides the schema flag, which is how resolved dependency
    states are applied. Missing values are checked before any type-specific
    rule. The function never raises for a bad value; failures are returned.
    """

    is_required = parameter.required if required is None else required
    if _is_empty(value):
        if is_required:
            return ValidationOutcome.fail(
                MISSING_REQUIRED, f"'{parameter.label}' es requerido"
            )
        return ValidationOutcome.ok()

    validator = _TYPE_VALIDATORS.get(parameter.type)
    if validator is None:
        return ValidationOutcome.fail(
            TYPE_MISMATCH, f"Tipo de parámetro '{parameter.type}' no soportado"
        )
    if (
        parameter.type == "text"
        and is_required
        and isinstance(value, str)
        and not value.strip()
    ):
        return ValidationOutcome.fail(
            MISSING_REQUIRED, f"'{parameter.label}' es requerido"
        )
    return validator(parameter, value)


def validate_parameter_values(
    parameters: Sequence[TemplateParameter],
    values: Mapping[str, Any],
) -> ParameterValidation:
    """Validate a full input map, honouring the resolved dependency states.

    Hidden and disabled parameters are skipped. A value supplied for a hidden
    parameter yields a warning because it is ignored when calculating.
    """

    states = resolve_states(parameters, values)
    errors: dict[str, ValidationOutcome] = {}
    warnings: dict[str, str] = {}

    for parameter in parameters:
        state = states[parameter.id]
        value = values.get(parameter.name)
        if not state.visible:
            if not _is_empty(value):
                warnings[parameter.name] = (
                    f"'{parameter.label}' está oculto y su valor será ignorado"
                )
            continue
        if not state.enabled:
            continue
        outcome = validate_value(parameter, value, required=state.required)
        if not outcome.is_valid:
            errors[parameter.name] = outcome

    return ParameterValidation(errors=errors, warnings=warnings, states=states)


__all__ = ["validate_parameter_values", "validate_value"]
