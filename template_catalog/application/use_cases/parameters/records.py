"""Conversion of JSON-shaped template records into domain entities."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from template_catalog.domain.entities import (
    DIFFICULTY_LEVELS,
    CalculationTemplate,
    ParameterCondition,
    ParameterDependency,
    ParameterPattern,
    TemplateParameter,
)
from template_catalog.domain.errors import InvalidSchemaError
from template_catalog.utils import parse_app_datetime

POPULAR_USAGE_THRESHOLD = 100
TRENDING_USAGE_THRESHOLD = 50
TRENDING_RATING_THRESHOLD = 4.0

_DIFFICULTY_BY_CATEGORY: dict[str, str] = {
    "foundation": "advanced",
    "structural": "advanced",
    "electrical": "intermediate",
    "installation": "intermediate",
    "hydraulic": "intermediate",
}


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_bool(value: Any, *, field: str, template_id: str | None) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    raise InvalidSchemaError(
        f"El campo '{field}' debe ser booleano", template_id=template_id
    )


def _as_number(value: Any, *, field: str, template_id: str | None) -> float | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidSchemaError(
            f"El campo '{field}' debe ser numérico", template_id=template_id
        )
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidSchemaError(
            f"El campo '{field}' debe ser numérico", template_id=template_id
        ) from exc
    if not math.isfinite(number):
        raise InvalidSchemaError(
            f"El campo '{field}' debe ser un número finito", template_id=template_id
        )
    return number


def _string_list(value: Any, *, field: str, template_id: str | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        return [stripped] if stripped else []
    if not _is_sequence(value):
        raise InvalidSchemaError(
            f"El campo '{field}' debe ser una lista de textos", template_id=template_id
        )
    items: list[str] = []
    for entry in value:
        if not isinstance(entry, str):
            raise InvalidSchemaError(
                f"El campo '{field}' debe ser una lista de textos",
                template_id=template_id,
            )
        stripped = entry.strip()
        if stripped:
            items.append(stripped)
    return items


def derive_difficulty(category: str) -> str:
    """Return the difficulty implied by ``category`` when a record omits it."""

    return _DIFFICULTY_BY_CATEGORY.get(category.lower(), "basic")


def _parse_condition(payload: Any, *, template_id: str | None) -> ParameterCondition:
    if not isinstance(payload, Mapping):
        raise InvalidSchemaError(
            "La condición de una dependencia debe ser un objeto",
            template_id=template_id,
        )
    operator = payload.get("operator")
    if not isinstance(operator, str) or not operator.strip():
        raise InvalidSchemaError(
            "La condición de una dependencia requiere un operador",
            template_id=template_id,
        )
    return ParameterCondition(operator=operator.strip(), value=payload.get("value"))


def _parse_dependency(payload: Any, *, template_id: str | None) -> ParameterDependency:
    if not isinstance(payload, Mapping):
        raise InvalidSchemaError(
            "Cada dependencia debe ser un objeto", template_id=template_id
        )
    depends_on = payload.get("dependsOn")
    action = payload.get("action")
    if not isinstance(depends_on, str) or not depends_on.strip():
        raise InvalidSchemaError(
            "La dependencia debe indicar 'dependsOn'", template_id=template_id
        )
    if not isinstance(action, str) or not action.strip():
        raise InvalidSchemaError(
            "La dependencia debe indicar una acción", template_id=template_id
        )
    return ParameterDependency(
        depends_on=depends_on.strip(),
        condition=_parse_condition(payload.get("condition"), template_id=template_id),
        action=action.strip(),
    )


def parse_parameter(
    payload: Any, *, position: int, template_id: str | None = None
) -> TemplateParameter:
    """Build a ``TemplateParameter`` from its JSON representation."""

    if not isinstance(payload, Mapping):
        raise InvalidSchemaError(
            f"El parámetro en la posición {position} debe ser un objeto",
            template_id=template_id,
        )

    raw_name = payload.get("name")
    name = raw_name.strip() if isinstance(raw_name, str) else ""
    raw_id = payload.get("id")
    parameter_id = str(raw_id).strip() if raw_id is not None else name
    raw_type = payload.get("type")
    parameter_type = raw_type.strip().lower() if isinstance(raw_type, str) else ""

    raw_dependencies = payload.get("dependencies") or []
    if not _is_sequence(raw_dependencies):
        raise InvalidSchemaError(
            f"Las dependencias del parámetro '{name}' deben ser una lista",
            template_id=template_id,
        )

    validation = None
    raw_validation = payload.get("validation")
    if isinstance(raw_validation, Mapping) and raw_validation.get("pattern"):
        validation = ParameterPattern(
            pattern=str(raw_validation["pattern"]),
            message=_optional_text(raw_validation.get("message")),
        )

    return TemplateParameter(
        id=parameter_id,
        name=name,
        label=_optional_text(payload.get("label")) or name,
        type=parameter_type,
        required=_as_bool(
            payload.get("required"), field="required", template_id=template_id
        ),
        unit=_optional_text(payload.get("unit")),
        default_value=payload.get("defaultValue"),
        min=_as_number(payload.get("min"), field="min", template_id=template_id),
        max=_as_number(payload.get("max"), field="max", template_id=template_id),
        step=_as_number(payload.get("step"), field="step", template_id=template_id),
        options=tuple(
            _string_list(payload.get("options"), field="options", template_id=template_id)
        ),
        placeholder=_optional_text(payload.get("placeholder")),
        tooltip=_optional_text(payload.get("tooltip")),
        validation=validation,
        dependencies=tuple(
            _parse_dependency(entry, template_id=template_id)
            for entry in raw_dependencies
        ),
    )


def parse_template_record(record: Mapping[str, Any]) -> CalculationTemplate:
    """Build a ``CalculationTemplate`` from a JSON-shaped repository record.

    Legacy backend keys (``type``, ``averageRating``, ``isVerified``,
    ``updatedAt``, ``targetProfession``) are accepted as fallbacks. When the
    ``trending``/``popular`` flags are absent they are derived from usage and
    rating. Raises ``InvalidSchemaError`` for records that break the data model.
    """

    if not isinstance(record, Mapping):
        raise InvalidSchemaError("El registro de plantilla debe ser un objeto")

    raw_id = record.get("id")
    template_id = str(raw_id).strip() if raw_id is not None else ""
    if not template_id:
        raise InvalidSchemaError("La plantilla no tiene identificador")

    name = _optional_text(record.get("name"))
    if name is None:
        raise InvalidSchemaError(
            "El nombre de la plantilla no puede estar vacío", template_id=template_id
        )

    category = _optional_text(_first_present(record, "category", "type"))
    if category is None:
        raise InvalidSchemaError(
            "La categoría de la plantilla es requerida", template_id=template_id
        )

    difficulty = _optional_text(record.get("difficulty"))
    if difficulty is None:
        difficulty = derive_difficulty(category)
    elif difficulty not in DIFFICULTY_LEVELS:
        raise InvalidSchemaError(
            f"Dificultad '{difficulty}' no soportada", template_id=template_id
        )

    rating = _as_number(
        _first_present(record, "rating", "averageRating"),
        field="rating",
        template_id=template_id,
    )
    rating = 0.0 if rating is None else rating
    if not 0 <= rating <= 5:
        raise InvalidSchemaError(
            "La calificación debe estar entre 0 y 5", template_id=template_id
        )

    usage = _as_number(
        record.get("usageCount"), field="usageCount", template_id=template_id
    )
    usage = 0.0 if usage is None else usage
    if usage < 0 or not usage.is_integer():
        raise InvalidSchemaError(
            "El número de usos debe ser un entero no negativo", template_id=template_id
        )
    usage_count = int(usage)

    trending = record.get("trending")
    if trending is None:
        trending = (
            usage_count > TRENDING_USAGE_THRESHOLD
            and rating > TRENDING_RATING_THRESHOLD
        )
    popular = record.get("popular")
    if popular is None:
        popular = usage_count > POPULAR_USAGE_THRESHOLD

    raw_parameters = record.get("parameters") or []
    if not _is_sequence(raw_parameters):
        raise InvalidSchemaError(
            "Los parámetros de la plantilla deben ser una lista",
            template_id=template_id,
        )

    version = _as_number(record.get("version"), field="version", template_id=template_id)

    return CalculationTemplate(
        id=template_id,
        name=name,
        description=_optional_text(record.get("description")) or "",
        category=category,
        subcategory=_optional_text(record.get("subcategory")),
        difficulty=difficulty,
        rating=rating,
        usage_count=usage_count,
        last_updated=parse_app_datetime(
            _first_present(record, "lastUpdated", "updatedAt")
        ),
        trending=_as_bool(trending, field="trending", template_id=template_id),
        popular=_as_bool(popular, field="popular", template_id=template_id),
        verified=_as_bool(
            _first_present(record, "verified", "isVerified"),
            field="verified",
            template_id=template_id,
        ),
        nec_reference=_optional_text(record.get("necReference")),
        formula=_optional_text(record.get("formula")),
        source=_optional_text(record.get("source")),
        version=int(version) if version is not None else 1,
        profession=frozenset(
            _string_list(
                _first_present(record, "profession", "targetProfession"),
                field="profession",
                template_id=template_id,
            )
        ),
        tags=tuple(
            _string_list(record.get("tags"), field="tags", template_id=template_id)
        ),
        parameters=tuple(
            parse_parameter(entry, position=index, template_id=template_id)
            for index, entry in enumerate(raw_parameters)
        ),
    )


__all__ = [
    "POPULAR_USAGE_THRESHOLD",
    "TRENDING_RATING_THRESHOLD",
    "TRENDING_USAGE_THRESHOLD",
    "derive_difficulty",
    "parse_parameter",
    "parse_template_record",
]
