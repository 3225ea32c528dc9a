"""Load-time validation of a template's parameter definitions."""

from __future__ import annotations

import re
from collections.abc import Sequence

from template_catalog.domain.entities import (
    CONDITION_OPERATORS,
    DEPENDENCY_ACTIONS,
    PARAMETER_TYPES,
    TemplateParameter,
)
from template_catalog.domain.errors import InvalidSchemaError

from .validators import validate_value

_identifier_regex = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_VISITING = 1
_DONE = 2


def _ensure_parameter_definition(
    parameter: TemplateParameter, *, template_id: str | None
) -> None:
    if not _identifier_regex.match(parameter.name):
        raise InvalidSchemaError(
            f"El nombre de parámetro '{parameter.name}' no es un identificador válido",
            template_id=template_id,
        )
    if parameter.type not in PARAMETER_TYPES:
        raise InvalidSchemaError(
            f"Tipo de parámetro '{parameter.type}' no soportado en '{parameter.name}'",
            template_id=template_id,
        )
    if parameter.type == "select" and not parameter.options:
        raise InvalidSchemaError(
            f"El parámetro '{parameter.name}' requiere opciones de selección",
            template_id=template_id,
        )
    if (
        parameter.min is not None
        and parameter.max is not None
        and parameter.min > parameter.max
    ):
        raise InvalidSchemaError(
            f"El mínimo del parámetro '{parameter.name}' supera su máximo",
            template_id=template_id,
        )
    if parameter.validation is not None:
        try:
            re.compile(parameter.validation.pattern)
        except re.error as exc:
            raise InvalidSchemaError(
                f"El patrón del parámetro '{parameter.name}' no es válido: {exc}",
                template_id=template_id,
            ) from exc
    if parameter.default_value is not None:
        outcome = validate_value(parameter, parameter.default_value, required=False)
        if not outcome.is_valid:
            raise InvalidSchemaError(
                f"El valor por defecto del parámetro '{parameter.name}' no es válido: "
                f"{outcome.message}",
                template_id=template_id,
            )

    for dependency in parameter.dependencies:
        if dependency.action not in DEPENDENCY_ACTIONS:
            raise InvalidSchemaError(
                f"Acción '{dependency.action}' no soportada en '{parameter.name}'",
                template_id=template_id,
            )
        if dependency.condition.operator not in CONDITION_OPERATORS:
            raise InvalidSchemaError(
                f"Operador '{dependency.condition.operator}' no soportado en "
                f"'{parameter.name}'",
                template_id=template_id,
            )
        if dependency.depends_on == parameter.name:
            raise InvalidSchemaError(
                f"El parámetro '{parameter.name}' no puede depender de sí mismo",
                template_id=template_id,
            )


def _ensure_unique(
    parameters: Sequence[TemplateParameter], *, template_id: str | None
) -> None:
    seen_ids: set[str] = set()
    seen_names: set[str] = set()
    for parameter in parameters:
        if not parameter.id:
            raise InvalidSchemaError(
                f"El parámetro '{parameter.name}' no tiene identificador",
                template_id=template_id,
            )
        if parameter.id in seen_ids:
            raise InvalidSchemaError(
                f"El identificador de parámetro '{parameter.id}' está duplicado",
                template_id=template_id,
            )
        if parameter.name in seen_names:
            raise InvalidSchemaError(
                f"El nombre de parámetro '{parameter.name}' está duplicado",
                template_id=template_id,
            )
        seen_ids.add(parameter.id)
        seen_names.add(parameter.name)


def find_dependency_cycle(
    parameters: Sequence[TemplateParameter],
) -> list[str] | None:
    """Return the parameter names forming a dependency cycle, if any.

    Edges point from a parameter to every parameter named in its
    ``dependsOn`` entries. Traversal follows declaration order so the reported
    cycle is deterministic. Unknown names are ignored here.
    """

    graph: dict[str, list[str]] = {
        parameter.name: list(dict.fromkeys(parameter.dependency_names))
        for parameter in parameters
    }
    marks: dict[str, int] = {}
    path: list[str] = []

    def _visit(name: str) -> list[str] | None:
        marks[name] = _VISITING
        path.append(name)
        for neighbour in graph.get(name, ()):
            if neighbour not in graph:
                continue
            mark = marks.get(neighbour)
            if mark == _VISITING:
                return path[path.index(neighbour):] + [neighbour]
            if mark is None:
                cycle = _visit(neighbour)
                if cycle is not None:
                    return cycle
        path.pop()
        marks[name] = _DONE
        return None

    for parameter in parameters:
        if parameter.name not in marks:
            cycle = _visit(parameter.name)
            if cycle is not None:
                return cycle
    return None


def ensure_valid_parameters(
    parameters: Sequence[TemplateParameter], *, template_id: str | None = None
) -> None:
    """Validate a template's parameter list, raising ``InvalidSchemaError``.

    Checks every definition, uniqueness of ids and names, that each
    ``dependsOn`` references a parameter of the same template, that declared
    defaults are valid values for their parameter and that the dependency
    graph is acyclic.
    """

    _ensure_unique(parameters, template_id=template_id)
    for parameter in parameters:
        _ensure_parameter_definition(parameter, template_id=template_id)

    known_names = {parameter.name for parameter in parameters}
    for parameter in parameters:
        for name in parameter.dependency_names:
            if name not in known_names:
                raise InvalidSchemaError(
                    f"El parámetro '{parameter.name}' depende de '{name}', "
                    "que no existe en la plantilla",
                    template_id=template_id,
                )

    cycle = find_dependency_cycle(parameters)
    if cycle is not None:
        raise InvalidSchemaError(
            "Dependencia cíclica entre parámetros: " + " -> ".join(cycle),
            template_id=template_id,
        )


__all__ = ["ensure_valid_parameters", "find_dependency_cycle"]
