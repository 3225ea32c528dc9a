"""Domain entities representing calculation templates and their parameters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

PARAMETER_TYPES: tuple[str, ...] = ("number", "select", "text", "boolean", "date")
DEPENDENCY_ACTIONS: tuple[str, ...] = ("show", "hide", "require", "disable")
CONDITION_OPERATORS: tuple[str, ...] = (
    "eq",
    "neq",
    "gt",
    "lt",
    "gte",
    "lte",
    "contains",
    "startsWith",
    "endsWith",
)
DIFFICULTY_LEVELS: tuple[str, ...] = ("basic", "intermediate", "advanced")


@dataclass(frozen=True)
class ParameterCondition:
    """Comparison applied to the value of the parameter a rule depends on."""

    operator: str
    value: Any = None


@dataclass(frozen=True)
class ParameterDependency:
    """Rule changing a parameter's state when another parameter matches."""

    depends_on: str
    condition: ParameterCondition
    action: str


@dataclass(frozen=True)
class ParameterPattern:
    """Optional regular expression a text value must match."""

    pattern: str
    message: str | None = None


@dataclass(frozen=True)
class TemplateParameter:
    """Single named, typed input slot on a calculation template."""

    id: str
    name: str
    label: str
    type: str
    required: bool = False
    unit: str | None = None
    default_value: Any = None
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: tuple[str, ...] = ()
    placeholder: str | None = None
    tooltip: str | None = None
    validation: ParameterPattern | None = None
    dependencies: tuple[ParameterDependency, ...] = ()

    @property
    def dependency_names(self) -> tuple[str, ...]:
        """Return the names of the parameters this parameter depends on."""

        return tuple(dependency.depends_on for dependency in self.dependencies)


@dataclass(frozen=True)
class CalculationTemplate:
    """Reusable definition of an engineering calculation."""

    id: str
    name: str
    description: str
    category: str
    subcategory: str | None
    difficulty: str
    rating: float
    usage_count: int
    last_updated: datetime | None
    trending: bool
    popular: bool
    verified: bool
    nec_reference: str | None = None
    formula: str | None = None
    source: str | None = None
    version: int = 1
    profession: frozenset[str] = field(default_factory=frozenset)
    tags: tuple[str, ...] = ()
    parameters: tuple[TemplateParameter, ...] = ()
    is_favorite: bool = False

    def with_favorite(self, is_favorite: bool) -> "CalculationTemplate":
        """Return a copy of the template carrying the given favorite flag."""

        if self.is_favorite == is_favorite:
            return self
        return replace(self, is_favorite=is_favorite)

    def get_parameter(self, parameter_id: str) -> TemplateParameter | None:
        """Return the parameter with ``parameter_id`` if the template defines it."""

        for parameter in self.parameters:
            if parameter.id == parameter_id:
                return parameter
        return None


__all__ = [
    "CONDITION_OPERATORS",
    "DEPENDENCY_ACTIONS",
    "DIFFICULTY_LEVELS",
    "PARAMETER_TYPES",
    "CalculationTemplate",
    "ParameterCondition",
    "ParameterDependency",
    "ParameterPattern",
    "TemplateParameter",
]
