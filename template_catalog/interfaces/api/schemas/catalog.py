"""Schemas for catalog endpoints."""

from datetime import datetime
from typing import Any

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogModel(BaseModel):
    """Base read model serialized with the camelCase keys of template records."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class ParameterConditionRead(CatalogModel):
    operator: str
    value: Any = None


class ParameterDependencyRead(CatalogModel):
    depends_on: str
    condition: ParameterConditionRead
    action: str


class ParameterPatternRead(CatalogModel):
    pattern: str
    message: str | None = None


class TemplateParameterRead(CatalogModel):
    id: str
    name: str
    label: str
    type: str
    required: bool
    unit: str | None = None
    default_value: Any = None
    min: float | None = None
    max: float | None = None
    step: float | None = None
    options: list[str] = Field(default_factory=list)
    placeholder: str | None = None
    tooltip: str | None = None
    validation: ParameterPatternRead | None = None
    dependencies: list[ParameterDependencyRead] = Field(default_factory=list)


class CalculationTemplateRead(CatalogModel):
    id: str
    name: str
    description: str
    category: str
    subcategory: str | None
    difficulty: str
    nec_reference: str | None
    formula: str | None
    source: str | None
    version: int
    rating: float
    usage_count: int
    last_updated: datetime | None
    trending: bool
    popular: bool
    verified: bool
    is_favorite: bool
    profession: list[str]
    tags: list[str]
    parameters: list[TemplateParameterRead]


class TemplateSubcategoryRead(CatalogModel):
    id: str
    name: str
    count: int


class TemplateCategoryRead(CatalogModel):
    id: str
    name: str
    description: str
    count: int
    subcategories: list[TemplateSubcategoryRead]


class CategoryStatsRead(CatalogModel):
    count: int
    avg_rating: float
    total_usage: int


class TemplateStatsRead(CatalogModel):
    total: int
    verified_count: int
    avg_rating: float
    total_usage: int
    trending_count: int
    popular_count: int
    by_category: dict[str, CategoryStatsRead]
    by_difficulty: dict[str, int]


class FavoriteToggleRead(CatalogModel):
    template_id: str
    is_favorite: bool


class ParameterValuesPayload(BaseModel):
    """Input values keyed by parameter name."""

    values: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationOutcomeRead(CatalogModel):
    code: str | None
    message: str | None


class ParameterStateRead(CatalogModel):
    visible: bool
    required: bool
    enabled: bool


class ParameterValidationRead(CatalogModel):
    is_valid: bool
    errors: dict[str, ValidationOutcomeRead]
    warnings: dict[str, str]
    states: dict[str, ParameterStateRead]


class ParameterDefaultsRead(CatalogModel):
    values: dict[str, Any]


__all__ = [
    "CalculationTemplateRead",
    "CategoryStatsRead",
    "FavoriteToggleRead",
    "ParameterConditionRead",
    "ParameterDefaultsRead",
    "ParameterDependencyRead",
    "ParameterPatternRead",
    "ParameterStateRead",
    "ParameterValidationRead",
    "ParameterValuesPayload",
    "TemplateCategoryRead",
    "TemplateParameterRead",
    "TemplateStatsRead",
    "TemplateSubcategoryRead",
    "ValidationOutcomeRead",
]
