"""Rutas para consultar el catálogo de plantillas de cálculo."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from template_catalog.application.use_cases import CatalogQueryEngine
from template_catalog.application.use_cases.parameters import (
    build_initial_values,
    validate_parameter_values,
)
from template_catalog.domain.entities import (
    CalculationTemplate,
    ParameterValidation,
    TemplateCategory,
    TemplateFilters,
    TemplateParameter,
    TemplateStats,
)
from template_catalog.domain.errors import RepositoryUnavailableError
from template_catalog.interfaces.api.dependencies import (
    get_catalog_engine,
    get_template_filters,
)
from template_catalog.interfaces.api.schemas import (
    CalculationTemplateRead,
    FavoriteToggleRead,
    ParameterDefaultsRead,
    ParameterValidationRead,
    ParameterValuesPayload,
    TemplateCategoryRead,
    TemplateStatsRead,
)

router = APIRouter(prefix="/catalog", tags=["catalog"])


def _parameter_payload(parameter: TemplateParameter) -> dict[str, object]:
    validation = None
    if parameter.validation is not None:
        validation = {
            "pattern": parameter.validation.pattern,
            "message": parameter.validation.message,
        }
    return {
        "id": parameter.id,
        "name": parameter.name,
        "label": parameter.label,
        "type": parameter.type,
        "required": parameter.required,
        "unit": parameter.unit,
        "default_value": parameter.default_value,
        "min": parameter.min,
        "max": parameter.max,
        "step": parameter.step,
        "options": list(parameter.options),
        "placeholder": parameter.placeholder,
        "tooltip": parameter.tooltip,
        "validation": validation,
        "dependencies": [
            {
                "depends_on": dependency.depends_on,
                "condition": {
                    "operator": dependency.condition.operator,
                    "value": dependency.condition.value,
                },
                "action": dependency.action,
            }
            for dependency in parameter.dependencies
        ],
    }


def _template_to_read_model(template: CalculationTemplate) -> CalculationTemplateRead:
    payload = {
        "id": template.id,
        "name": template.name,
        "description": template.description,
        "category": template.category,
        "subcategory": template.subcategory,
        "difficulty": template.difficulty,
        "nec_reference": template.nec_reference,
        "formula": template.formula,
        "source": template.source,
        "version": template.version,
        "rating": template.rating,
        "usage_count": template.usage_count,
        "last_updated": template.last_updated,
        "trending": template.trending,
        "popular": template.popular,
        "verified": template.verified,
        "is_favorite": template.is_favorite,
        "profession": sorted(template.profession),
        "tags": list(template.tags),
        "parameters": [_parameter_payload(parameter) for parameter in template.parameters],
    }
    return CalculationTemplateRead.model_validate(payload)


def _category_to_read_model(category: TemplateCategory) -> TemplateCategoryRead:
    return TemplateCategoryRead.model_validate(category, from_attributes=True)


def _stats_to_read_model(stats: TemplateStats) -> TemplateStatsRead:
    return TemplateStatsRead.model_validate(stats, from_attributes=True)


def _validation_to_read_model(validation: ParameterValidation) -> ParameterValidationRead:
    payload = {
        "is_valid": validation.is_valid,
        "errors": {
            name: {"code": outcome.code, "message": outcome.message}
            for name, outcome in validation.errors.items()
        },
        "warnings": dict(validation.warnings),
        "states": {
            parameter_id: {
                "visible": state.visible,
                "required": state.required,
                "enabled": state.enabled,
            }
            for parameter_id, state in validation.states.items()
        },
    }
    return ParameterValidationRead.model_validate(payload)


def _get_template_or_404(engine: CatalogQueryEngine, template_id: str) -> CalculationTemplate:
    template = engine.get_template(template_id)
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Plantilla no encontrada"
        )
    return template


@router.get("/templates", response_model=list[CalculationTemplateRead])
def list_catalog_templates(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    filters: TemplateFilters = Depends(get_template_filters),
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> list[CalculationTemplateRead]:
    """Devuelve las plantillas que cumplen los filtros en el orden solicitado."""

    templates = engine.get_filtered_templates(filters)
    return [_template_to_read_model(template) for template in templates[skip : skip + limit]]


@router.get("/templates/{template_id}", response_model=CalculationTemplateRead)
def read_catalog_template(
    template_id: str,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> CalculationTemplateRead:
    """Obtiene una plantilla del catálogo por su identificador."""

    return _template_to_read_model(_get_template_or_404(engine, template_id))


@router.get("/categories", response_model=list[TemplateCategoryRead])
def list_catalog_categories(
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> list[TemplateCategoryRead]:
    """Devuelve las categorías con el número de plantillas de cada una."""

    return [_category_to_read_model(category) for category in engine.get_categories()]


@router.get("/stats", response_model=TemplateStatsRead)
def read_catalog_stats(
    filters: TemplateFilters = Depends(get_template_filters),
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> TemplateStatsRead:
    """Calcula las estadísticas de las plantillas que cumplen los filtros."""

    templates = engine.get_filtered_templates(filters)
    return _stats_to_read_model(engine.get_template_stats(templates))


@router.post("/templates/{template_id}/favorite", response_model=FavoriteToggleRead)
def toggle_catalog_favorite(
    template_id: str,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> FavoriteToggleRead:
    """Marca o desmarca una plantilla como favorita."""

    try:
        is_favorite = engine.toggle_favorite(template_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RepositoryUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc

    return FavoriteToggleRead(template_id=template_id, is_favorite=is_favorite)


@router.get(
    "/templates/{template_id}/parameters/defaults",
    response_model=ParameterDefaultsRead,
)
def read_parameter_defaults(
    template_id: str,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> ParameterDefaultsRead:
    """Devuelve los valores iniciales del formulario de la plantilla."""

    template = _get_template_or_404(engine, template_id)
    return ParameterDefaultsRead(values=build_initial_values(template.parameters))


@router.post(
    "/templates/{template_id}/parameters/validate",
    response_model=ParameterValidationRead,
)
def validate_template_parameters(
    template_id: str,
    payload: ParameterValuesPayload,
    engine: CatalogQueryEngine = Depends(get_catalog_engine),
) -> ParameterValidationRead:
    """Valida los valores ingresados aplicando las dependencias de la plantilla."""

    template = _get_template_or_404(engine, template_id)
    validation = validate_parameter_values(template.parameters, payload.values)
    return _validation_to_read_model(validation)
