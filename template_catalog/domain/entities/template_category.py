"""Domain entities representing catalog category facets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TemplateSubcategory:
    """Subcategory facet with the number of templates it reaches."""

    id: str
    name: str
    count: int = 0


@dataclass(frozen=True)
class TemplateCategory:
    """Category facet with its subcategories and template count."""

    id: str
    name: str
    description: str
    count: int = 0
    subcategories: tuple[TemplateSubcategory, ...] = ()


TEMPLATE_CATEGORIES: tuple[TemplateCategory, ...] = (
    TemplateCategory(
        id="structural",
        name="Estructural",
        description="Análisis y diseño estructural",
        subcategories=(
            TemplateSubcategory(id="concrete", name="Hormigón Armado"),
            TemplateSubcategory(id="steel", name="Estructuras de Acero"),
            TemplateSubcategory(id="wood", name="Estructuras de Madera"),
        ),
    ),
    TemplateCategory(
        id="electrical",
        name="Eléctrico",
        description="Instalaciones eléctricas",
        subcategories=(
            TemplateSubcategory(id="power", name="Sistemas de Potencia"),
            TemplateSubcategory(id="lighting", name="Iluminación"),
            TemplateSubcategory(id="protection", name="Protecciones"),
        ),
    ),
    TemplateCategory(
        id="architectural",
        name="Arquitectónico",
        description="Diseño arquitectónico",
        subcategories=(
            TemplateSubcategory(id="areas", name="Áreas y Volúmenes"),
            TemplateSubcategory(id="accessibility", name="Accesibilidad"),
        ),
    ),
    TemplateCategory(
        id="hydraulic",
        name="Hidráulico",
        description="Sistemas hidráulicos",
        subcategories=(
            TemplateSubcategory(id="water", name="Agua Potable"),
            TemplateSubcategory(id="drainage", name="Drenajes"),
        ),
    ),
    TemplateCategory(
        id="custom",
        name="Personalizada",
        description="Plantillas personalizadas",
    ),
)


__all__ = ["TEMPLATE_CATEGORIES", "TemplateCategory", "TemplateSubcategory"]
