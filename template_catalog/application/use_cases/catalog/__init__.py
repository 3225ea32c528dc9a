"""Catalog query use cases."""

from .engine import CatalogLoadResult, CatalogQueryEngine, RejectedTemplate
from .facets import build_category_facets
from .query import filter_templates, sort_templates
from .stats import get_template_stats

__all__ = [
    "CatalogLoadResult",
    "CatalogQueryEngine",
    "RejectedTemplate",
    "build_category_facets",
    "filter_templates",
    "get_template_stats",
    "sort_templates",
]
