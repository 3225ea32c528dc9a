"""Filtering and ordering of catalog templates."""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from template_catalog.domain.entities import CalculationTemplate, TemplateFilters


def _normalize_label(label: str) -> str:
    normalized = unicodedata.normalize("NFKD", str(label))
    ascii_label = "".join(char for char in normalized if not unicodedata.combining(char))
    collapsed = re.sub(r"\s+", " ", ascii_label)
    return collapsed.casefold().strip()


def _matches_search(template: CalculationTemplate, term: str) -> bool:
    candidates: list[str] = [template.name, template.description]
    candidates.extend(template.tags)
    if template.nec_reference:
        candidates.append(template.nec_reference)
    return any(term in candidate.lower() for candidate in candidates)


def filter_templates(
    templates: Iterable[CalculationTemplate],
    filters: TemplateFilters,
) -> list[CalculationTemplate]:
    """Apply every set filter field, in pipeline order, to ``templates``.

    The result is always a subset of the input in the input order.
    """

    result = list(templates)
    if filters.show_only_verified:
        result = [template for template in result if template.verified is True]
    if filters.category:
        result = [template for template in result if template.category == filters.category]
    if filters.subcategory:
        result = [
            template for template in result if template.subcategory == filters.subcategory
        ]
    if filters.show_only_favorites:
        result = [template for template in result if template.is_favorite is True]
    if filters.difficulty:
        result = [
            template for template in result if template.difficulty == filters.difficulty
        ]
    if filters.profession:
        result = [
            template for template in result if filters.profession in template.profession
        ]

    term = (filters.search_term or "").strip().lower()
    if term:
        result = [template for template in result if _matches_search(template, term)]
    return result


def _recent_key(template: CalculationTemplate) -> tuple[bool, float]:
    if template.last_updated is None:
        return (True, 0.0)
    return (False, -template.last_updated.timestamp())


_SORT_KEYS: dict[str, Callable[[CalculationTemplate], Any]] = {
    "popular": lambda template: -template.usage_count,
    "rating": lambda template: -template.rating,
    "trending": lambda template: (not template.trending, -template.usage_count),
    "recent": _recent_key,
    "name": lambda template: (_normalize_label(template.name), template.name),
}


def sort_templates(
    templates: Sequence[CalculationTemplate], sort_by: str
) -> list[CalculationTemplate]:
    """Return ``templates`` ordered by ``sort_by``.

    ``sorted`` is stable, so templates with equal keys keep their input
    order. Unknown options order by popularity.
    """

    key = _SORT_KEYS.get(sort_by, _SORT_KEYS["popular"])
    return sorted(templates, key=key)


__all__ = ["filter_templates", "sort_templates"]
