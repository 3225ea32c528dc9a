"""Use case for computing category facet counts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import replace

from template_catalog.domain.entities import (
    TEMPLATE_CATEGORIES,
    CalculationTemplate,
    TemplateCategory,
)


def build_category_facets(
    templates: Iterable[CalculationTemplate],
    *,
    only_verified: bool = True,
    categories: Sequence[TemplateCategory] = TEMPLATE_CATEGORIES,
) -> list[TemplateCategory]:
    """Return every known category with its template and subcategory counts.

    Counts use exact matches on ``category`` and on the
    ``(category, subcategory)`` pair. Search, difficulty and favorites never
    influence facets; only the verified pre-filter does.
    """

    category_counts: Counter[str] = Counter()
    pair_counts: Counter[tuple[str, str | None]] = Counter()
    for template in templates:
        if only_verified and template.verified is not True:
            continue
        category_counts[template.category] += 1
        pair_counts[(template.category, template.subcategory)] += 1

    facets: list[TemplateCategory] = []
    for category in categories:
        subcategories = tuple(
            replace(subcategory, count=pair_counts[(category.id, subcategory.id)])
            for subcategory in category.subcategories
        )
        facets.append(
            replace(
                category,
                count=category_counts[category.id],
                subcategories=subcategories,
            )
        )
    return facets


__all__ = ["build_category_facets"]
