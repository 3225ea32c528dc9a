"""Catalog query engine owning the loaded templates and the favorites set."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from template_catalog.application.use_cases.parameters import (
    ensure_valid_parameters,
    parse_template_record,
)
from template_catalog.domain.entities import (
    CalculationTemplate,
    TemplateCategory,
    TemplateFilters,
    TemplateStats,
)
from template_catalog.domain.errors import InvalidSchemaError, RepositoryUnavailableError
from template_catalog.domain.repositories import FavoritesStore, TemplateSource

from .facets import build_category_facets
from .query import filter_templates, sort_templates
from .stats import get_template_stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RejectedTemplate:
    """Template record excluded from the catalog at load time."""

    template_id: str | None
    reason: str


@dataclass(frozen=True)
class CatalogLoadResult:
    """Outcome of a one-shot catalog load."""

    loaded: int
    rejected: tuple[RejectedTemplate, ...] = ()
    error: RepositoryUnavailableError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class CatalogQueryEngine:
    """Filter, sort, facet and favorite a snapshot of calculation templates.

    The engine is loaded once through :meth:`load`. Favorites are merged into
    templates on every read and written back to the store after each toggle.
    """

    def __init__(
        self,
        source: TemplateSource,
        favorites_store: FavoritesStore,
        *,
        only_verified_facets: bool = True,
    ) -> None:
        self._source = source
        self._favorites_store = favorites_store
        self._only_verified_facets = only_verified_facets
        self._templates: list[CalculationTemplate] = []
        self._template_ids: set[str] = set()
        # dict keys keep the persisted order stable across toggles
        self._favorites: dict[str, None] = {}
        self._facets: list[TemplateCategory] | None = None

    def load(self) -> CatalogLoadResult:
        """Fetch records and favorites, excluding templates with invalid schemas.

        A repository failure leaves the engine with an empty catalog and is
        reported in the returned result instead of being raised.
        """

        self._templates = []
        self._template_ids = set()
        self._favorites = {}
        self._facets = None

        try:
            records = self._source.list_records()
        except RepositoryUnavailableError as exc:
            logger.warning("Catalog repository unavailable, serving an empty catalog: %s", exc)
            return CatalogLoadResult(loaded=0, error=exc)

        rejected: list[RejectedTemplate] = []
        for record in records:
            try:
                template = parse_template_record(record)
                ensure_valid_parameters(template.parameters, template_id=template.id)
                if template.id in self._template_ids:
                    raise InvalidSchemaError(
                        f"El identificador '{template.id}' está duplicado",
                        template_id=template.id,
                    )
            except InvalidSchemaError as exc:
                logger.warning(
                    "Template %s excluded from the catalog: %s",
                    exc.template_id or "<sin id>",
                    exc,
                )
                rejected.append(RejectedTemplate(template_id=exc.template_id, reason=str(exc)))
                continue
            self._templates.append(template)
            self._template_ids.add(template.id)

        try:
            favorite_ids = self._favorites_store.load()
        except RepositoryUnavailableError as exc:
            logger.warning("Favorites could not be loaded, continuing without them: %s", exc)
            favorite_ids = []
        self._favorites = dict.fromkeys(favorite_ids)

        logger.info(
            "Catalog loaded with %s templates (%s rejected, %s favorites)",
            len(self._templates),
            len(rejected),
            len(self._favorites),
        )
        return CatalogLoadResult(loaded=len(self._templates), rejected=tuple(rejected))

    @property
    def templates(self) -> list[CalculationTemplate]:
        """Return every loaded template with its favorite flag merged in."""

        return [self._merge_favorite(template) for template in self._templates]

    @property
    def favorite_ids(self) -> list[str]:
        return list(self._favorites)

    def _merge_favorite(self, template: CalculationTemplate) -> CalculationTemplate:
        return template.with_favorite(template.id in self._favorites)

    def get_template(self, template_id: str) -> CalculationTemplate | None:
        for template in self._templates:
            if template.id == template_id:
                return self._merge_favorite(template)
        return None

    def get_filtered_templates(
        self, filters: TemplateFilters | None = None
    ) -> list[CalculationTemplate]:
        """Return the templates matching ``filters`` in the requested order."""

        filters = filters or TemplateFilters()
        matching = filter_templates(self.templates, filters)
        return sort_templates(matching, filters.effective_sort)

    def get_categories(self) -> list[TemplateCategory]:
        """Return category facets, recomputed only after the source changes."""

        if self._facets is None:
            self._facets = build_category_facets(
                self._templates, only_verified=self._only_verified_facets
            )
        return list(self._facets)

    def is_favorite(self, template_id: str) -> bool:
        return template_id in self._favorites

    def toggle_favorite(self, template_id: str) -> bool:
        """Flip the favorite state of ``template_id`` and persist it.

        Returns the new state. If the store rejects the write the in-memory
        set is restored and the error propagates.
        """

        if template_id not in self._template_ids:
            raise ValueError("Plantilla no encontrada")

        previous = dict(self._favorites)
        was_favorite = template_id in self._favorites
        if was_favorite:
            del self._favorites[template_id]
        else:
            self._favorites[template_id] = None

        try:
            self._favorites_store.save(list(self._favorites))
        except RepositoryUnavailableError:
            self._favorites = previous
            logger.warning("Favorite toggle for template %s reverted", template_id)
            raise

        return not was_favorite

    def get_template_stats(
        self, templates: Sequence[CalculationTemplate] | None = None
    ) -> TemplateStats:
        """Return statistics for ``templates`` or, by default, the whole catalog."""

        return get_template_stats(self.templates if templates is None else templates)


__all__ = ["CatalogLoadResult", "CatalogQueryEngine", "RejectedTemplate"]
