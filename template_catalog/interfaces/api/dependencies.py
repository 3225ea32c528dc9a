"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, Query, status
from sqlalchemy.orm import Session

from template_catalog.application.use_cases import CatalogQueryEngine
from template_catalog.config import get_settings
from template_catalog.domain.entities import DEFAULT_SORT, TemplateFilters
from template_catalog.infrastructure.database import get_db
from template_catalog.infrastructure.repositories import (
    CalculationTemplateRepository,
    FavoritesRepository,
    favorites_key,
)


def get_favorites_owner(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str | None:
    """Return the owner whose favorites should be read and written."""

    if x_user_id is None:
        return None
    return x_user_id.strip() or None


def get_catalog_engine(
    db: Session = Depends(get_db),
    owner: str | None = Depends(get_favorites_owner),
) -> CatalogQueryEngine:
    """Build and load the catalog engine for the current request."""

    settings = get_settings()
    engine = CatalogQueryEngine(
        CalculationTemplateRepository(db),
        FavoritesRepository(
            db, key=favorites_key(owner, base_key=settings.favorites_store_key)
        ),
        only_verified_facets=settings.catalog_only_verified_facets,
    )
    result = engine.load()
    if result.error is not None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=str(result.error),
        )
    return engine


def get_template_filters(
    category: str | None = None,
    subcategory: str | None = None,
    search: str | None = None,
    sort_by: str = Query(default=DEFAULT_SORT, alias="sortBy"),
    only_favorites: bool = Query(default=False, alias="onlyFavorites"),
    only_verified: bool = Query(default=False, alias="onlyVerified"),
    difficulty: str | None = None,
    profession: str | None = None,
) -> TemplateFilters:
    """Translate query string parameters into catalog filters."""

    return TemplateFilters(
        category=category,
        subcategory=subcategory,
        search_term=search or "",
        sort_by=sort_by,
        show_only_favorites=only_favorites,
        show_only_verified=only_verified,
        difficulty=difficulty,
        profession=profession,
    )


__all__ = ["get_catalog_engine", "get_favorites_owner", "get_template_filters"]
