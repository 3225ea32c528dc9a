"""Persistence layer for calculation templates."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import false, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from template_catalog.domain.errors import RepositoryUnavailableError
from template_catalog.infrastructure.models import CalculationTemplateModel
from template_catalog.utils import ensure_app_timezone, parse_app_datetime

logger = logging.getLogger(__name__)


class CalculationTemplateRepository:
    """Provide the raw template records consumed by the catalog engine."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_records(self) -> Sequence[dict[str, Any]]:
        """Return every active template as a JSON-shaped record."""

        try:
            models = (
                self.session.query(CalculationTemplateModel)
                .filter(CalculationTemplateModel.deleted == false())
                .filter(CalculationTemplateModel.is_active == true())
                .order_by(CalculationTemplateModel.created_at, CalculationTemplateModel.id)
                .all()
            )
        except SQLAlchemyError as exc:
            logger.exception("Error al consultar las plantillas de cálculo")
            raise RepositoryUnavailableError(
                "No se pudo consultar el repositorio de plantillas"
            ) from exc
        return [self._to_record(model) for model in models]

    def save_record(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Insert or replace the template identified by ``record['id']``."""

        template_id = str(record["id"]).strip()
        try:
            model = self._get_model(template_id)
            if model is None:
                model = CalculationTemplateModel(id=template_id)
            self._apply_record_to_model(model, record)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise RepositoryUnavailableError(
                f"No se pudo guardar la plantilla '{template_id}'"
            ) from exc
        return self._to_record(model)

    def _get_model(self, template_id: str) -> CalculationTemplateModel | None:
        return (
            self.session.query(CalculationTemplateModel)
            .filter(CalculationTemplateModel.id == template_id)
            .first()
        )

    @staticmethod
    def _to_record(model: CalculationTemplateModel) -> dict[str, Any]:
        last_updated = ensure_app_timezone(model.updated_at or model.created_at)
        return {
            "id": model.id,
            "name": model.name,
            "description": model.description or "",
            "category": model.category,
            "subcategory": model.subcategory,
            "difficulty": model.difficulty,
            "necReference": model.nec_reference,
            "formula": model.formula,
            "source": model.source,
            "version": model.version,
            "rating": model.rating,
            "usageCount": model.usage_count,
            "trending": model.trending,
            "popular": model.popular,
            "verified": model.verified,
            "profession": list(model.profession or []),
            "tags": list(model.tags or []),
            "parameters": list(model.parameters or []),
            "lastUpdated": last_updated.isoformat() if last_updated else None,
        }

    @staticmethod
    def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
        for key in keys:
            if record.get(key) is not None:
                return record[key]
        return None

    @classmethod
    def _apply_record_to_model(
        cls, model: CalculationTemplateModel, record: Mapping[str, Any]
    ) -> None:
        # legacy keys are stored under their canonical columns
        profession = cls._first_present(record, "profession", "targetProfession")
        if isinstance(profession, str):
            profession = [profession]
        model.name = str(record.get("name") or "").strip()
        model.description = record.get("description")
        model.category = cls._first_present(record, "category", "type")
        model.subcategory = record.get("subcategory")
        model.difficulty = record.get("difficulty")
        model.nec_reference = record.get("necReference")
        model.formula = record.get("formula")
        model.source = record.get("source")
        model.version = int(record.get("version") or 1)
        model.rating = float(cls._first_present(record, "rating", "averageRating") or 0)
        model.usage_count = int(record.get("usageCount") or 0)
        model.trending = record.get("trending")
        model.popular = record.get("popular")
        model.verified = bool(cls._first_present(record, "verified", "isVerified"))
        model.profession = list(profession or [])
        model.tags = list(record.get("tags") or [])
        model.parameters = list(record.get("parameters") or [])
        model.updated_at = parse_app_datetime(
            cls._first_present(record, "lastUpdated", "updatedAt")
        )
        model.is_active = True
        model.deleted = False


__all__ = ["CalculationTemplateRepository"]
