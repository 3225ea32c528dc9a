"""SQLAlchemy model for calculation templates."""

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.dialects.mssql import JSON as MSSQLJSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import expression
from sqlalchemy.types import JSON

from template_catalog.infrastructure.database import Base
from template_catalog.utils import now_in_app_timezone

_template_json_type = (
    JSONB().with_variant(JSON(), "sqlite").with_variant(MSSQLJSON(), "mssql")
)


class CalculationTemplateModel(Base):
    """Database representation of a calculation template definition."""

    __tablename__ = "calculation_template"

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(150), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=False, index=True)
    subcategory = Column(String(50), nullable=True)
    difficulty = Column(String(20), nullable=True)
    nec_reference = Column(String(255), nullable=True)
    formula = Column(Text, nullable=True)
    source = Column(String(20), nullable=True)
    version = Column(Integer, nullable=False, default=1)
    rating = Column(Float, nullable=False, default=0)
    usage_count = Column(Integer, nullable=False, default=0)
    trending = Column(Boolean, nullable=True)
    popular = Column(Boolean, nullable=True)
    verified = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    profession = Column(_template_json_type, nullable=True)
    tags = Column(_template_json_type, nullable=True)
    parameters = Column(_template_json_type, nullable=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=now_in_app_timezone
    )
    updated_at = Column(
        DateTime(timezone=True), nullable=True, onupdate=now_in_app_timezone
    )
    is_active = Column(Boolean, nullable=False, default=True)
    deleted = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )


__all__ = ["CalculationTemplateModel"]
