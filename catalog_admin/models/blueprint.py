"""Blueprint (reusable project template) models."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.db import Base, utcnow
from catalog_admin.utils.ids import id_factory


class Blueprint(Base):
    """Template: ordered steps + tool roles, optionally tagged with industries/niches."""

    __tablename__ = "blueprints"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("blueprint"))
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class BlueprintStep(Base):
    """Step ordered by step_order (>= 1). Duplicates and gaps are allowed."""

    __tablename__ = "blueprint_steps"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("blueprint_step"))
    blueprint_id: Mapped[str] = mapped_column(String(32), ForeignKey("blueprints.id"), nullable=False)
    step_order: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class BlueprintTool(Base):
    """Tool used by a blueprint, with its role."""

    __tablename__ = "blueprint_tools"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("blueprint_tool"))
    blueprint_id: Mapped[str] = mapped_column(String(32), ForeignKey("blueprints.id"), nullable=False)
    tool_id: Mapped[str] = mapped_column(String(32), ForeignKey("tools.id"), nullable=False)
    role_in_blueprint: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class BlueprintIndustry(Base):
    """Blueprint <-> industry tag."""

    __tablename__ = "blueprint_industries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("blueprint_industry"))
    blueprint_id: Mapped[str] = mapped_column(String(32), ForeignKey("blueprints.id"), nullable=False)
    industry_id: Mapped[str] = mapped_column(String(32), ForeignKey("industries.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class BlueprintNiche(Base):
    """Blueprint <-> niche tag."""

    __tablename__ = "blueprint_niches"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("blueprint_niche"))
    blueprint_id: Mapped[str] = mapped_column(String(32), ForeignKey("blueprints.id"), nullable=False)
    niche_id: Mapped[str] = mapped_column(String(32), ForeignKey("niches.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
