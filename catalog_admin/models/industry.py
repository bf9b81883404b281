"""Industry and niche models (catalog classification)."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.db import Base, utcnow
from catalog_admin.utils.ids import id_factory


class Industry(Base):
    """Top-level classification. name is unique across all rows, deleted or not."""

    __tablename__ = "industries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("industry"))
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)


class Niche(Base):
    """
    Sub-classification inside one industry; never re-parented.
    name is unique per industry_id.
    """

    __tablename__ = "niches"
    __table_args__ = (UniqueConstraint("industry_id", "name", name="uq_niches_industry_name"),)

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("niche"))
    industry_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("industries.id"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
