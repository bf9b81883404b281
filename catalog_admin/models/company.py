"""Company model and its catalog junction tables."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.db import Base, utcnow
from catalog_admin.utils.ids import id_factory


class Company(Base):
    """
    Client company.
    status: active | inactive | archived (no transition rules).
    """

    __tablename__ = "companies"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("company"))
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    contact_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(320), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(32), default="active", server_default="active", nullable=False)
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


class CompanyIndustry(Base):
    """Company <-> industry link."""

    __tablename__ = "company_industries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("company_industry"))
    company_id: Mapped[str] = mapped_column(String(32), ForeignKey("companies.id"), nullable=False)
    industry_id: Mapped[str] = mapped_column(String(32), ForeignKey("industries.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class CompanyNiche(Base):
    """Company <-> niche link."""

    __tablename__ = "company_niches"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("company_niche"))
    company_id: Mapped[str] = mapped_column(String(32), ForeignKey("companies.id"), nullable=False)
    niche_id: Mapped[str] = mapped_column(String(32), ForeignKey("niches.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class CompanyProduct(Base):
    """Company <-> product link, with optional notes."""

    __tablename__ = "company_products"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("company_product"))
    company_id: Mapped[str] = mapped_column(String(32), ForeignKey("companies.id"), nullable=False)
    product_id: Mapped[str] = mapped_column(String(32), ForeignKey("products.id"), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )


class CompanyService(Base):
    """Company <-> service link, with optional notes."""

    __tablename__ = "company_services"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("company_service"))
    company_id: Mapped[str] = mapped_column(String(32), ForeignKey("companies.id"), nullable=False)
    service_id: Mapped[str] = mapped_column(String(32), ForeignKey("services.id"), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
