"""Tool registry model."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.db import Base, utcnow
from catalog_admin.utils.ids import id_factory


class Tool(Base):
    """
    Tool used by projects and blueprints.
    category: ai_platform | api | messaging | analytics | crm | payment | hosting | other.
    """

    __tablename__ = "tools"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("tool"))
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    category: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
