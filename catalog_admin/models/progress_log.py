"""Progress log model (append-only project timeline)."""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from catalog_admin.db import Base, utcnow
from catalog_admin.utils.ids import id_factory


class ProgressLog(Base):
    """
    phase: discovery | design | build | test | deploy | handoff.
    status: in_progress | completed | blocked.
    """

    __tablename__ = "progress_logs"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=id_factory("progress"))
    project_id: Mapped[str] = mapped_column(String(32), ForeignKey("projects.id"), nullable=False)
    phase: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[str] = mapped_column(String(32), default="in_progress", server_default="in_progress", nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    logged_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    logged_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
    )
