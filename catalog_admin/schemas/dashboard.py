"""Dashboard and analytics read models."""
from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class EntityCounts(BaseModel):
    companies: int
    projects: int
    tools: int
    blueprints: int


class StatusCount(BaseModel):
    status: str
    count: int


class RecentLog(BaseModel):
    project_id: str
    project_name: str
    phase: str
    note: Optional[str] = None
    logged_at: datetime


class DashboardSummary(BaseModel):
    """Counters and recent activity for the dashboard home page."""

    counts: EntityCounts
    status_distribution: List[StatusCount] = Field(default_factory=list)
    recent_logs: List[RecentLog] = Field(default_factory=list)


class IndustryProjectStats(BaseModel):
    industry: str
    total: int
    completed: int


class ToolUsage(BaseModel):
    tool_id: str
    name: str
    count: int


class AnalyticsOut(BaseModel):
    """Per-industry project stats, top tools, projects by status."""

    by_industry: List[IndustryProjectStats] = Field(default_factory=list)
    tool_usage: List[ToolUsage] = Field(default_factory=list)
    projects_by_status: List[StatusCount] = Field(default_factory=list)


class KanbanCard(BaseModel):
    id: str
    name: str
    status: str
    company_name: str
    target_date: Optional[date] = None


class KanbanBoard(BaseModel):
    """Live projects grouped by the four linear statuses."""

    columns: Dict[str, List[KanbanCard]]
